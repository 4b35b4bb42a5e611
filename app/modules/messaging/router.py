# app/modules/messaging/router.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from app.shared.services.whatsapp_client import WhatsAppGatewayClient
from .service import MessagingService
from .schemas import SendWhatsAppResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

def get_whatsapp_client() -> WhatsAppGatewayClient:
    return WhatsAppGatewayClient()

@router.options("/send-whatsapp", include_in_schema=False)
async def send_whatsapp_preflight():
    """Bare OPTIONS only; browser preflights are answered by the global CORSMiddleware"""
    return PlainTextResponse("ok", headers=CORS_HEADERS)

@router.post("/send-whatsapp", response_model=SendWhatsAppResponse)
async def send_whatsapp(
    request: Request,
    client: WhatsAppGatewayClient = Depends(get_whatsapp_client)
):
    """
    Forward a WhatsApp message to the gateway

    **Body:** `{"target": "628111" | ["628111", "628222"], "message": "..."}`

    **Response:** always HTTP 200. `success` reflects the gateway outcome,
    `data` holds its parsed body (or `{"raw": text}` when it is not JSON) and
    `error` is set when the request could not be forwarded at all.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        logger.error(f"❌ Invalid send-whatsapp body: {e}")
        result = SendWhatsAppResponse(success=False, error=str(e))
    else:
        if isinstance(payload, dict):
            result = await MessagingService(client).forward(payload)
        else:
            result = SendWhatsAppResponse(success=False, error="Request body must be a JSON object")

    content = {k: v for k, v in result.model_dump().items() if v is not None}
    return JSONResponse(
        status_code=200,
        content=content,
        headers={"Access-Control-Allow-Origin": "*"}
    )
