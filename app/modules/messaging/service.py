# app/modules/messaging/service.py
from typing import Any, Dict, List, Union
import logging

from app.shared.services.whatsapp_client import WhatsAppGatewayClient
from .schemas import SendWhatsAppRequest, SendWhatsAppResponse

logger = logging.getLogger(__name__)

def normalize_target(target: Union[List[Union[str, int, None]], str, int, None]) -> str:
    """List targets are comma-joined without empties; anything else is stringified"""
    if isinstance(target, list):
        return ",".join(str(t) for t in target if t)
    if target is None:
        return ""
    return str(target).strip()

class MessagingService:
    def __init__(self, client: WhatsAppGatewayClient):
        self.client = client

    async def forward(self, payload: Dict[str, Any]) -> SendWhatsAppResponse:
        """Forward a send request; failures are reported in the envelope, never raised"""
        try:
            request = SendWhatsAppRequest.model_validate(payload)
            target = normalize_target(request.target)
            logger.info(f"📩 Incoming request: target={target} message={request.message!r}")

            result = await self.client.send(target, request.message)
            return SendWhatsAppResponse(
                success=result.ok,
                status=result.status_code,
                data=result.data
            )
        except Exception as e:
            logger.error(f"❌ Error in send-whatsapp: {e}")
            return SendWhatsAppResponse(success=False, error=str(e))
