# app/shared/services/whatsapp_client.py
import httpx
import json
import logging
from typing import Dict, Any, Optional
from app.config.settings import settings

logger = logging.getLogger(__name__)

class GatewayResult:
    """Upstream status plus the parsed (or raw) body"""

    def __init__(self, status_code: int, data: Dict[str, Any]):
        self.status_code = status_code
        self.data = data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

class WhatsAppGatewayClient:
    """Client for the third-party WhatsApp send endpoint"""

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.url = url or settings.whatsapp_gateway_url
        self.token = token if token is not None else settings.whatsapp_gateway_token
        self.timeout = timeout or settings.whatsapp_gateway_timeout
        self.transport = transport

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.token or "",
            "Content-Type": "application/x-www-form-urlencoded",
        }

    @staticmethod
    def parse_body(raw: str) -> Dict[str, Any]:
        try:
            parsed = json.loads(raw)
        except ValueError:
            return {"raw": raw}
        if not isinstance(parsed, dict):
            return {"raw": raw}
        return parsed

    async def send(self, target: str, message: str) -> GatewayResult:
        """Form-encoded POST to the gateway. Transport errors propagate."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.url,
                data={"target": target, "message": message},
                headers=self._get_headers()
            )

        logger.info(f"📡 Gateway response status: {response.status_code}")
        logger.debug(f"📡 Gateway response headers: {dict(response.headers)}")

        data = self.parse_body(response.text)
        logger.info(f"📡 Gateway response body: {data}")
        return GatewayResult(response.status_code, data)
