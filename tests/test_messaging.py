import asyncio
from urllib.parse import parse_qs

import httpx
import pytest

from app.main import app
from app.modules.messaging.router import get_whatsapp_client
from app.modules.messaging.service import MessagingService, normalize_target
from app.shared.services.whatsapp_client import WhatsAppGatewayClient


class RecordingGateway:
    """MockTransport handler that remembers the last request"""

    def __init__(self, status_code=200, body='{"status": true, "detail": "success! message in queue"}'):
        self.status_code = status_code
        self.body = body
        self.request = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.request = request
        return httpx.Response(self.status_code, text=self.body)

    @property
    def form(self):
        return {k: v[0] for k, v in parse_qs(self.request.content.decode()).items()}


def gateway_client(handler) -> WhatsAppGatewayClient:
    return WhatsAppGatewayClient(
        url="https://gateway.test/send",
        token="secret-token",
        transport=httpx.MockTransport(handler)
    )


@pytest.fixture
def gateway(client):
    handler = RecordingGateway()
    app.dependency_overrides[get_whatsapp_client] = lambda: gateway_client(handler)
    yield handler
    app.dependency_overrides.pop(get_whatsapp_client, None)


@pytest.mark.parametrize("target, expected", [
    (["628111", "", None, "628222"], "628111,628222"),
    ("628111 ", "628111"),
    (628111, "628111"),
    (None, ""),
])
def test_normalize_target(target, expected):
    assert normalize_target(target) == expected


def test_forwards_form_encoded_request(client, gateway):
    response = client.post(
        "/api/v1/functions/send-whatsapp",
        json={"target": ["628111", "628222"], "message": "Pickup at 09:00"}
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    body = response.json()
    assert body == {
        "success": True,
        "status": 200,
        "data": {"status": True, "detail": "success! message in queue"}
    }

    assert gateway.request.headers["authorization"] == "secret-token"
    assert gateway.request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert gateway.form == {"target": "628111,628222", "message": "Pickup at 09:00"}


def test_gateway_failure_is_still_http_200(client, gateway):
    gateway.status_code = 500
    gateway.body = "Internal Server Error"

    response = client.post("/api/v1/functions/send-whatsapp", json={"target": "628111", "message": "hi"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["status"] == 500
    assert body["data"] == {"raw": "Internal Server Error"}


def test_invalid_json_body(client, gateway):
    response = client.post(
        "/api/v1/functions/send-whatsapp",
        content="not json",
        headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert "error" in body
    assert gateway.request is None


def test_non_object_body(client, gateway):
    response = client.post("/api/v1/functions/send-whatsapp", json=["628111"])
    assert response.json() == {"success": False, "error": "Request body must be a JSON object"}


def test_preflight(client):
    response = client.options("/api/v1/functions/send-whatsapp")

    assert response.status_code == 200
    assert response.text == "ok"
    assert response.headers["access-control-allow-origin"] == "*"


def test_transport_error_becomes_envelope():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = asyncio.run(MessagingService(gateway_client(unreachable)).forward({"target": "1", "message": "x"}))

    assert result.success is False
    assert "connection refused" in result.error


def test_parse_body_keeps_non_object_json_raw():
    assert WhatsAppGatewayClient.parse_body("[1, 2]") == {"raw": "[1, 2]"}
    assert WhatsAppGatewayClient.parse_body('{"ok": 1}') == {"ok": 1}


def test_browser_preflight_answered_by_cors_middleware(client):
    response = client.options(
        "/api/v1/functions/send-whatsapp",
        headers={
            "Origin": "https://portal.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, content-type",
        }
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://portal.example.com"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert "content-type" in response.headers["access-control-allow-headers"].lower()
