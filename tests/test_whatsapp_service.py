import asyncio
import json

import httpx

from chathotel.config import Settings
from chathotel.services.whatsapp_service import WhatsAppService


def _service(handler, **overrides) -> WhatsAppService:
    params = {
        "access_token": "EAAG-token",
        "phone_number_id": "639487732587057",
        "transport": httpx.MockTransport(handler),
    }
    params.update(overrides)
    return WhatsAppService(**params)


def _sent_ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "messaging_product": "whatsapp",
            "contacts": [{"input": "919876543210", "wa_id": "919876543210"}],
            "messages": [{"id": "wamid.OUT1"}],
        },
    )


class TestDeliver:
    def test_success_returns_message_id(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return _sent_ok(request)

        result = asyncio.run(_service(handler).deliver("919876543210", "Hello!", "wamid.IN1"))

        assert result.ok is True
        assert result.value == "wamid.OUT1"
        assert captured["url"] == "https://graph.facebook.com/v19.0/639487732587057/messages"
        assert captured["auth"] == "Bearer EAAG-token"
        assert captured["body"]["to"] == "919876543210"
        assert captured["body"]["text"] == {"body": "Hello!"}
        assert captured["body"]["context"] == {"message_id": "wamid.IN1"}

    def test_no_context_without_message_id(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return _sent_ok(request)

        asyncio.run(_service(handler).deliver("919876543210", "Hello!"))

        assert "context" not in captured["body"]

    def test_missing_credentials_skips_call(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return _sent_ok(request)

        result = asyncio.run(_service(handler, access_token=None).deliver("919876543210", "Hello!"))

        assert result.ok is False
        assert result.error_code == "missing_credentials"
        assert calls == []

    def test_missing_phone_number_id_skips_call(self):
        service = _service(_sent_ok, phone_number_id="")
        result = asyncio.run(service.deliver("919876543210", "Hello!"))
        assert result.error_code == "missing_credentials"

    def test_api_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": {"message": "Invalid parameter", "code": 100}})

        result = asyncio.run(_service(handler).deliver("919876543210", "Hello!"))

        assert result.ok is False
        assert result.error_code == "api_error"
        assert "Invalid parameter" in result.error

    def test_non_json_error_body(self):
        result = asyncio.run(
            _service(lambda request: httpx.Response(502, text="Bad Gateway")).deliver("919876543210", "Hello!")
        )

        assert result.ok is False
        assert result.error == "HTTP 502"

    def test_accepted_without_message_id_is_failure(self):
        result = asyncio.run(
            _service(lambda request: httpx.Response(200, json={"messages": [{}]})).deliver("919876543210", "Hello!")
        )

        assert result.ok is False
        assert result.error_code == "api_error"

    def test_malformed_messages_entry_is_failure(self):
        result = asyncio.run(
            _service(lambda request: httpx.Response(200, json={"messages": ["wamid.OUT1"]})).deliver(
                "919876543210", "Hello!"
            )
        )

        assert result.ok is False
        assert result.error_code == "api_error"

    def test_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = asyncio.run(_service(handler).deliver("919876543210", "Hello!"))

        assert result.ok is False
        assert result.error_code == "network_error"


class TestFromSettings:
    def test_reads_credentials_and_endpoint(self):
        settings = Settings(
            _env_file=None,
            whatsapp_access_token="token",
            whatsapp_phone_number_id="123",
            whatsapp_api_version="v21.0",
        )

        service = WhatsAppService.from_settings(settings)

        assert service.configured is True
        assert service.messages_url == "https://graph.facebook.com/v21.0/123/messages"
