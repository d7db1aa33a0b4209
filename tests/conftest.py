from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from chathotel.config import Settings
from chathotel.dependencies import build_container
from chathotel.main import create_app
from chathotel.schemas.whatsapp import WhatsAppMessage
from chathotel.services.result import Result
from chathotel.services.whatsapp_service import WhatsAppService


class FakeClock:
    """Deterministic clock: advances one second per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + timedelta(seconds=1)
        return now


def make_message(text: str | None, phone: str = "919876543210", message_id: str = "wamid.IN1") -> WhatsAppMessage:
    raw = {"from": phone, "id": message_id, "timestamp": "1714557600", "type": "text"}
    if text is not None:
        raw["text"] = {"body": text}
    return WhatsAppMessage.model_validate(raw)


def make_webhook_payload(*messages: dict, statuses: list[dict] | None = None) -> dict:
    value = {
        "messaging_product": "whatsapp",
        "metadata": {"display_phone_number": "15550001111", "phone_number_id": "639487732587057"},
        "messages": list(messages),
    }
    if statuses:
        value["statuses"] = statuses
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "WABA-1", "changes": [{"field": "messages", "value": value}]}],
    }


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        whatsapp_access_token=None,
        whatsapp_phone_number_id=None,
        whatsapp_webhook_verify_token="test-verify-token",
        openai_api_key=None,
    )


@pytest.fixture
def fake_transport():
    transport = AsyncMock(spec=WhatsAppService)
    transport.deliver.return_value = Result.success("wamid.OUT1")
    return transport


@pytest.fixture
def container(settings, fake_transport):
    return build_container(settings, whatsapp=fake_transport)


@pytest.fixture
def client(container):
    return TestClient(create_app(container=container))
