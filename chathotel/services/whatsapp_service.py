from typing import Optional

import httpx

from chathotel.config import Settings
from chathotel.logging_config import get_logger
from chathotel.services.result import Result

logger = get_logger("whatsapp_service")


def _sent_message_id(data) -> Optional[str]:
    """Upstream id of the first accepted message, or None if the body has none."""
    if not isinstance(data, dict):
        return None
    messages = data.get("messages")
    if not isinstance(messages, list) or not messages or not isinstance(messages[0], dict):
        return None
    return messages[0].get("id") or None


class WhatsAppService:
    """Service for sending messages through the WhatsApp Business Cloud API."""

    def __init__(
        self,
        access_token: Optional[str],
        phone_number_id: Optional[str],
        base_url: str = "https://graph.facebook.com",
        api_version: str = "v19.0",
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.phone_number_id = phone_number_id
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "WhatsAppService":
        return cls(
            access_token=settings.whatsapp_access_token,
            phone_number_id=settings.whatsapp_phone_number_id,
            base_url=settings.whatsapp_api_base_url,
            api_version=settings.whatsapp_api_version,
            timeout_seconds=settings.whatsapp_timeout_seconds,
        )

    @property
    def configured(self) -> bool:
        return bool(self.access_token and self.phone_number_id)

    @property
    def messages_url(self) -> str:
        return f"{self.base_url}/{self.api_version}/{self.phone_number_id}/messages"

    async def deliver(self, to: str, text: str, context_message_id: Optional[str] = None) -> Result[str]:
        """Send a text message. On success the result value is the upstream message id."""
        if not self.configured:
            logger.error("WhatsApp credentials missing", extra={"context": {"to": to}})
            return Result.failure("WhatsApp credentials missing", "missing_credentials")

        payload = {
            "messaging_product": "whatsapp",
            "recipient_type": "individual",
            "to": to,
            "type": "text",
            "text": {"body": text},
        }
        if context_message_id:
            payload["context"] = {"message_id": context_message_id}

        logger.info("Sending WhatsApp message", extra={"context": {"to": to, "text": text}})

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(
                    self.messages_url,
                    headers={
                        "Authorization": f"Bearer {self.access_token}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
        except httpx.HTTPError as exc:
            logger.error(f"WhatsApp network error: {exc}", extra={"context": {"to": to}})
            return Result.failure(str(exc), "network_error")

        try:
            data = response.json()
        except ValueError:
            data = {}

        message_id = _sent_message_id(data)
        if response.status_code == 200 and message_id:
            logger.info("WhatsApp message sent", extra={"context": {"to": to, "message_id": message_id}})
            return Result.success(message_id)

        error = data.get("error") if isinstance(data, dict) else None
        logger.error(
            "WhatsApp send failed",
            extra={"context": {"to": to, "status": response.status_code, "error": error or response.text[:200]}},
        )
        return Result.failure(str(error or f"HTTP {response.status_code}"), "api_error")
