import json
from typing import Any, Iterable, TypeVar

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from chathotel.dependencies import ServiceContainer, get_container
from chathotel.logging_config import get_logger
from chathotel.schemas.whatsapp import WhatsAppMessage, WhatsAppStatus, WhatsAppWebhookPayload
from chathotel.services.message_service import InboundMessageHandler

logger = get_logger("webhook")

router = APIRouter(tags=["webhook"])

ACK_BODY = "OK"

ItemT = TypeVar("ItemT", WhatsAppMessage, WhatsAppStatus)


@router.get("/webhook")
async def verify_webhook(
    hub_mode: str | None = Query(None, alias="hub.mode"),
    hub_verify_token: str | None = Query(None, alias="hub.verify_token"),
    hub_challenge: str | None = Query(None, alias="hub.challenge"),
    container: ServiceContainer = Depends(get_container),
):
    """Meta subscription handshake."""
    expected = container.settings.whatsapp_webhook_verify_token
    if hub_mode == "subscribe" and expected and hub_verify_token == expected:
        logger.info("Webhook verified")
        return PlainTextResponse(content=hub_challenge or "", status_code=200)

    logger.warning("Webhook verification failed", extra={"context": {"mode": hub_mode}})
    return PlainTextResponse(content="Verification failed", status_code=403)


def _parse_items(model: type[ItemT], items: Iterable[dict[str, Any]]) -> list[ItemT]:
    """Validate each item on its own; malformed ones are logged and skipped."""
    parsed = []
    for item in items:
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                f"Skipping malformed {model.__name__}: {exc}",
                extra={"context": {"id": item.get("id")}},
            )
    return parsed


def _log_status_update(status: WhatsAppStatus) -> None:
    context = {"message_id": status.id, "status": status.status, "recipient_id": status.recipient_id}
    if status.status == "failed":
        logger.warning("Outbound message failed upstream", extra={"context": {**context, "errors": status.errors}})
    else:
        logger.info("Outbound message status", extra={"context": context})


async def process_messages(handler: InboundMessageHandler, messages: list[WhatsAppMessage]) -> None:
    """Runs after the acknowledgement is sent. Errors are logged, never raised."""
    for message in messages:
        try:
            await handler.handle(message)
        except Exception as exc:
            logger.exception(
                f"Message processing failed: {exc}",
                extra={"context": {"message_id": message.id, "from": message.from_phone}},
            )


@router.post("/webhook")
async def receive_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    container: ServiceContainer = Depends(get_container),
):
    """Acknowledge immediately; guest messages are handled in a background task."""
    try:
        raw = await request.json()
        payload = WhatsAppWebhookPayload.model_validate(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
        logger.warning(f"Ignoring malformed webhook payload: {exc}")
        return PlainTextResponse(ACK_BODY)

    if not payload.is_business_account:
        logger.warning("Unknown webhook object type", extra={"context": {"object": payload.object}})
        return PlainTextResponse(ACK_BODY)

    for status in _parse_items(WhatsAppStatus, payload.raw_statuses()):
        _log_status_update(status)

    messages = _parse_items(WhatsAppMessage, payload.raw_messages())
    if messages:
        logger.info("Webhook received", extra={"context": {"messages": len(messages)}})
        background_tasks.add_task(process_messages, container.handler, messages)

    return PlainTextResponse(ACK_BODY)
