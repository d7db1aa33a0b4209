from typing import Optional

from chathotel.logging_config import LoggerAdapter, get_logger
from chathotel.models import TurnDirection
from chathotel.schemas.whatsapp import WhatsAppMessage
from chathotel.services.ai_service import ResponseGenerator
from chathotel.services.conversation_service import ConversationService
from chathotel.services.result import Result
from chathotel.services.whatsapp_service import WhatsAppService

logger = get_logger("message_service")


class InboundMessageHandler:
    """Drive one inbound guest message through session, history, reply and delivery."""

    def __init__(
        self,
        conversation: ConversationService,
        generator: ResponseGenerator,
        transport: WhatsAppService,
    ):
        self.conversation = conversation
        self.generator = generator
        self.transport = transport

    async def handle(self, message: WhatsAppMessage) -> Optional[Result[str]]:
        """Process one message. Returns the delivery result, or None when skipped."""
        phone = (message.from_phone or "").strip()
        text = message.body
        message_id = message.id

        if not phone or not text.strip():
            logger.debug(
                "Skipping message without text content",
                extra={"context": {"message_id": message_id, "type": message.type}},
            )
            return None

        log = LoggerAdapter(logger, {"phone": phone, "message_id": message_id})
        log.info("Processing message", context={"text": text})

        # Session and history writes happen before the first await.
        session = self.conversation.register_inbound(phone)
        self.conversation.record_turn(phone, text, TurnDirection.INCOMING)

        reply = await self.generator.respond(phone, text)
        self.conversation.record_turn(phone, reply, TurnDirection.OUTGOING)

        try:
            result = await self.transport.deliver(phone, reply, message_id)
        except Exception as exc:
            log.exception(f"Reply delivery raised: {exc}")
            return Result.failure(str(exc), "delivery_exception")

        if result.ok:
            log.info("Reply delivered", context={**result.to_dict("message_id"), "message_count": session.message_count})
        else:
            log.error("Reply delivery failed", context=result.to_dict())
        return result
