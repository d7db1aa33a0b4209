from typing import Optional

from chathotel.config import HotelProfile, Settings
from chathotel.logging_config import get_logger
from chathotel.services.context_service import ContextAssembler
from chathotel.services.fallback_responder import FallbackResponder
from chathotel.services.llm import LLMProvider, OpenAIProvider
from chathotel.services.result import Result
from chathotel.services.session_store import SessionStore

logger = get_logger("ai_service")

SYSTEM_PROMPT_TEMPLATE = """You are the WhatsApp concierge of {name}, a heritage farmstay hotel.

Hotel facts:
- Location: {location}
- Check-in from {check_in}, check-out by {check_out}
- Fresh organic meals from our own farm: breakfast, lunch and dinner
- Heritage venue for weddings, ceremonies and anniversaries
- Complimentary Wi-Fi, nature walks, traditional accommodation
- Reservations and help: {phone}

Reply warmly and briefly (under 120 words), in the guest's language.
Never invent prices or availability; ask for travel dates and offer the phone number instead.

Guest context:
{context}"""


def build_system_prompt(hotel: HotelProfile, context: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        name=hotel.name,
        location=hotel.location,
        check_in=hotel.check_in,
        check_out=hotel.check_out,
        phone=hotel.phone,
        context=context or "New guest, no previous conversation.",
    )


def get_llm_provider(settings: Settings) -> Optional[LLMProvider]:
    """Build the configured provider, or None when no API key is set."""
    if not settings.llm_configured:
        return None
    return OpenAIProvider(
        api_key=settings.openai_api_key,
        default_model=settings.llm_model,
        timeout_seconds=settings.llm_timeout_seconds,
    )


class ResponseGenerator:
    """Model-backed reply generation with a deterministic local fallback."""

    def __init__(
        self,
        sessions: SessionStore,
        context: ContextAssembler,
        fallback: FallbackResponder,
        provider: Optional[LLMProvider] = None,
        *,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ):
        self.sessions = sessions
        self.context = context
        self.fallback = fallback
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def complete(self, phone: str, text: str) -> Result[str]:
        """Single-turn completion: history travels in the system prompt, not as turns."""
        if self.provider is None:
            return Result.failure("LLM provider not configured", "llm_not_configured")

        system_prompt = build_system_prompt(self.fallback.hotel, self.context.build_context(phone))
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": text},
        ]
        try:
            response = await self.provider.generate(
                messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:
            logger.warning(f"LLM call failed: {exc}", extra={"context": {"phone": phone}})
            return Result.failure(str(exc), "llm_error")

        content = (response.content or "").strip()
        if not content:
            return Result.failure("LLM returned empty content", "llm_empty")
        return Result.success(content)

    async def respond(self, phone: str, text: str) -> str:
        result = await self.complete(phone, text)
        if result.ok:
            logger.info(
                "LLM reply generated",
                extra={"context": {"phone": phone, "reply": result.value}},
            )
            return result.value

        reply = self.fallback.respond(text, self.sessions.get(phone))
        logger.info(
            "Fallback reply generated",
            extra={"context": {"phone": phone, "reason": result.error_code, "reply": reply}},
        )
        return reply
