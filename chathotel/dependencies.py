import time
from dataclasses import dataclass, field
from typing import Optional

from fastapi import Request

from chathotel.config import Settings
from chathotel.services.ai_service import ResponseGenerator, get_llm_provider
from chathotel.services.context_service import ContextAssembler
from chathotel.services.conversation_service import ConversationService
from chathotel.services.fallback_responder import FallbackResponder
from chathotel.services.history_store import HistoryStore, InMemoryHistoryStore
from chathotel.services.llm import LLMProvider
from chathotel.services.message_service import InboundMessageHandler
from chathotel.services.session_store import InMemorySessionStore, SessionStore
from chathotel.services.whatsapp_service import WhatsAppService


@dataclass
class ServiceContainer:
    """Everything the routers need, wired once at startup."""

    settings: Settings
    sessions: SessionStore
    history: HistoryStore
    conversation: ConversationService
    context: ContextAssembler
    generator: ResponseGenerator
    whatsapp: WhatsAppService
    handler: InboundMessageHandler
    started_at: float = field(default_factory=time.monotonic)


def build_container(
    settings: Settings,
    *,
    sessions: Optional[SessionStore] = None,
    history: Optional[HistoryStore] = None,
    provider: Optional[LLMProvider] = None,
    whatsapp: Optional[WhatsAppService] = None,
) -> ServiceContainer:
    sessions = sessions or InMemorySessionStore()
    history = history or InMemoryHistoryStore(limit=settings.history_limit)
    if provider is None:
        provider = get_llm_provider(settings)
    whatsapp = whatsapp or WhatsAppService.from_settings(settings)

    conversation = ConversationService(sessions, history)
    context = ContextAssembler(sessions, history, turns=settings.context_turns)
    generator = ResponseGenerator(
        sessions,
        context,
        FallbackResponder(settings.hotel_profile()),
        provider,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
    handler = InboundMessageHandler(conversation, generator, whatsapp)

    return ServiceContainer(
        settings=settings,
        sessions=sessions,
        history=history,
        conversation=conversation,
        context=context,
        generator=generator,
        whatsapp=whatsapp,
        handler=handler,
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container
