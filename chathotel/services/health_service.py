import time
from datetime import datetime, timezone
from typing import Optional

from chathotel.config import Settings
from chathotel.schemas.diagnostics import GuestDetailResponse, GuestSessionSchema, StatusResponse, TurnSchema
from chathotel.services.context_service import ContextAssembler
from chathotel.services.history_store import HistoryStore
from chathotel.services.session_store import SessionStore


def get_uptime_seconds(started_at: float) -> float:
    return round(time.monotonic() - started_at, 3)


def get_system_status(settings: Settings, sessions: SessionStore, started_at: float) -> StatusResponse:
    """Uptime, active sessions and the aggregate inbound message count."""
    all_sessions = sessions.list_sessions()
    return StatusResponse(
        service=settings.app_name,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=get_uptime_seconds(started_at),
        active_sessions=len(all_sessions),
        total_messages=sum(session.message_count for session in all_sessions),
        whatsapp_configured=settings.whatsapp_configured,
        llm_configured=settings.llm_configured,
        business_account_configured=bool(settings.whatsapp_business_account_id),
    )


def get_guest_detail(
    phone: str,
    sessions: SessionStore,
    history: HistoryStore,
    context: ContextAssembler,
) -> Optional[GuestDetailResponse]:
    """Session, full history and rendered context for one guest, or None if unknown."""
    session = sessions.get(phone)
    if session is None:
        return None

    return GuestDetailResponse(
        session=GuestSessionSchema.model_validate(session),
        history=[TurnSchema.model_validate(turn) for turn in history.get(phone)],
        context=context.build_context(phone),
    )
