from chathotel.logging_config import get_logger
from chathotel.models import GuestSession, Turn, TurnDirection
from chathotel.services.history_store import HistoryStore
from chathotel.services.interest_service import update_interests
from chathotel.services.session_store import SessionStore

logger = get_logger("conversation_service")


class ConversationService:
    """Single write path for guest sessions and their history."""

    def __init__(self, sessions: SessionStore, history: HistoryStore):
        self.sessions = sessions
        self.history = history

    def register_inbound(self, phone: str) -> GuestSession:
        """Find or create the guest session and count one inbound message."""
        return self.sessions.get_or_create(phone)

    def record_turn(self, phone: str, text: str, direction: TurnDirection) -> Turn:
        """Append a turn; incoming turns also refresh the guest's inferred interests."""
        turn = self.history.append(phone, text, direction)

        if turn.direction == TurnDirection.INCOMING:
            session = self.sessions.get(phone)
            if session and update_interests(session, text):
                self.sessions.save(session)
                logger.info(
                    "Guest interests updated",
                    extra={
                        "context": {
                            "phone": phone,
                            "interests": list(session.interests),
                            "booking_intent": session.booking_intent,
                        }
                    },
                )

        return turn
