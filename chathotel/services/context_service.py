from chathotel.services.history_store import HistoryStore
from chathotel.services.session_store import SessionStore

DEFAULT_CONTEXT_TURNS = 3


class ContextAssembler:
    """Render a guest's session and recent turns as a text block for the model."""

    def __init__(self, sessions: SessionStore, history: HistoryStore, turns: int = DEFAULT_CONTEXT_TURNS):
        self.sessions = sessions
        self.history = history
        self.turns = turns

    def build_context(self, phone: str) -> str:
        session = self.sessions.get(phone)
        if session is None:
            return ""

        lines = [
            f"Guest name: {session.name}",
            f"Phone: {session.phone}",
            f"First contact: {session.first_contact.date().isoformat()}",
            f"Total messages: {session.message_count}",
            f"Returning guest: {'yes' if session.is_returning else 'no'}",
        ]
        if session.interests:
            lines.append(f"Interests: {', '.join(session.interests)}")
        if session.booking_intent:
            lines.append("High booking intent: guest has asked about booking, rooms or a stay")

        recent = self.history.recent(phone, self.turns)
        if recent:
            lines.append("Recent conversation:")
            lines.extend(f"- {turn.label}: {turn.text}" for turn in recent)

        return "\n".join(lines)
