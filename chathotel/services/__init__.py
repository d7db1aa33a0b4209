from chathotel.services.conversation_service import ConversationService
from chathotel.services.history_store import HistoryStore, InMemoryHistoryStore
from chathotel.services.interest_service import detect_interests, update_interests
from chathotel.services.result import Result
from chathotel.services.session_store import InMemorySessionStore, SessionStore
