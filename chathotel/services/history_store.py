import threading
from abc import ABC, abstractmethod
from collections import deque

from chathotel.models import Turn, TurnDirection
from chathotel.services.session_store import Clock, utc_now

DEFAULT_HISTORY_LIMIT = 20


class HistoryStore(ABC):
    """Bounded, time-ordered conversation turns keyed by phone number."""

    @abstractmethod
    def append(self, phone: str, text: str, direction: TurnDirection) -> Turn:
        """Append a turn, evicting the oldest ones past the limit."""

    @abstractmethod
    def get(self, phone: str) -> list[Turn]:
        """All stored turns for phone, oldest first."""

    def recent(self, phone: str, count: int) -> list[Turn]:
        if count <= 0:
            return []
        return self.get(phone)[-count:]


class InMemoryHistoryStore(HistoryStore):
    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT, clock: Clock = utc_now):
        if limit < 1:
            raise ValueError(f"history limit must be >= 1, got {limit}")
        self.limit = limit
        self._clock = clock
        self._turns: dict[str, deque[Turn]] = {}
        self._lock = threading.Lock()

    def append(self, phone: str, text: str, direction: TurnDirection) -> Turn:
        turn = Turn(text=text, direction=TurnDirection(direction), timestamp=self._clock())
        with self._lock:
            turns = self._turns.get(phone)
            if turns is None:
                turns = deque(maxlen=self.limit)
                self._turns[phone] = turns
            turns.append(turn)
        return turn

    def get(self, phone: str) -> list[Turn]:
        with self._lock:
            return list(self._turns.get(phone, ()))
