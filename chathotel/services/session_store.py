import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Optional

from chathotel.logging_config import get_logger
from chathotel.models import GuestSession, default_guest_name

logger = get_logger("session_store")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore(ABC):
    """Guest sessions keyed by phone number."""

    @abstractmethod
    def get_or_create(self, phone: str) -> GuestSession:
        """Register one inbound message for phone, creating the session on first contact."""

    @abstractmethod
    def get(self, phone: str) -> Optional[GuestSession]:
        pass

    @abstractmethod
    def save(self, session: GuestSession) -> None:
        pass

    @abstractmethod
    def list_sessions(self) -> list[GuestSession]:
        pass

    def count(self) -> int:
        return len(self.list_sessions())


class InMemorySessionStore(SessionStore):
    """Process-local session store. Lost on restart."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._sessions: dict[str, GuestSession] = {}
        self._lock = threading.Lock()

    def get_or_create(self, phone: str) -> GuestSession:
        if not phone:
            raise ValueError("phone is required")

        now = self._clock()
        with self._lock:
            session = self._sessions.get(phone)
            if session is None:
                session = GuestSession(
                    phone=phone,
                    name=default_guest_name(phone),
                    first_contact=now,
                    last_contact=now,
                )
                logger.info("New guest session", extra={"context": {"phone": phone}})
            else:
                session.last_contact = now
            session.message_count += 1
            self._sessions[phone] = session
            return session

    def get(self, phone: str) -> Optional[GuestSession]:
        with self._lock:
            return self._sessions.get(phone)

    def save(self, session: GuestSession) -> None:
        with self._lock:
            self._sessions[session.phone] = session

    def list_sessions(self) -> list[GuestSession]:
        with self._lock:
            return list(self._sessions.values())

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
