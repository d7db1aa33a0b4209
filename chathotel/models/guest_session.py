from dataclasses import dataclass, field
from datetime import datetime


def default_guest_name(phone: str) -> str:
    """Display name for a guest we only know by number."""
    return f"Guest {phone[-4:]}"


@dataclass
class GuestSession:
    phone: str
    name: str
    first_contact: datetime
    last_contact: datetime
    message_count: int = 0
    interests: list[str] = field(default_factory=list)
    booking_intent: bool = False

    @property
    def is_returning(self) -> bool:
        return self.message_count > 1

    def has_interest(self, tag: str) -> bool:
        return tag in self.interests

    def add_interest(self, tag: str) -> bool:
        """Append tag unless already present. Returns True if added."""
        if tag in self.interests:
            return False
        self.interests.append(tag)
        return True
