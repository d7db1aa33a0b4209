from chathotel.models.guest_session import GuestSession, default_guest_name
from chathotel.models.turn import Turn, TurnDirection

__all__ = [
    "GuestSession",
    "Turn",
    "TurnDirection",
    "default_guest_name",
]
