from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class TurnDirection(str, Enum):
    INCOMING = "incoming"  # guest -> hotel
    OUTGOING = "outgoing"  # hotel -> guest


@dataclass(frozen=True)
class Turn:
    text: str
    direction: TurnDirection
    timestamp: datetime

    @property
    def label(self) -> str:
        return "Guest" if self.direction == TurnDirection.INCOMING else "Hotel"
