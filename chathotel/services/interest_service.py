from chathotel.models import GuestSession

# (tag, keywords): tag is added when any keyword appears in the message.
INTEREST_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("wedding", ("wedding",)),
    ("anniversary", ("anniversary",)),
    ("organic_farm", ("organic", "farm")),
)

BOOKING_INTENT_KEYWORDS = ("book", "room", "stay")


def _contains_any(normalized: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in normalized for keyword in keywords)


def detect_interests(text: str) -> list[str]:
    """Interest tags mentioned in text, in rule order."""
    normalized = (text or "").lower()
    return [tag for tag, keywords in INTEREST_RULES if _contains_any(normalized, keywords)]


def detect_booking_intent(text: str) -> bool:
    return _contains_any((text or "").lower(), BOOKING_INTENT_KEYWORDS)


def update_interests(session: GuestSession, text: str) -> bool:
    """Merge interests inferred from text into session. Returns True if anything changed.

    Tags are only ever added and booking intent is only ever switched on.
    """
    changed = False
    for tag in detect_interests(text):
        changed = session.add_interest(tag) or changed

    if not session.booking_intent and detect_booking_intent(text):
        session.booking_intent = True
        changed = True

    return changed
