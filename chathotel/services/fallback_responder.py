"""Keyword-driven replies used when the language model is unavailable.

Rules are checked in order against the lower-cased guest message and the
first match renders the reply. The final default rule always matches.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from chathotel.config import HotelProfile
from chathotel.models import GuestSession

Renderer = Callable[[Optional[GuestSession], HotelProfile], str]


@dataclass(frozen=True)
class FallbackRule:
    name: str
    keywords: tuple[str, ...]
    render: Renderer

    def matches(self, normalized: str) -> bool:
        return any(keyword in normalized for keyword in self.keywords)


def _greeting_name(session: Optional[GuestSession]) -> str:
    return session.name if session else "there"


def render_wedding(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        f"💍 Congratulations! {hotel.name} is a beautiful heritage venue for weddings and ceremonies.\n"
        "We host traditional ceremonies in our heritage courtyard, with farm-to-table catering "
        "and accommodation for your family and guests.\n"
        "Could you share your preferred dates and the approximate number of guests? "
        f"Our events team can also be reached at {hotel.phone}."
    )


def render_booking(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    if session and session.is_returning:
        opening = f"🏨 Welcome back, {session.name}! I'd be glad to help with your stay at {hotel.name}."
    else:
        opening = f"🏨 Hello! I'd be glad to help you book a stay at {hotel.name}."

    lines = [opening]
    if session and session.has_interest("wedding"):
        lines.append("Since you're planning a wedding, we can also hold rooms for your family and guests.")
    lines.append(
        "Please share your check-in and check-out dates, the number of guests and any room preference."
    )
    lines.append(f"Check-in is from {hotel.check_in} and check-out is by {hotel.check_out}.")
    return "\n".join(lines)


def render_dining(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        "🍽️ We serve fresh organic meals made from our own farm produce!\n"
        "Breakfast, lunch and dinner are available, and we happily accommodate dietary preferences.\n"
        "Let us know if you have any requirements."
    )


def render_location(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        f"📍 {hotel.name} is located in {hotel.location}.\n"
        "I'd be happy to help with directions. Where will you be travelling from?"
    )


def render_pricing(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        "💰 Our room rates vary by season and room type.\n"
        f"For current pricing, share your travel dates here or call us at {hotel.phone}."
    )


def render_amenities(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        f"🌟 {hotel.name} offers organic farm meals, nature walks, traditional accommodation, "
        "complimentary Wi-Fi and peaceful surroundings.\n"
        "Would you like details about any specific amenity?"
    )


def render_checkin(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        f"🕒 Check-in at {hotel.name} is from {hotel.check_in} and check-out is by {hotel.check_out}.\n"
        "If you need an early check-in or late check-out, let me know and I'll check availability."
    )


def render_wifi(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        "📶 Yes, complimentary Wi-Fi is available throughout the property.\n"
        "Network details are shared at check-in."
    )


def render_payment(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        "💳 We accept cash, cards and digital payments.\n"
        "Our team will share the payment details and advance policy with you."
    )


def render_cancellation(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    return (
        "I understand you'd like to cancel a reservation.\n"
        f"Our reservations team at {hotel.phone} can help you with that right away."
    )


def render_default(session: Optional[GuestSession], hotel: HotelProfile) -> str:
    if session and session.is_returning:
        lines = [f"🙏 Welcome back, {session.name}! Good to hear from you again."]
    else:
        lines = [f"🙏 Hello {_greeting_name(session)}! Welcome to {hotel.name}."]

    if session and session.has_interest("wedding"):
        lines.append("I remember you're planning a wedding. Happy to help with anything for the celebration.")
    elif session and session.has_interest("anniversary"):
        lines.append("I remember you're celebrating an anniversary. We'd love to make it special.")

    lines.append("How can I help you today? I can help with bookings, dining, directions and more.")
    lines.append(f"For immediate assistance, call us at {hotel.phone}.")
    return "\n".join(lines)


FALLBACK_RULES: tuple[FallbackRule, ...] = (
    FallbackRule("wedding", ("wedding", "marriage", "ceremony"), render_wedding),
    FallbackRule("booking", ("booking", "book", "room", "stay", "reservation"), render_booking),
    FallbackRule("dining", ("food", "meal", "restaurant", "dining", "organic"), render_dining),
    FallbackRule("location", ("location", "where", "direction", "address", "reach"), render_location),
    FallbackRule("pricing", ("price", "cost", "rate", "tariff", "expensive"), render_pricing),
    FallbackRule("amenities", ("amenities", "amenity", "facilities", "service"), render_amenities),
    FallbackRule("checkin", ("check-in", "check in", "checkin", "check-out", "checkout"), render_checkin),
    FallbackRule("wifi", ("wifi", "wi-fi", "internet"), render_wifi),
    FallbackRule("payment", ("payment", "pay", "advance"), render_payment),
    FallbackRule("cancellation", ("cancel",), render_cancellation),
)

DEFAULT_RULE = FallbackRule("default", (), render_default)


class FallbackResponder:
    def __init__(self, hotel: HotelProfile, rules: tuple[FallbackRule, ...] = FALLBACK_RULES):
        self.hotel = hotel
        self.rules = rules

    def classify(self, text: str) -> FallbackRule:
        normalized = (text or "").lower()
        for rule in self.rules:
            if rule.matches(normalized):
                return rule
        return DEFAULT_RULE

    def respond(self, text: str, session: Optional[GuestSession] = None) -> str:
        return self.classify(text).render(session, self.hotel)
