from datetime import datetime, timezone

import pytest

from chathotel.config import HotelProfile
from chathotel.models import GuestSession
from chathotel.services.fallback_responder import DEFAULT_RULE, FALLBACK_RULES, FallbackResponder

HOTEL = HotelProfile(
    name="Darbar Heritage Farmstay",
    phone="+91-9910364826",
    location="the countryside",
    check_in="2:00 PM",
    check_out="11:00 AM",
)


def _session(message_count: int = 1, interests: list[str] | None = None) -> GuestSession:
    now = datetime(2024, 5, 1, tzinfo=timezone.utc)
    return GuestSession(
        phone="919876543210",
        name="Guest 3210",
        first_contact=now,
        last_contact=now,
        message_count=message_count,
        interests=interests or [],
    )


@pytest.fixture
def responder():
    return FallbackResponder(HOTEL)


class TestClassify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("We are planning our wedding", "wedding"),
            ("Marriage ceremony options?", "wedding"),
            ("I need a reservation", "booking"),
            ("Is a room free?", "booking"),
            ("What food do you serve?", "dining"),
            ("Where are you?", "location"),
            ("Send me the address", "location"),
            ("What is the price", "pricing"),
            ("Is it expensive", "pricing"),
            ("What is your tariff", "pricing"),
            ("How do I reach you", "location"),
            ("Is there a restaurant", "dining"),
            ("What facilities do you have?", "amenities"),
            ("List your amenities", "amenities"),
            ("Is laundry service available", "amenities"),
            ("What time is check-in", "checkin"),
            ("Do you have wifi", "wifi"),
            ("Can I pay by card", "payment"),
            ("Please cancel", "cancellation"),
            ("Hello", "default"),
        ],
    )
    def test_categories(self, responder, text, expected):
        assert responder.classify(text).name == expected

    def test_priority_wedding_before_booking(self, responder):
        assert responder.classify("I want to book a room for my wedding").name == "wedding"

    def test_priority_booking_before_dining(self, responder):
        assert responder.classify("Book a stay with organic meals").name == "booking"

    def test_priority_dining_before_pricing(self, responder):
        assert responder.classify("Cost of the meal plan?").name == "dining"

    def test_rule_order(self):
        names = [rule.name for rule in FALLBACK_RULES]
        assert names[:6] == ["wedding", "booking", "dining", "location", "pricing", "amenities"]
        assert DEFAULT_RULE.name == "default"


class TestTemplates:
    def test_wedding_uses_heritage_ceremony_phrasing(self, responder):
        reply = responder.respond("wedding venue?", _session())
        assert "heritage" in reply
        assert "ceremon" in reply

    def test_booking_for_new_guest(self, responder):
        reply = responder.respond("need a room", _session())
        assert reply.startswith("🏨 Hello!")
        assert "Welcome back" not in reply

    def test_booking_for_returning_guest_with_wedding(self, responder):
        reply = responder.respond("need a room", _session(message_count=3, interests=["wedding"]))
        assert "Welcome back, Guest 3210" in reply
        assert "planning a wedding" in reply

    def test_amenities_lists_property_features(self, responder):
        reply = responder.respond("what facilities do you have?", _session())
        assert "nature walks" in reply
        assert "Welcome" not in reply

    def test_default_for_returning_guest(self, responder):
        reply = responder.respond("hello", _session(message_count=2, interests=["anniversary"]))
        assert "Welcome back" in reply
        assert "anniversary" in reply

    def test_default_without_session(self, responder):
        reply = responder.respond("hello", None)
        assert HOTEL.name in reply
        assert HOTEL.phone in reply

    def test_every_category_renders_text(self, responder):
        for rule in FALLBACK_RULES + (DEFAULT_RULE,):
            assert rule.render(_session(), HOTEL).strip()
