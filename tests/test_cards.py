from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from eventboard.cards import (
    FLOOR_1_COLOR,
    FLOOR_3_COLOR,
    build_cards_payload,
    build_event_card,
    floor_color,
    format_time,
)
from eventboard.models import EventsPayload

from .conftest import make_booking


def test_card_with_summary_uses_host_as_description():
    booking = make_booking(
        "1", "2024-03-05T09:30:00Z", "2024-03-05T10:00:00Z",
        summary="Design review", team="Acme", room="Boardroom", floor="Floor 1",
    )

    card = build_event_card(booking, timezone.utc)

    assert card.title == "Design review"
    assert card.description == "Acme"
    assert card.roomLabel == "Floor 1 - Boardroom"
    assert card.timeLabel == "9:30 AM - 10:00 AM"
    assert card.color == FLOOR_1_COLOR


def test_card_without_summary_is_titled_by_host():
    booking = make_booking("2", "2024-03-05T13:00:00Z", "2024-03-05T14:15:00Z", member="Ada Lovelace")

    card = build_event_card(booking, timezone.utc)

    assert card.title == "Ada Lovelace"
    assert card.description is None
    assert card.timeLabel == "1:00 PM - 2:15 PM"


def test_team_is_preferred_over_member_as_host():
    booking = make_booking("3", "2024-03-05T13:00:00Z", "2024-03-05T14:00:00Z", team="Acme", member="Ada")
    assert build_event_card(booking, timezone.utc).title == "Acme"


def test_all_day_booking():
    booking = make_booking("4", "2024-03-05T00:00:00Z", "2024-03-06T00:00:00Z")
    assert build_event_card(booking, timezone.utc).timeLabel == "All Day"


def test_times_are_shown_in_display_timezone():
    booking = make_booking("5", "2024-07-01T08:00:00Z", "2024-07-01T09:00:00Z")
    card = build_event_card(booking, ZoneInfo("Europe/Dublin"))

    assert card.timeLabel == "9:00 AM - 10:00 AM"


def test_room_label_skips_missing_floor():
    booking = make_booking("6", "2024-03-05T13:00:00Z", "2024-03-05T14:00:00Z", floor=None, room="Snug")
    assert build_event_card(booking, timezone.utc).roomLabel == "Snug"


@pytest.mark.parametrize(
    "floor, color",
    [
        (None, FLOOR_1_COLOR),
        ("Floor 1", FLOOR_1_COLOR),
        ("Floor 3", FLOOR_3_COLOR),
        ("Basement", None),
    ],
)
def test_floor_color(floor, color):
    assert floor_color(floor) == color


@pytest.mark.parametrize(
    "hour, minute, text",
    [(0, 5, "12:05 AM"), (11, 59, "11:59 AM"), (12, 0, "12:00 PM"), (23, 30, "11:30 PM")],
)
def test_format_time(hour, minute, text):
    assert format_time(datetime(2024, 1, 1, hour, minute)) == text


def test_build_cards_payload_keeps_sections():
    started = make_booking("s", "2024-03-05T11:00:00Z", "2024-03-05T13:00:00Z")
    upcoming = make_booking("u", "2024-03-05T14:00:00Z", "2024-03-05T15:00:00Z")

    cards = build_cards_payload(EventsPayload(started=[started], upcoming=[upcoming]), timezone.utc)

    assert [c.id for c in cards.started] == ["s"]
    assert [c.id for c in cards.upcoming] == ["u"]
