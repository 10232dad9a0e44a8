"""Turn bookings into the cards shown on the wallboard."""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Optional

from .events import parse_timestamp
from .models import AppBooking, CardsPayload, EventCard, EventsPayload

# Card background per floor.
FLOOR_1_COLOR = "#f2a65a"
FLOOR_3_COLOR = "#5ab4f2"


def is_all_day(start: datetime, end: datetime) -> bool:
    return end - start == timedelta(days=1)


def format_time(value: datetime) -> str:
    """Format as ``9:30 AM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def floor_color(floor: Optional[str]) -> Optional[str]:
    # Bookings without a floor are shown in the first floor's colour.
    if floor is None or "1" in floor:
        return FLOOR_1_COLOR
    if "3" in floor:
        return FLOOR_3_COLOR
    return None


def room_label(booking: AppBooking) -> str:
    return " - ".join(part for part in (booking.floor, booking.room) if part)


def build_event_card(booking: AppBooking, tz: tzinfo) -> EventCard:
    """Render one booking.

    The summary is the title and the host the description; bookings
    without a summary are titled by their host instead.
    """
    start = parse_timestamp(booking.startDateTime)
    end = parse_timestamp(booking.endDateTime)
    if is_all_day(start, end):
        time_label = "All Day"
    else:
        time_label = f"{format_time(start.astimezone(tz))} - {format_time(end.astimezone(tz))}"

    if booking.summary:
        title, description = booking.summary, booking.host
    else:
        title, description = booking.host, booking.summary or None

    return EventCard(
        id=booking.id,
        title=title,
        description=description,
        roomLabel=room_label(booking),
        timeLabel=time_label,
        color=floor_color(booking.floor),
    )


def build_cards_payload(payload: EventsPayload, tz: tzinfo) -> CardsPayload:
    return CardsPayload(
        started=[build_event_card(b, tz) for b in payload.started],
        upcoming=[build_event_card(b, tz) for b in payload.upcoming],
    )
