"""Time based selection of the bookings shown on the board.

All functions take an explicit ``now`` so they stay pure; the caller
decides which instant "now" is. Booking dates are OfficeRnD ISO-8601
strings and are parsed at this boundary; a string that does not parse
raises ``InvalidTimestampError`` instead of being compared as garbage.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, List, Sequence, Tuple

from .exceptions import InvalidTimestampError
from .models import AppBooking, EventsPayload


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a timezone aware datetime.

    Accepts a trailing ``Z``, an explicit offset or no offset at all, in
    which case UTC is assumed.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidTimestampError(value)
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidTimestampError(value) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _aware(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def trim_expired_events(bookings: Iterable[AppBooking], now: datetime) -> List[AppBooking]:
    """Drop bookings that ended strictly before ``now``, keeping order."""
    now = _aware(now)
    return [b for b in bookings if parse_timestamp(b.endDateTime) >= now]


def separate_started_and_upcoming_events(
    bookings: Iterable[AppBooking], now: datetime
) -> EventsPayload:
    """Split bookings into those in progress at ``now`` and those still to come.

    A booking starting exactly at ``now`` counts as started. Bookings that
    already ended belong to neither list; run ``trim_expired_events`` first
    and every booking lands in exactly one of them.
    """
    now = _aware(now)
    started: List[AppBooking] = []
    upcoming: List[AppBooking] = []
    for booking in bookings:
        start = parse_timestamp(booking.startDateTime)
        end = parse_timestamp(booking.endDateTime)
        if start > now:
            upcoming.append(booking)
        elif now <= end:
            started.append(booking)
    return EventsPayload(started=started, upcoming=upcoming)


def filter_events_starting_on(
    bookings: Iterable[AppBooking], day: date, tz: tzinfo
) -> List[AppBooking]:
    """Keep the bookings whose start falls on ``day`` in timezone ``tz``."""
    return [b for b in bookings if parse_timestamp(b.startDateTime).astimezone(tz).date() == day]


def sort_events_by_start(bookings: Sequence[AppBooking]) -> List[AppBooking]:
    """Return bookings ordered by start time. Ties keep their input order."""
    return sorted(bookings, key=lambda b: parse_timestamp(b.startDateTime))


def booking_window(now: datetime, tz: tzinfo) -> Tuple[str, str]:
    """Return today's and tomorrow's dates in ``tz`` as ``YYYY-MM-DD`` strings."""
    today = _aware(now).astimezone(tz).date()
    tomorrow = today + timedelta(days=1)
    return today.isoformat(), tomorrow.isoformat()


def build_events_payload(
    bookings: Sequence[AppBooking], now: datetime, tz: tzinfo
) -> EventsPayload:
    """Select today's bookings and split them into started and upcoming."""
    now = _aware(now)
    today = now.astimezone(tz).date()
    todays = sort_events_by_start(filter_events_starting_on(bookings, today, tz))
    return separate_started_and_upcoming_events(trim_expired_events(todays, now), now)
