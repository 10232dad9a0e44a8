# tests/conftest.py
import os

# Settings are read at import time, so credentials must exist before any
# eventboard module is imported.
os.environ.setdefault("OFFICERND_CLIENT_ID", "test-client")
os.environ.setdefault("OFFICERND_CLIENT_SECRET", "test-secret")
os.environ.setdefault("OFFICERND_ORGANIZATION", "testorg")
os.environ.setdefault("DISPLAY_TIMEZONE", "UTC")

from datetime import datetime, timezone

import pytest

from eventboard.models import AppBooking, BookingTime, Floor, MeetingRoom, Member, RawBooking, Team


def make_booking(id, start, end, **kwargs):
    """Build an AppBooking with only the fields a test cares about."""
    fields = {"timezone": "UTC", "room": "Room", "floor": "Floor 1", "summary": ""}
    fields.update(kwargs)
    return AppBooking(id=id, startDateTime=start, endDateTime=end, **fields)


@pytest.fixture
def now():
    return datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def day_bookings():
    """Bookings around noon on 2024-03-05, deliberately out of start order."""
    return [
        make_booking("later", "2024-03-05T15:00:00.000Z", "2024-03-05T16:00:00.000Z"),
        make_booking("expired", "2024-03-05T08:00:00.000Z", "2024-03-05T09:00:00.000Z"),
        make_booking("now", "2024-03-05T11:30:00.000Z", "2024-03-05T12:30:00.000Z"),
        make_booking("exact", "2024-03-05T12:00:00.000Z", "2024-03-05T13:00:00.000Z"),
        make_booking("soon", "2024-03-05T12:15:00.000Z", "2024-03-05T12:45:00.000Z"),
        make_booking("tomorrow", "2024-03-06T09:00:00.000Z", "2024-03-06T10:00:00.000Z"),
    ]


@pytest.fixture
def reference_data():
    """The single entry fixture set: one floor, room, booking, team and member."""
    return {
        "floors": [Floor(id="3", name="Test Floor")],
        "rooms": [MeetingRoom(id="0", name="Test Room", roomFloorId="3")],
        "bookings": [
            RawBooking(
                id="1",
                summary="",
                start=BookingTime(dateTime=""),
                end=BookingTime(dateTime=""),
                timezone="",
                resourceId="0",
                teamId="2",
                memberId="4",
            )
        ],
        "teams": [Team(id="2", name="Test Team")],
        "members": [Member(id="4", name="Test Member")],
    }
