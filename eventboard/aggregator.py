"""Join OfficeRnD reference data into flat, display ready bookings.

OfficeRnD returns floors, meeting rooms, bookings, teams and members from
separate endpoints, linked only by ids. The functions here resolve those
ids to names. Joins are lenient: a reference that cannot be resolved
leaves the matching field empty rather than raising.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from .models import (
    AppBooking,
    Floor,
    MeetingRoom,
    MeetingRoomWithFloor,
    Member,
    RawBooking,
    Team,
)

RecordT = TypeVar("RecordT", Floor, MeetingRoom, Team, Member)


def index_by_id(records: Iterable[RecordT]) -> Dict[str, RecordT]:
    """Return ``records`` keyed by id. Later duplicates replace earlier ones."""
    return {record.id: record for record in records}


def combine_meeting_rooms_and_floors(
    floors_by_id: Mapping[str, Floor],
    rooms: Sequence[MeetingRoom],
) -> Dict[str, MeetingRoomWithFloor]:
    """Attach the floor name to every meeting room.

    The result is keyed by room id in the order the rooms were given. Rooms
    pointing at an unknown floor get ``floorName=None``.
    """
    combined: Dict[str, MeetingRoomWithFloor] = {}
    for room in rooms:
        floor = floors_by_id.get(room.roomFloorId)
        combined[room.id] = MeetingRoomWithFloor(
            id=room.id,
            name=room.name,
            roomFloorId=room.roomFloorId,
            floorName=floor.name if floor is not None else None,
        )
    return combined


def _find_name(records: Sequence[Team] | Sequence[Member], record_id: Optional[str]) -> Optional[str]:
    if record_id is None:
        return None
    for record in records:
        if record.id == record_id:
            return record.name
    return None


def combine_officernd_data_into_app_bookings(
    floors: Sequence[Floor],
    rooms: Sequence[MeetingRoom],
    bookings: Sequence[RawBooking],
    teams: Sequence[Team],
    members: Sequence[Member],
) -> List[AppBooking]:
    """Build one ``AppBooking`` per booking, in the order given.

    No filtering happens here: the caller drops canceled bookings and picks
    the date range before calling.
    """
    rooms_by_id = combine_meeting_rooms_and_floors(index_by_id(floors), rooms)
    app_bookings: List[AppBooking] = []
    for booking in bookings:
        room = rooms_by_id.get(booking.resourceId)
        app_bookings.append(
            AppBooking(
                id=booking.id,
                startDateTime=booking.start.dateTime,
                endDateTime=booking.end.dateTime,
                timezone=booking.timezone,
                room=room.name if room is not None else None,
                floor=room.floorName if room is not None else None,
                summary=booking.summary,
                team=_find_name(teams, booking.teamId),
                member=_find_name(members, booking.memberId),
            )
        )
    return app_bookings
