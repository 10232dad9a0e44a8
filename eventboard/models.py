"""Pydantic data models for OfficeRnD records and API responses.

OfficeRnD identifies every record by ``_id`` and uses short reference
fields (``room``, ``team``, ``member``). The models below accept both
those wire names and the descriptive field names, so they can be parsed
straight from API responses and built by hand in code.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class OfficeRnDRecord(BaseModel):
    """Base for immutable records read from OfficeRnD."""

    class Config:
        populate_by_name = True
        frozen = True
        extra = "ignore"


class Floor(OfficeRnDRecord):
    id: str = Field(alias="_id")
    name: str


class MeetingRoom(OfficeRnDRecord):
    id: str = Field(alias="_id")
    name: str
    # Rooms without a floor come back with ``"room": null``.
    roomFloorId: Optional[str] = Field(default=None, alias="room")


class MeetingRoomWithFloor(MeetingRoom):
    """A meeting room with the name of its floor resolved."""

    floorName: Optional[str] = None


class Team(OfficeRnDRecord):
    id: str = Field(alias="_id")
    name: str


class Member(OfficeRnDRecord):
    id: str = Field(alias="_id")
    name: str


class BookingTime(OfficeRnDRecord):
    dateTime: str


class RawBooking(OfficeRnDRecord):
    """A booking as returned by the ``/bookings`` endpoint."""

    id: str = Field(alias="_id")
    summary: str = ""
    start: BookingTime
    end: BookingTime
    timezone: str = ""
    resourceId: str
    teamId: Optional[str] = Field(default=None, alias="team")
    memberId: Optional[str] = Field(default=None, alias="member")
    canceled: bool = False

    @field_validator("summary", "timezone", mode="before")
    @classmethod
    def _null_text_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("canceled", mode="before")
    @classmethod
    def _null_canceled_is_false(cls, value):
        return False if value is None else value


class AppBooking(BaseModel):
    """A display ready booking with every reference resolved to a name."""

    id: str
    startDateTime: str
    endDateTime: str
    timezone: str
    room: Optional[str] = None
    floor: Optional[str] = None
    summary: str
    team: Optional[str] = None
    member: Optional[str] = None

    class Config:
        frozen = True

    @property
    def host(self) -> Optional[str]:
        """The team hosting the booking, or the member when there is no team."""
        return self.team or self.member


class EventsPayload(BaseModel):
    """Bookings split into those happening now and those starting later."""

    started: List[AppBooking] = []
    upcoming: List[AppBooking] = []


class EventCard(BaseModel):
    """The rendered form of a single booking on the wallboard."""

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    roomLabel: str
    timeLabel: str
    color: Optional[str] = None


class CardsPayload(BaseModel):
    started: List[EventCard] = []
    upcoming: List[EventCard] = []
