"""Errors raised by the event board.

Unresolvable references (a room, floor, team or member id that is missing
from the lookup data) are not errors: the matching display field is left
empty instead.
"""

from typing import Optional


class EventBoardError(Exception):
    """Base class for all event board errors."""


class FetchError(EventBoardError):
    """An OfficeRnD request failed or returned an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(FetchError):
    """The OfficeRnD identity endpoint did not hand out an access token."""


class InvalidTimestampError(EventBoardError, ValueError):
    """A booking carried a date string that could not be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid timestamp: {value!r}")
        self.value = value
