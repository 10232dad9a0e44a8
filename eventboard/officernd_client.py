"""OfficeRnD client utilities for the event board.

This module authenticates against the OfficeRnD identity service with the
client credentials flow, performs bearer authenticated GET requests against
the organization API and orchestrates the fetches needed to build the
day's bookings. Reference data (floors, meeting rooms, teams, members)
changes rarely and is kept in a ``TTLCache``; bookings are always fetched
fresh.

All failures are raised as ``FetchError`` (or ``AuthenticationError``) so
callers never have to know about ``httpx`` exceptions.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar

import httpx
from pydantic import ValidationError

from .aggregator import combine_officernd_data_into_app_bookings
from .cache import AnyCache, TTLCache
from .config import Settings
from .exceptions import AuthenticationError, FetchError
from .models import AppBooking, Floor, MeetingRoom, Member, RawBooking, Team

logger = logging.getLogger(__name__)

# Read only access is all the board needs.
SCOPE = "officernd.api.read"

RecordT = TypeVar("RecordT", Floor, MeetingRoom, RawBooking, Team, Member)


class OfficeRnDClient:
    """Thin synchronous client for the OfficeRnD v1 API.

    Args:
        settings: credentials, URLs and cache lifetime.
        cache: cache for reference data; a new ``TTLCache`` is created when omitted.
        http: an ``httpx.Client`` to use. When omitted the client creates and owns one.
    """

    def __init__(
        self,
        settings: Settings,
        cache: Optional[AnyCache] = None,
        http: Optional[httpx.Client] = None,
    ) -> None:
        self.settings = settings
        self.cache: AnyCache = cache if cache is not None else TTLCache(settings.reference_cache_seconds)
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=settings.request_timeout_seconds)
        self._token_lock = threading.Lock()
        self._access_token: Optional[str] = None

    @property
    def organization_url(self) -> str:
        base = self.settings.officernd_api_base_url.rstrip("/")
        return f"{base}/organizations/{self.settings.officernd_organization}"

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def authenticate(self) -> str:
        """Return an access token, requesting one on first use."""
        with self._token_lock:
            if self._access_token:
                return self._access_token
            data = {
                "client_id": self.settings.officernd_client_id,
                "client_secret": self.settings.officernd_client_secret,
                "grant_type": "client_credentials",
                "scope": SCOPE,
            }
            try:
                response = self._http.post(self.settings.officernd_identity_url, data=data)
            except httpx.HTTPError as exc:
                logger.error("OfficeRnD authentication request failed: %s", exc)
                raise AuthenticationError(f"Authentication request failed: {exc}") from exc
            if response.status_code >= 400:
                logger.error("OfficeRnD authentication rejected (status=%s)", response.status_code)
                raise AuthenticationError(
                    f"Authentication failed with status {response.status_code}",
                    status_code=response.status_code,
                )
            try:
                token = response.json().get("access_token")
            except ValueError as exc:
                raise AuthenticationError("Authentication response was not JSON") from exc
            if not token:
                raise AuthenticationError("Authentication response did not contain an access token")
            self._access_token = token
            logger.info("Authenticated against OfficeRnD")
            return token

    def _url(self, path: str) -> str:
        return f"{self.organization_url}{path}"

    def fetch(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET ``path`` below the organization URL and return the decoded JSON.

        Raises:
            FetchError: on transport errors, error statuses or a non JSON body.
        """
        token = self.authenticate()
        url = self._url(path)
        try:
            response = self._http.get(url, params=params, headers={"Authorization": f"Bearer {token}"})
        except httpx.HTTPError as exc:
            logger.error("OfficeRnD request to %s failed: %s", url, exc)
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        if response.status_code >= 400:
            logger.error(
                "OfficeRnD request to %s returned status=%s: %s", url, response.status_code, response.text
            )
            raise FetchError(
                f"Request to {url} failed with status {response.status_code} "
                f"({response.reason_phrase}): {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Response from {url} was not JSON") from exc

    def fetch_cached(self, path: str, parse: Optional[Callable[[Any], Any]] = None) -> Any:
        """Like ``fetch`` but served from the reference cache while fresh.

        ``parse`` runs before the result is stored, so a response that fails
        to parse is never cached.
        """
        url = self._url(path)
        cached = self.cache.get(url)
        if cached is not None:
            return cached
        data = self.fetch(path)
        if parse is not None:
            data = parse(data)
        self.cache.put(url, data)
        return data

    def _parse_one(self, model: Type[RecordT], item: Any, path: str) -> RecordT:
        try:
            return model.model_validate(item)
        except ValidationError as exc:
            logger.error("Malformed %s in response from %s: %s", model.__name__, path, exc)
            raise FetchError(f"Malformed response from {self._url(path)}: {exc}") from exc

    def _parse_many(self, model: Type[RecordT], items: Any, path: str) -> List[RecordT]:
        if not isinstance(items, list):
            logger.error("Expected a list from %s, got %s", path, type(items).__name__)
            raise FetchError(f"Malformed response from {self._url(path)}: expected a list")
        return [self._parse_one(model, item, path) for item in items]

    def get_floors(self) -> List[Floor]:
        return self.fetch_cached("/floors", lambda data: self._parse_many(Floor, data, "/floors"))

    def get_meeting_rooms(self) -> List[MeetingRoom]:
        path = "/resources?type=meeting_room"
        return self.fetch_cached(path, lambda data: self._parse_many(MeetingRoom, data, path))

    def get_bookings(self, date_start: str, date_end: str) -> List[RawBooking]:
        """Fetch the bookings whose series starts between the two ``YYYY-MM-DD`` dates."""
        items = self.fetch(
            "/bookings",
            params={"seriesStart.$gte": date_start, "seriesStart.$lte": date_end},
        )
        bookings = self._parse_many(RawBooking, items, "/bookings")
        logger.debug("Fetched %s bookings for %s..%s", len(bookings), date_start, date_end)
        return bookings

    def get_team(self, team_id: str) -> Team:
        path = f"/teams/{team_id}"
        return self.fetch_cached(path, lambda data: self._parse_one(Team, data, path))

    def get_member(self, member_id: str) -> Member:
        path = f"/members/{member_id}"
        return self.fetch_cached(path, lambda data: self._parse_one(Member, data, path))

    def get_teams(self, bookings: Sequence[RawBooking]) -> List[Team]:
        """Fetch each team referenced by ``bookings`` once."""
        team_ids = dict.fromkeys(b.teamId for b in bookings if b.teamId)
        return [self.get_team(team_id) for team_id in team_ids]

    def get_members(self, bookings: Sequence[RawBooking]) -> List[Member]:
        """Fetch each member referenced by ``bookings`` once."""
        member_ids = dict.fromkeys(b.memberId for b in bookings if b.memberId)
        return [self.get_member(member_id) for member_id in member_ids]

    @staticmethod
    def filter_canceled_bookings(bookings: Sequence[RawBooking]) -> List[RawBooking]:
        return [b for b in bookings if not b.canceled]

    def get_app_bookings(self, date_start: str, date_end: str) -> List[AppBooking]:
        """Fetch everything needed and return the non canceled bookings as ``AppBooking``."""
        floors = self.get_floors()
        rooms = self.get_meeting_rooms()
        bookings = self.filter_canceled_bookings(self.get_bookings(date_start, date_end))
        teams = self.get_teams(bookings)
        members = self.get_members(bookings)
        return combine_officernd_data_into_app_bookings(floors, rooms, bookings, teams, members)
