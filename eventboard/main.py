"""Main application entry point for the event board service.

This module defines the FastAPI application, configures logging, keeps an
in-memory copy of the last computed board and serves both a JSON API and a
minimal HTML wallboard.

Endpoints:
  - ``/api/events``: today's bookings split into started and upcoming.
  - ``/api/cards``: the same bookings rendered as display cards.
  - ``/healthz``: simple health check endpoint.
  - ``/``: serve the wallboard UI.

The board is recomputed at most once every ``refresh_seconds``. When
OfficeRnD cannot be reached the last good board is served with the error
in its ``lastError`` field.
"""

from __future__ import annotations

import logging
import threading
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from .cards import build_cards_payload
from .config import settings
from .events import booking_window, build_events_payload
from .exceptions import EventBoardError, FetchError
from .models import AppBooking, EventsPayload
from .officernd_client import OfficeRnDClient

logger = logging.getLogger("eventboard")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    client.close()


app = FastAPI(title="OfficeRnD Event Board", lifespan=lifespan)

client = OfficeRnDClient(settings)

# Holds the normalized bookings, not their classification: started/upcoming
# is recomputed against the current time on every request.
_cache_lock = threading.Lock()
_cache: Dict[str, Any] = {
    "bookings": None,
    "bookings_fetched_at": None,
    "last_error": None,
}


def _utcnow() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def _iso_z(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _display_tz() -> ZoneInfo:
    return ZoneInfo(settings.display_timezone)


def _cache_fresh(ts: Optional[datetime], max_age_seconds: int) -> bool:
    """Return True if the timestamp ``ts`` is within ``max_age_seconds`` of now."""
    if ts is None:
        return False
    return (_utcnow() - ts).total_seconds() < max_age_seconds


def _fetch_bookings(now: datetime) -> List[AppBooking]:
    """Fetch today's bookings from OfficeRnD.

    The bookings are classified once here so that bad timestamps fail the
    refresh instead of ending up in the cache.
    """
    tz = _display_tz()
    date_start, date_end = booking_window(now, tz)
    bookings = client.get_app_bookings(date_start, date_end)
    events = build_events_payload(bookings, now, tz)
    logger.info(
        "Board refreshed: %s started, %s upcoming", len(events.started), len(events.upcoming)
    )
    return bookings


def _get_bookings_cached() -> Tuple[List[AppBooking], datetime, Optional[str]]:
    """Return the bookings, when they were fetched and the last error, refetching when stale."""
    with _cache_lock:
        if _cache_fresh(_cache.get("bookings_fetched_at"), settings.refresh_seconds) and _cache.get("bookings") is not None:
            return _cache["bookings"], _cache["bookings_fetched_at"], _cache["last_error"]
    now = _utcnow()
    try:
        bookings = _fetch_bookings(now)
    except EventBoardError as exc:
        logger.exception("Error refreshing board: %s", exc)
        with _cache_lock:
            _cache["last_error"] = f"{type(exc).__name__}: {exc}"
            if _cache.get("bookings") is not None:
                return _cache["bookings"], _cache["bookings_fetched_at"], _cache["last_error"]
        raise
    with _cache_lock:
        _cache["bookings"] = bookings
        _cache["bookings_fetched_at"] = now
        _cache["last_error"] = None
    return bookings, now, None


def _get_events() -> Tuple[EventsPayload, datetime, Optional[str]]:
    """Return the board classified against the current time."""
    bookings, generated_at, last_error = _get_bookings_cached()
    return build_events_payload(bookings, _utcnow(), _display_tz()), generated_at, last_error


def _envelope(items: Dict[str, Any], generated_at: datetime, last_error: Optional[str]) -> Dict[str, Any]:
    return {
        "generatedAt": _iso_z(generated_at),
        "refreshSeconds": settings.refresh_seconds,
        **items,
        "lastError": last_error,
    }


def _http_error(exc: EventBoardError) -> HTTPException:
    status = 502 if isinstance(exc, FetchError) else 500
    return HTTPException(status_code=status, detail=str(exc))


@app.get("/api/events")
def api_events() -> Dict[str, Any]:
    """Return today's bookings split into started and upcoming."""
    try:
        events, generated_at, last_error = _get_events()
    except EventBoardError as exc:
        raise _http_error(exc)
    return _envelope(events.model_dump(exclude_none=True), generated_at, last_error)


@app.get("/api/cards")
def api_cards() -> Dict[str, Any]:
    """Return today's bookings rendered as wallboard cards."""
    try:
        events, generated_at, last_error = _get_events()
        cards = build_cards_payload(events, _display_tz())
    except EventBoardError as exc:
        raise _http_error(exc)
    return _envelope(cards.model_dump(), generated_at, last_error)


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    """Health check endpoint for monitoring."""
    return {"ok": True, "time": _iso_z(_utcnow())}


@app.get("/", response_class=HTMLResponse)
def board_page() -> HTMLResponse:
    """Serve the single page wallboard.

    The page is embedded here so the service deploys as one Python package
    with no frontend build step.
    """
    html = f"""
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Event Board</title>
  <style>
    :root {{
      --bg: #101218;
      --fg: #f4f1ea;
      --card-bg: #2a2d36;
      --title-size: 28px;
    }}
    body {{ margin: 0; font-family: system-ui, sans-serif; background: var(--bg); color: var(--fg); }}
    header {{ display: flex; align-items: baseline; gap: 16px; padding: 18px 22px; }}
    h1 {{ margin: 0; font-size: var(--title-size); }}
    h2 {{ margin: 18px 22px 8px; font-size: 20px; opacity: 0.85; }}
    .meta {{ opacity: 0.7; font-size: 14px; }}
    .list {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(300px, 1fr)); gap: 14px; padding: 0 22px; }}
    .event {{ border-radius: 14px; padding: 14px 16px; background: var(--card-bg); color: #14161c; }}
    .eventRoomAndTime {{ display: flex; justify-content: space-between; gap: 10px; font-size: 14px; }}
    .eventTitle {{ margin-top: 8px; font-size: 20px; font-weight: 700; }}
    .eventDescription {{ margin-top: 4px; font-size: 14px; }}
    .empty {{ padding: 0 22px; opacity: 0.6; }}
    .errorbar {{ margin: 0 22px; padding: 10px 12px; border-radius: 12px; background: rgba(255, 165, 0, 0.15); }}
  </style>
</head>
<body>
  <header>
    <h1>Today at the space</h1>
    <div class="meta" id="meta">Loading…</div>
  </header>
  <div id="error" class="errorbar" style="display:none;"></div>
  <h2>Happening now</h2>
  <div class="list" id="started"></div>
  <h2>Starting soon</h2>
  <div class="list" id="upcoming"></div>
<script>
const REFRESH_MS = {settings.refresh_seconds} * 1000;

function card(item) {{
  const div = document.createElement("div");
  div.className = "event";
  if (item.color) div.style.backgroundColor = item.color;
  const top = document.createElement("div");
  top.className = "eventRoomAndTime";
  const room = document.createElement("span");
  room.textContent = item.roomLabel;
  const time = document.createElement("span");
  time.textContent = item.timeLabel;
  top.appendChild(room);
  top.appendChild(time);
  div.appendChild(top);
  const title = document.createElement("div");
  title.className = "eventTitle";
  title.textContent = item.title || "";
  div.appendChild(title);
  if (item.description) {{
    const desc = document.createElement("div");
    desc.className = "eventDescription";
    desc.textContent = item.description;
    div.appendChild(desc);
  }}
  return div;
}}
function fill(id, items, emptyText) {{
  const el = document.getElementById(id);
  el.innerHTML = "";
  if (!items.length) {{
    const p = document.createElement("div");
    p.className = "empty";
    p.textContent = emptyText;
    el.appendChild(p);
    return;
  }}
  items.forEach(item => el.appendChild(card(item)));
}}
async function refresh() {{
  const err = document.getElementById("error");
  try {{
    const r = await fetch("/api/cards", {{cache: "no-store"}});
    const data = await r.json();
    if (!r.ok) throw new Error(data.detail || r.status);
    document.getElementById("meta").textContent =
      `Updated ${{new Date(data.generatedAt).toLocaleTimeString([], {{hour: '2-digit', minute: '2-digit'}})}}`;
    err.style.display = data.lastError ? "block" : "none";
    err.textContent = data.lastError ? `Warning: ${{data.lastError}}` : "";
    fill("started", data.started || [], "Nothing happening right now");
    fill("upcoming", data.upcoming || [], "Nothing else booked today");
  }} catch (e) {{
    err.style.display = "block";
    err.textContent = `Warning: failed to refresh: ${{e}}`;
  }}
}}
refresh();
setInterval(refresh, REFRESH_MS);
</script>
</body>
</html>
"""  # noqa: E501
    return HTMLResponse(content=html)


if __name__ == "__main__":
    import uvicorn

    # Bind only to localhost by default. Use a reverse proxy to expose externally.
    uvicorn.run(app, host=settings.host, port=settings.port)
