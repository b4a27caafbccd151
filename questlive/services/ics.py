"""Calendar exports for a booked session slot."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from ..models import LiveSession

EVENT_TZ = ZoneInfo("Europe/Amsterdam")
SLOT_LENGTH = timedelta(hours=1)

TITLE = "Quest Live Competition"
DESCRIPTION = """Head-to-head competition at the Forward Networks booth at Cisco Live EMEA.

What to expect:
- 5 players competing simultaneously
- Network challenges to solve
- Live leaderboard display
- Prizes for top performers

Arrive 5-10 minutes early to check in at the booth."""


def slot_bounds(session: LiveSession) -> Tuple[datetime, datetime]:
    """UTC start and end of the session's time slot."""

    day = date.fromisoformat(session.date[:10])
    hours, minutes = (int(part) for part in session.start_time.split(":")[:2])
    start = datetime.combine(day, time(hours, minutes), tzinfo=EVENT_TZ)
    start = start.astimezone(timezone.utc)
    return start, start + SLOT_LENGTH


def _stamp(value: datetime) -> str:
    return value.strftime("%Y%m%dT%H%M%SZ")


def location_for(booth: str) -> str:
    return f"Cisco Live EMEA, Amsterdam - Forward Networks Booth #{booth}"


def google_calendar_url(session: LiveSession, booth: str = "TBD") -> str:
    start, end = slot_bounds(session)
    params = {
        "action": "TEMPLATE",
        "text": TITLE,
        "details": DESCRIPTION,
        "location": location_for(booth),
        "dates": f"{_stamp(start)}/{_stamp(end)}",
    }
    return f"https://calendar.google.com/calendar/render?{urlencode(params)}"


def session_ics(session: LiveSession, booth: str = "TBD") -> str:
    start, end = slot_bounds(session)
    description = DESCRIPTION.replace("\n", "\\n")
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Forward Networks//Quest Live//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:quest-live-{session.id}@forwardnetworks.com",
        f"DTSTART:{_stamp(start)}",
        f"DTEND:{_stamp(end)}",
        f"SUMMARY:{TITLE}",
        f"DESCRIPTION:{description}",
        f"LOCATION:{location_for(booth)}",
        "STATUS:CONFIRMED",
        "SEQUENCE:0",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"


__all__ = ["google_calendar_url", "session_ics", "slot_bounds"]
