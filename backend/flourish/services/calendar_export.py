"""Calendar export for a single event.

Produces an RFC 5545 iCalendar block, Google and Apple calendar links and a
plain-text summary for the clipboard. Field assembly (``build_calendar_entry``)
is kept apart from text rendering (``serialize_calendar``) so the escaping rule
lives in exactly one place.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import quote, urlencode

from flourish.clock import utc_now
from flourish.config import settings
from flourish.exceptions import ExportTargetUnavailableError
from flourish.services.visibility import event_schedule, localize

logger = logging.getLogger(__name__)

PRODID = "-//Event App//EventApp//EN"
CALENDAR_NAME = "Event Calendar"
ICS_MIME_TYPE = "text/calendar;charset=utf-8"
GOOGLE_CALENDAR_BASE_URL = "https://calendar.google.com/calendar/render"

MAX_LINE_OCTETS = 75

_UNESCAPE_RE = re.compile(r"\\([\\;,nN])")
_UNSAFE_FILENAME_RE = re.compile(r"[^\w\s-]")


def escape_text(text: Optional[str]) -> str:
    """Escape a TEXT value for iCalendar (RFC 5545 §3.3.11).

    Backslashes go first so the escapes added afterwards are not doubled.
    """
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\\", "\\\\")
    text = text.replace("\n", "\\n")
    text = text.replace(",", "\\,")
    text = text.replace(";", "\\;")
    return text


def unescape_text(text: str) -> str:
    """Inverse of escape_text."""
    def _replace(match):
        char = match.group(1)
        return "\n" if char in "nN" else char

    return _UNESCAPE_RE.sub(_replace, text)


def fold_line(line: str) -> str:
    """Fold a content line at 75 octets; continuations start with a single space."""
    if len(line.encode("utf-8")) <= MAX_LINE_OCTETS:
        return line

    parts = []
    current = ""
    for char in line:
        candidate = current + char
        if len(candidate.encode("utf-8")) > MAX_LINE_OCTETS:
            parts.append(current)
            current = " " + char
        else:
            current = candidate
    parts.append(current)
    return "\r\n".join(parts)


def unfold(text: str) -> str:
    """Undo line folding on a serialized calendar."""
    return text.replace("\r\n ", "").replace("\r\n\t", "")


def format_utc(dt: datetime) -> str:
    """UTC basic format, e.g. 20250601T100000Z."""
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def format_date(day: date) -> str:
    return day.strftime("%Y%m%d")


@dataclass
class CalendarEntry:
    """One VEVENT, with raw (unescaped) text fields."""

    uid: str
    dtstamp: datetime
    start: Union[date, datetime]
    end: Union[date, datetime]
    all_day: bool
    summary: str
    description: str = ""
    location: str = ""
    organizer_name: str = "Organizer"
    organizer_email: str = ""
    status: str = "CONFIRMED"
    sequence: int = 0


def organizer_display_name(event) -> str:
    return getattr(event, "organizer_name", None) or getattr(event, "organizer_specification", None) or ""


def event_uid(event) -> str:
    return f"{event.id}@{settings.ICAL_UID_DOMAIN}"


def _is_timed(at: Optional[time]) -> bool:
    # Midnight is the form's "no time given" placeholder
    return at is not None and at.replace(tzinfo=None) != time(0, 0)


def event_bounds(event) -> tuple[Union[date, datetime], Union[date, datetime], bool]:
    """Return (start, end, all_day).

    Timed events get a fixed duration since events carry no end time. All-day
    events end on the following calendar day (DTEND is exclusive).
    """
    day, at = event_schedule(event)
    if _is_timed(at):
        start = localize(day, at)
        return start, start + timedelta(hours=settings.ICAL_EVENT_DURATION_HOURS), False
    return day, day + timedelta(days=1), True


def build_calendar_entry(event, organizer_email: str = "", now: Optional[datetime] = None) -> CalendarEntry:
    start, end, all_day = event_bounds(event)
    return CalendarEntry(
        uid=event_uid(event),
        dtstamp=now or utc_now(),
        start=start,
        end=end,
        all_day=all_day,
        summary=event.title or "",
        description=event.description or "",
        location=event.location or "",
        organizer_name=organizer_display_name(event) or "Organizer",
        organizer_email=organizer_email or "",
    )


def _vevent_lines(entry: CalendarEntry) -> list[str]:
    if entry.all_day:
        dtstart = f"DTSTART;VALUE=DATE:{format_date(entry.start)}"
        dtend = f"DTEND;VALUE=DATE:{format_date(entry.end)}"
    else:
        dtstart = f"DTSTART:{format_utc(entry.start)}"
        dtend = f"DTEND:{format_utc(entry.end)}"

    organizer = f"ORGANIZER;CN={escape_text(entry.organizer_name)}"
    if entry.organizer_email:
        organizer += f":mailto:{entry.organizer_email}"

    return [
        "BEGIN:VEVENT",
        f"UID:{entry.uid}",
        f"DTSTAMP:{format_utc(entry.dtstamp)}",
        dtstart,
        dtend,
        f"SUMMARY:{escape_text(entry.summary)}",
        f"DESCRIPTION:{escape_text(entry.description)}",
        f"LOCATION:{escape_text(entry.location)}",
        organizer,
        f"STATUS:{entry.status}",
        f"SEQUENCE:{entry.sequence}",
        "END:VEVENT",
    ]


def serialize_calendar(entry: CalendarEntry) -> str:
    """Render a VCALENDAR holding exactly one VEVENT, CRLF-terminated."""
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{CALENDAR_NAME}",
        "X-WR-TIMEZONE:UTC",
    ]
    lines.extend(_vevent_lines(entry))
    lines.append("END:VCALENDAR")
    return "\r\n".join(fold_line(line) for line in lines) + "\r\n"


def generate_ical_event(event, organizer_email: str = "", now: Optional[datetime] = None) -> str:
    """iCalendar text for ``event``. ``now`` becomes DTSTAMP."""
    return serialize_calendar(build_calendar_entry(event, organizer_email, now))


def ics_filename(event) -> str:
    return _UNSAFE_FILENAME_RE.sub("_", event.title or "event") + ".ics"


def write_ics_file(event, directory: Path, organizer_email: str = "", now: Optional[datetime] = None) -> Path:
    """Write the event's .ics file into ``directory`` and return its path."""
    path = Path(directory) / ics_filename(event)
    content = generate_ical_event(event, organizer_email, now)
    try:
        path.write_text(content, encoding="utf-8", newline="")
    except OSError as e:
        raise ExportTargetUnavailableError("file", str(e)) from e
    logger.info("Wrote calendar file %s for event %s", path, event.id)
    return path


def google_calendar_url(event) -> str:
    start, end, all_day = event_bounds(event)
    if all_day:
        midnight = time(0, 0)
        start, end = localize(start, midnight), localize(end, midnight)

    params = {
        "action": "TEMPLATE",
        "text": event.title or "",
        "dates": f"{format_utc(start)}/{format_utc(end)}",
        "details": f"{event.description or ''}\n\nOrganizer: {organizer_display_name(event)}",
        "location": event.location or "",
    }
    return f"{GOOGLE_CALENDAR_BASE_URL}?{urlencode(params)}"


def apple_calendar_url(event, now: Optional[datetime] = None) -> str:
    """A data: URI carrying the iCalendar text, for Apple Calendar on macOS/iOS."""
    encoded = quote(generate_ical_event(event, now=now), safe="-_.!~*'()")
    return f"data:text/calendar;charset=utf8,{encoded}"


def _display_date(day: date) -> str:
    return f"{day:%B} {day.day}, {day.year}"


def clipboard_summary(event) -> str:
    day, at = event_schedule(event)
    lines = [event.title or "", "", f"Date: {_display_date(day)}"]
    if at is not None:
        lines.append(f"Time: {at:%H:%M}")
    lines.extend([
        f"Location: {event.location or 'TBD'}",
        f"Organizer: {organizer_display_name(event)}",
        "",
        "Description:",
        event.description or "No description",
    ])
    return "\n".join(lines).strip()


ClipboardWriter = Callable[[str], None]


def _no_clipboard(text: str) -> None:
    raise ExportTargetUnavailableError("clipboard", "no clipboard available on the server")


def copy_event_to_clipboard(event, writer: ClipboardWriter = _no_clipboard) -> bool:
    """Best-effort copy of the event summary; writer failures are logged, never raised."""
    summary = clipboard_summary(event)
    try:
        writer(summary)
    except Exception as e:
        logger.warning("Copying event %s to clipboard failed: %s", getattr(event, "id", None), e)
        return False
    return True


def calendar_sync_options(event) -> list[dict[str, str]]:
    """The export targets offered for an event, in menu order."""
    return [
        {"id": "google", "label": "Google Calendar", "url": google_calendar_url(event)},
        {"id": "apple", "label": "Apple Calendar", "url": apple_calendar_url(event)},
        {"id": "ics", "label": "Download as ICS", "url": f"/api/events/{event.id}/calendar.ics"},
        {"id": "copy", "label": "Copy Details", "url": f"/api/events/{event.id}/summary"},
    ]
