"""Join-tab visibility rules.

An event is listed publicly while its stored flags allow it and wall-clock time
has not passed its nominal instant plus the grace window. Aging out of the feed
is decided here at read time; stored flags are never touched.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional, TypeVar

import pytz

from flourish.clock import Clock, utc_now
from flourish.config import settings
from flourish.exceptions import InvalidEventDataError

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)

E = TypeVar("E")


@dataclass(frozen=True)
class EventVisibility:
    """Snapshot of an event's lifecycle flags with the listing rules on top."""

    is_published: bool
    in_join_tab: bool
    in_my_events: bool

    @classmethod
    def of(cls, event) -> "EventVisibility":
        return cls(
            is_published=bool(event.is_published),
            in_join_tab=bool(event.is_visible_in_join_tab),
            in_my_events=bool(event.is_visible_in_my_events),
        )

    @property
    def is_publicly_listed(self) -> bool:
        """Hidden-from-join always wins over the published flag."""
        return self.is_published and self.in_join_tab

    @property
    def is_in_owner_dashboard(self) -> bool:
        return self.in_my_events


def _parse_date(event) -> date:
    value = getattr(event, "event_date", None)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidEventDataError(getattr(event, "id", None), f"unparseable event_date {value!r}")


def _parse_time(event) -> Optional[time]:
    value = getattr(event, "event_time", None)
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return time.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidEventDataError(getattr(event, "id", None), f"unparseable event_time {value!r}")


def event_schedule(event) -> tuple[date, Optional[time]]:
    """Return the event's (date, time) pair, raising InvalidEventDataError if either is malformed."""
    return _parse_date(event), _parse_time(event)


def localize(day: date, at: time, tz_name: Optional[str] = None) -> datetime:
    """Attach the configured event timezone to a wall-clock date and time."""
    tz = pytz.timezone(tz_name or settings.EVENT_TIMEZONE)
    return tz.localize(datetime.combine(day, at.replace(tzinfo=None)))


def nominal_instant(event) -> datetime:
    """The instant an event stops being "of interest" before the grace window.

    Timed events use their start; all-day events use the last millisecond of the day.
    """
    day, at = event_schedule(event)
    return localize(day, at if at is not None else END_OF_DAY)


def as_aware(now: datetime) -> datetime:
    """Read a naive ``now`` as wall-clock time in the event timezone."""
    if now.tzinfo is None or now.utcoffset() is None:
        return pytz.timezone(settings.EVENT_TIMEZONE).localize(now)
    return now


def local_date(now: datetime) -> date:
    """The calendar date at ``now`` in the event timezone."""
    return as_aware(now).astimezone(pytz.timezone(settings.EVENT_TIMEZONE)).date()


def join_tab_cutoff(event) -> datetime:
    return nominal_instant(event) + timedelta(minutes=settings.JOIN_TAB_GRACE_MINUTES)


def is_visible_in_join_tab(event, now: Optional[datetime] = None) -> bool:
    """Should ``event`` appear in the public join listing at ``now``?

    Raises InvalidEventDataError when a listed event has an unparseable date or time.
    """
    if not EventVisibility.of(event).is_publicly_listed:
        return False
    if now is None:
        now = utc_now()
    return as_aware(now) <= join_tab_cutoff(event)


def filter_join_tab_events(events: Iterable[E], clock: Clock = utc_now) -> list[E]:
    """Keep the events visible in the join tab, preserving their order.

    ``clock`` is read once so every event is judged against the same instant.
    Events with malformed schedules are dropped with a warning.
    """
    now = clock()
    visible = []
    for event in events:
        try:
            if is_visible_in_join_tab(event, now):
                visible.append(event)
        except InvalidEventDataError as e:
            logger.warning("Hiding event from join tab: %s", e)
    return visible
