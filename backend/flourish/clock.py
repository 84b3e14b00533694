"""Injectable time source.

Anything that compares against "now" takes a ``Clock`` instead of reading the
system clock, so tests can pin time.
"""
from datetime import datetime, timezone
from typing import Callable

# Clocks return timezone-aware datetimes
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    """Return a clock frozen at ``instant``."""
    return lambda: instant


def get_clock() -> Clock:
    """FastAPI dependency — overridden in tests."""
    return utc_now
