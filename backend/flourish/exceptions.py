"""Domain errors.

Neither error is fatal: each one degrades a single listing or export action and
the HTTP layer turns it into a 4xx/5xx response (see ``flourish.main``).
"""


class FlourishError(Exception):
    """Base class for errors raised by the domain helpers."""


class InvalidEventDataError(FlourishError, ValueError):
    """An event's date or time could not be interpreted."""

    def __init__(self, event_id, message: str):
        self.event_id = event_id
        super().__init__(f"Event {event_id}: {message}")


class ExportTargetUnavailableError(FlourishError):
    """A clipboard or file export target is missing or refused the write."""

    def __init__(self, target: str, reason: str = ""):
        self.target = target
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Export target '{target}' unavailable{detail}")
