"""Terminal failures reported by the schedule reader."""
from __future__ import annotations

from typing import Optional


class ScheduleError(RuntimeError):
    """Base class for failures a caller reports to the user."""

    checkpoint = "unknown"


class InvalidSource(ScheduleError):
    """Raised when the source document cannot be read at all."""

    checkpoint = "source"

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(f"Unable to read schedule source {path}{detail}")


class MissingPeriod(ScheduleError):
    """Raised when the first page carries no resolvable ``Period:`` marker."""

    checkpoint = "period"

    def __init__(self) -> None:
        super().__init__("Could not determine month and year")


class NoReserveData(ScheduleError):
    """Raised when no page produced a person with reserve days."""

    checkpoint = "reserve_data"

    def __init__(self, pages: int) -> None:
        self.pages = pages
        super().__init__(f"No reserve schedule data found in {pages} page(s)")
