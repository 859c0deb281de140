"""Line-by-line scanner that turns one page of schedule text into persons."""
from __future__ import annotations

import calendar
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Match, Optional, Pattern, Sequence, Tuple

from reservebucket.core.locale import ScheduleLocale, default_locale
from reservebucket.core.models import Person, ReserveStatus

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _header_re(digits: int) -> Pattern[str]:
    return re.compile(r"#?(\d+)\s*/\s*(\d{%d})" % digits)


@lru_cache(maxsize=8)
def _marker_re(codes: Tuple[str, ...]) -> Pattern[str]:
    alternation = "|".join(re.escape(c) for c in sorted(codes, key=len, reverse=True))
    return re.compile(r"^\s*(" + alternation + r")\s*$")


def _month_length(year: int, month: int) -> int:
    if not 1 <= month <= 12 or year < 1:
        return 0
    return calendar.monthrange(year, month)[1]


@dataclass
class PageScan:
    """
    Mutable walk state for one page.

    ``active`` is None until a header line is seen; ``day`` is the day of
    month the next marker line lands on.
    """

    month: int
    year: int
    locale: ScheduleLocale
    active: Optional[Tuple[int, str]] = None
    day: int = 1
    days: Dict[date, ReserveStatus] = field(default_factory=dict)
    persons: List[Person] = field(default_factory=list)
    skipped: int = 0

    def __post_init__(self) -> None:
        self.month_length = _month_length(self.year, self.month)

    def emit(self) -> None:
        if self.active is not None and self.days:
            seniority, employee = self.active
            self.persons.append(
                Person(seniority=seniority, employee=employee, reserve_days=dict(self.days))
            )
            LOGGER.debug("Added person #%s with %d reserve days", seniority, len(self.days))
        elif self.active is not None:
            LOGGER.debug("Dropping person #%s with no reserve days", self.active[0])

    def on_header(self, match: Match[str]) -> None:
        self.emit()
        self.active = (int(match.group(1)), match.group(2))
        self.days = {}
        self.day = 1

    def on_marker(self, match: Match[str]) -> None:
        if self.active is None:
            return
        status = self.locale.status_for(match.group(1))
        if status is None:
            return
        if self.day > self.month_length:
            # past month end: nothing recorded and the counter stays put
            self.skipped += 1
            LOGGER.debug(
                "Skipping %s for #%s: day %d outside %04d-%02d",
                status.value, self.active[0], self.day, self.year, self.month,
            )
            return
        self.days[date(self.year, self.month, self.day)] = status
        self.day += 1

    def rules(self) -> List[Tuple[Pattern[str], Callable[[Match[str]], None]]]:
        # Header first: a line is either a header or a marker, never both.
        return [
            (_header_re(self.locale.employee_digits), self.on_header),
            (_marker_re(tuple(self.locale.status_codes)), self.on_marker),
        ]

    def feed(self, line: str) -> None:
        for pattern, handler in self.rules():
            match = pattern.search(line)
            if match:
                handler(match)
                return

    def finish(self) -> List[Person]:
        self.emit()
        self.active = None
        self.days = {}
        return list(self.persons)


def scan_lines(scan: PageScan, lines: Iterable[str]) -> PageScan:
    for line in lines:
        scan.feed(line)
    return scan


def parse_page(
    lines: Sequence[str],
    month: int,
    year: int,
    locale: Optional[ScheduleLocale] = None,
) -> List[Person]:
    scan = scan_lines(PageScan(month=month, year=year, locale=locale or default_locale()), lines)
    persons = scan.finish()
    if scan.skipped:
        LOGGER.debug("Skipped %d marker(s) beyond month end", scan.skipped)
    return persons
