"""Shared dataclasses used across the schedule parser and bucket engine."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Mapping, Optional, Tuple


class ReserveStatus(str, Enum):
    RSA = "RSA"
    RSP = "RSP"


@dataclass(frozen=True)
class Person:
    seniority: int
    employee: str
    name: str = ""
    reserve_days: Mapping[date, ReserveStatus] = field(default_factory=dict, hash=False)

    def status_on(self, day: date) -> Optional[ReserveStatus]:
        return self.reserve_days.get(day)

    def is_on_reserve(self, day: date) -> bool:
        return day in self.reserve_days

    @property
    def dominant_status(self) -> Optional[ReserveStatus]:
        """Most common status; on a tie the status seen on the earliest date wins."""
        if not self.reserve_days:
            return None
        ordered = [self.reserve_days[day] for day in sorted(self.reserve_days)]
        counts = Counter(ordered)
        best = max(counts.values())
        return next(status for status in ordered if counts[status] == best)

    @property
    def first_day(self) -> Optional[date]:
        return min(self.reserve_days) if self.reserve_days else None

    @property
    def last_day(self) -> Optional[date]:
        return max(self.reserve_days) if self.reserve_days else None

    @property
    def key(self) -> Tuple[int, str]:
        return self.seniority, self.employee


@dataclass(frozen=True)
class ScheduleDocument:
    month: int
    year: int
    persons: Tuple[Person, ...]
    pages: int = 0

    def reserve_dates(self) -> List[date]:
        days = set()
        for person in self.persons:
            days.update(person.reserve_days)
        return sorted(days)


@dataclass(frozen=True)
class Bucket:
    days: int
    persons: Tuple[Person, ...]

    def __len__(self) -> int:
        return len(self.persons)
