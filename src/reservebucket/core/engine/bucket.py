from __future__ import annotations
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from reservebucket.core.models import Bucket, Person, ReserveStatus

# Days examined from the reference date. Counts stop one short of it, so
# runs of six days or more all land in the 6-day bucket and 7 never fills.
MAX_SCAN_DAYS = 7
MAX_RUN = MAX_SCAN_DAYS - 1

BUCKET_SIZES = range(1, MAX_SCAN_DAYS)


def run_length(person: Person, on: date) -> int:
    """Consecutive days from ``on`` holding the status recorded on ``on``, capped at MAX_RUN."""
    target = person.status_on(on)
    if target is None:
        return 0
    count = 0
    for offset in range(MAX_RUN):
        if person.status_on(on + timedelta(days=offset)) != target:
            break
        count += 1
    return count


def bucket(
    persons: Iterable[Person],
    on: date,
    days: int,
    status: Optional[ReserveStatus] = None,
) -> List[Person]:
    out: List[Person] = []
    if days <= 0 or days >= MAX_SCAN_DAYS:
        return out
    for person in persons:
        target = person.status_on(on)
        if target is None:
            continue
        if status is not None and target != status:
            continue
        if run_length(person, on) == days:
            out.append(person)
    return out


def group_buckets(
    persons: Sequence[Person],
    on: date,
    status: Optional[ReserveStatus] = None,
    sizes: Iterable[int] = BUCKET_SIZES,
) -> List[Bucket]:
    return [Bucket(days=size, persons=tuple(bucket(persons, on, size, status))) for size in sizes]


def nearest_reserve_date(persons: Iterable[Person], reference: date) -> Optional[date]:
    """Reserve day closest to ``reference``; the earlier day wins a tie."""
    best: Optional[date] = None
    best_delta = timedelta.max
    for person in persons:
        for day in person.reserve_days:
            delta = abs(day - reference)
            if delta < best_delta or (delta == best_delta and best is not None and day < best):
                best = day
                best_delta = delta
    return best
