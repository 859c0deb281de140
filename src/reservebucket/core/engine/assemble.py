from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from reservebucket.core.errors import MissingPeriod, NoReserveData
from reservebucket.core.locale import ScheduleLocale, default_locale
from reservebucket.core.models import Person, ScheduleDocument
from reservebucket.core.parse.lines import parse_page
from reservebucket.core.period import extract_period

LOGGER = logging.getLogger(__name__)

Pages = Sequence[Sequence[str]]


def merge_fragments(persons: Sequence[Person]) -> List[Person]:
    """
    Fold persons sharing ``(seniority, employee)`` into one record.

    Order follows the first appearance of each key; on a date clash the
    later fragment wins.
    """
    merged: Dict[Tuple[int, str], Person] = {}
    for person in persons:
        prior = merged.get(person.key)
        if prior is None:
            merged[person.key] = person
            continue
        days = dict(prior.reserve_days)
        days.update(person.reserve_days)
        merged[person.key] = Person(
            seniority=prior.seniority,
            employee=prior.employee,
            name=prior.name or person.name,
            reserve_days=days,
        )
    return list(merged.values())


def assemble(
    pages: Pages,
    locale: Optional[ScheduleLocale] = None,
    merge_pages: bool = False,
) -> ScheduleDocument:
    """
    Parse every page with the period found on page 1.

    Raises MissingPeriod when page 1 has no resolvable period and
    NoReserveData when no page yields a person.
    """
    loc = locale or default_locale()
    period = extract_period("\n".join(pages[0]), loc) if pages else None
    if period is None:
        LOGGER.info("No period banner on first page")
        month, year = 0, 0
    else:
        month, year = period
        LOGGER.info("Found month/year: %d/%d", month, year)

    persons: List[Person] = []
    for index, lines in enumerate(pages, start=1):
        page_persons = parse_page(lines, month, year, loc)
        LOGGER.debug("Page %d: %d lines, %d persons", index, len(lines), len(page_persons))
        persons.extend(page_persons)

    if period is None:
        raise MissingPeriod()
    if not persons:
        raise NoReserveData(pages=len(pages))

    if merge_pages:
        before = len(persons)
        persons = merge_fragments(persons)
        LOGGER.debug("Merged %d page fragments into %d persons", before, len(persons))

    LOGGER.info("Parsed %d persons from %d pages", len(persons), len(pages))
    return ScheduleDocument(month=month, year=year, persons=tuple(persons), pages=len(pages))
