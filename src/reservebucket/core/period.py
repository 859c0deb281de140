"""Locate the schedule month from the ``Period: <Month> <Year>`` banner."""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from reservebucket.core.locale import ScheduleLocale, default_locale

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def _period_re(label: str) -> Pattern[str]:
    return re.compile(re.escape(label) + r"\s*([^\W\d_]+)\s*(\d{4})")


def month_index(name: str, locale: Optional[ScheduleLocale] = None) -> Optional[int]:
    return (locale or default_locale()).month_index(name)


def extract_period(text: str, locale: Optional[ScheduleLocale] = None) -> Optional[Tuple[int, int]]:
    """
    Return ``(month, year)`` from the first period banner in ``text``.

    Only the first match is considered; an unknown month name yields None
    rather than a later banner.
    """
    loc = locale or default_locale()
    match = _period_re(loc.period_label).search(text or "")
    if not match:
        return None
    month = loc.month_index(match.group(1))
    if month is None:
        LOGGER.debug("Unknown month name in period banner: %r", match.group(1))
        return None
    try:
        year = int(match.group(2))
    except ValueError:
        return None
    return month, year
