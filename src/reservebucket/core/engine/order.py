from __future__ import annotations
from enum import Enum
from typing import Iterable, List, Union

from reservebucket.core.models import Person


class SortKey(str, Enum):
    SENIORITY = "seniority"
    EMPLOYEE = "employee"


def order(persons: Iterable[Person], by: Union[SortKey, str] = SortKey.SENIORITY) -> List[Person]:
    """Stable ascending sort by seniority number or by employee code string."""
    key = SortKey(by)
    if key is SortKey.SENIORITY:
        return sorted(persons, key=lambda p: p.seniority)
    return sorted(persons, key=lambda p: p.employee)
