from __future__ import annotations
import json, os, pkgutil
from dataclasses import dataclass, field
from functools import lru_cache
from importlib.resources import files as ir_files
from pathlib import Path
from typing import Dict, Optional, Tuple

from reservebucket.core.models import ReserveStatus

LOCALE_ENV = "RESERVEBUCKET_LOCALE"


@dataclass(frozen=True)
class ScheduleLocale:
    months: Tuple[str, ...]
    case_sensitive_months: bool = True
    period_label: str = "Period:"
    employee_digits: int = 6
    status_codes: Dict[str, ReserveStatus] = field(
        default_factory=lambda: {s.value: s for s in ReserveStatus}
    )

    def __post_init__(self) -> None:
        if not self.status_codes:
            raise ValueError("Locale needs at least one reserve status code")

    def month_index(self, name: str) -> Optional[int]:
        """1-based index of ``name`` in the month table, or None."""
        if self.case_sensitive_months:
            try:
                return self.months.index(name) + 1
            except ValueError:
                return None
        folded = name.casefold()
        for idx, month in enumerate(self.months, start=1):
            if month.casefold() == folded:
                return idx
        return None

    def status_for(self, code: str) -> Optional[ReserveStatus]:
        return self.status_codes.get(code)


def _read_default_locale_bytes() -> bytes:
    """
    Resolve reservebucket/config/locale_en.json:
      • installed package via importlib.resources
      • pkgutil.get_data fallback
      • dev-tree fallback
    """
    try:
        return (ir_files("reservebucket") / "config" / "locale_en.json").read_bytes()
    except (FileNotFoundError, ModuleNotFoundError):
        pass

    try:
        data = pkgutil.get_data("reservebucket", "config/locale_en.json")
        if data:
            return data
    except OSError:
        pass

    guess = Path(__file__).parent.parent / "config" / "locale_en.json"
    if guess.exists():
        return guess.read_bytes()

    raise FileNotFoundError(
        "locale_en.json not bundled. Ensure package-data includes config/*.json."
    )


def locale_from_payload(payload: dict) -> ScheduleLocale:
    months = payload.get("months")
    if not isinstance(months, list) or len(months) != 12:
        raise ValueError("Locale must list exactly 12 month names")
    if len({str(m) for m in months}) != 12:
        raise ValueError("Duplicate month name in locale")
    digits = int(payload.get("employee_digits", 6))
    if digits <= 0:
        raise ValueError(f"Invalid employee_digits: {digits}")
    raw_codes = payload.get("status_codes") or {s.value: s.value for s in ReserveStatus}
    codes: Dict[str, ReserveStatus] = {}
    for code, status in raw_codes.items():
        try:
            codes[str(code)] = ReserveStatus(status)
        except ValueError:
            raise ValueError(f"Unknown reserve status for code {code!r}: {status!r}") from None
    return ScheduleLocale(
        months=tuple(str(m) for m in months),
        case_sensitive_months=bool(payload.get("case_sensitive_months", True)),
        period_label=str(payload.get("period_label", "Period:")),
        employee_digits=digits,
        status_codes=codes,
    )


def load_locale(path: str | Path) -> ScheduleLocale:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return locale_from_payload(payload)


@lru_cache(maxsize=1)
def _bundled_locale() -> ScheduleLocale:
    return locale_from_payload(json.loads(_read_default_locale_bytes().decode("utf-8")))


def default_locale() -> ScheduleLocale:
    override = os.environ.get(LOCALE_ENV)
    if override:
        return load_locale(override)
    return _bundled_locale()
