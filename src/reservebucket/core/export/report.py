from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List, Optional

from reservebucket.core.locale import ScheduleLocale, default_locale
from reservebucket.version import APP_VERSION


def render_txt(payload: Dict, locale: Optional[ScheduleLocale] = None) -> str:
    """
    payload: build_payload() output with a query, i.e.
      {"document": {...}, "query": {...}, "persons": [...], "buckets": {...}}
    """
    doc = payload["document"]
    query = payload.get("query") or {}
    lines: List[str] = []

    months = (locale or default_locale()).months
    month_name = months[doc["month"] - 1] if 1 <= doc["month"] <= 12 else "?"
    lines.append(f"Period: {month_name} {doc['year']}")
    src = payload.get("source")
    if src:
        lines.append(f"Source: {src}")
    lines.append(f"Pages: {doc['pages']} | Persons: {doc['persons']}")
    lines.append("")

    if query:
        status = query.get("status") or "any"
        lines.append(f"Date: {query['date']} | Days: {query['days']} | Status: {status} | Sort: {query['sort']}")
        persons = payload.get("persons") or []
        lines.append(f"Matched: {len(persons)}")
        for row in persons:
            lines.append(f"  #{row['seniority']} ({row['employee']}) {row.get('status_on_date') or ''}".rstrip())
        lines.append("")
        buckets = payload.get("buckets") or {}
        for size, seniorities in buckets.items():
            listed = ", ".join(f"#{s}" for s in seniorities) or "-"
            lines.append(f"{size}-day: {listed}")
        lines.append("")

    lines.append(f"Generated by reservebucket v{APP_VERSION}")
    return "\n".join(lines) + "\n"


def write_txt(path: str, payload: Dict, locale: Optional[ScheduleLocale] = None) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(render_txt(payload, locale), encoding="utf-8", newline="\n")
    return str(p)


def write_json(path: str, payload: Dict) -> str:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    blob = {key: value for key, value in payload.items() if key != "schedule"}
    p.write_text(json.dumps(blob, indent=2), encoding="utf-8")
    return str(p)
