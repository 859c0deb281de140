from __future__ import annotations
import datetime as dt
import json
from pathlib import Path
from typing import Dict, List, Optional

from reservebucket.core.engine.assemble import assemble
from reservebucket.core.engine.bucket import group_buckets, bucket, run_length
from reservebucket.core.engine.order import SortKey, order
from reservebucket.core.locale import ScheduleLocale
from reservebucket.core.models import Person, ReserveStatus, ScheduleDocument


def person_row(person: Person, on: Optional[dt.date] = None) -> Dict:
    row = {
        "seniority": person.seniority,
        "employee": person.employee,
        "name": person.name,
        "status": person.dominant_status.value if person.dominant_status else None,
        "reserve_days": len(person.reserve_days),
        "first_day": person.first_day.isoformat() if person.first_day else None,
        "last_day": person.last_day.isoformat() if person.last_day else None,
    }
    if on is not None:
        status = person.status_on(on)
        row["status_on_date"] = status.value if status else None
        row["run_length"] = run_length(person, on)
    return row


def parse_query(raw: Dict) -> Dict:
    """Normalize a fixture/CLI query into typed values."""
    status = raw.get("status")
    return {
        "date": dt.date.fromisoformat(str(raw["date"])),
        "days": int(raw["days"]),
        "status": ReserveStatus(status) if status else None,
        "sort": SortKey(raw.get("sort") or SortKey.SENIORITY.value),
    }


def build_payload(document: ScheduleDocument, query: Optional[Dict] = None) -> Dict:
    payload: Dict = {
        "document": {
            "month": document.month,
            "year": document.year,
            "pages": document.pages,
            "persons": len(document.persons),
        },
    }
    if not query:
        return payload
    on = query["date"]
    matched = order(bucket(document.persons, on, query["days"], query["status"]), query["sort"])
    payload["query"] = {
        "date": on.isoformat(),
        "days": query["days"],
        "status": query["status"].value if query["status"] else None,
        "sort": query["sort"].value,
    }
    payload["persons"] = [person_row(p, on) for p in matched]
    payload["buckets"] = {
        str(b.days): [p.seniority for p in order(b.persons, query["sort"])]
        for b in group_buckets(document.persons, on, query["status"])
    }
    return payload


def load_fixture(path: str) -> Dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    pages = data.get("pages")
    if not isinstance(pages, list) or not all(isinstance(p, list) for p in pages):
        raise ValueError(f"Fixture {path} must hold a list of page line lists")
    return data


def run_from_fixture(
    path: str,
    locale: Optional[ScheduleLocale] = None,
    merge_pages: bool = False,
    query: Optional[Dict] = None,
) -> Dict:
    data = load_fixture(path)
    pages: List[List[str]] = [[str(line) for line in page] for page in data["pages"]]
    document = assemble(pages, locale=locale, merge_pages=merge_pages)
    raw_query = query if query is not None else data.get("query")
    payload = build_payload(document, parse_query(raw_query) if raw_query else None)
    payload["source"] = Path(path).name
    payload["schedule"] = document
    return payload
