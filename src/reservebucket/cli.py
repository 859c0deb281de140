from __future__ import annotations
import argparse, datetime as dt
import logging
import sys
from typing import Dict, List, Optional

from reservebucket.core.engine.bucket import nearest_reserve_date
from reservebucket.core.engine.order import SortKey
from reservebucket.core.engine.run_sim import build_payload, parse_query, run_from_fixture
from reservebucket.core.errors import ScheduleError
from reservebucket.core.export.report import render_txt, write_json, write_txt
from reservebucket.core.locale import ScheduleLocale, load_locale
from reservebucket.core.models import ReserveStatus, ScheduleDocument

LOGGER = logging.getLogger(__name__)


def _us_date(s: str) -> dt.date:
    try:
        return dt.datetime.strptime(s, "%m-%d-%Y").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date {s!r} (expected MM-DD-YYYY)") from None


def _locale(args: argparse.Namespace) -> Optional[ScheduleLocale]:
    return load_locale(args.locale) if args.locale else None


def _query(args: argparse.Namespace, document: ScheduleDocument) -> Dict:
    on = args.date
    if on is None:
        on = nearest_reserve_date(document.persons, dt.date.today())
        LOGGER.info("Snapped to nearest reserve day: %s", on)
    return parse_query({
        "date": on.isoformat(),
        "days": args.days,
        "status": args.status,
        "sort": args.sort,
    })


def _emit(args: argparse.Namespace, payload: Dict, locale: Optional[ScheduleLocale]) -> None:
    text = render_txt(payload, locale)
    print(text, end="")
    if args.out:
        write_txt(args.out, payload, locale)
        print("TXT:", args.out)
        if args.emit_json:
            json_path = args.out[:-4] + ".json" if args.out.endswith(".txt") else args.out + ".json"
            write_json(json_path, payload)
            print("JSON:", json_path)


def _cmd_parse(args: argparse.Namespace) -> None:
    from reservebucket.pdf.pdfio import read_schedule  # Lazy import; PDF backends only needed here

    document = read_schedule(args.pdf, locale=_locale(args), merge_pages=args.merge_pages)
    print(f"Month: {document.month:02d}/{document.year}")
    print(f"Pages: {document.pages}")
    print(f"Persons: {len(document.persons)}")
    dates = document.reserve_dates()
    if dates:
        print(f"Reserve days: {dates[0].isoformat()} .. {dates[-1].isoformat()}")


def _cmd_bucket(args: argparse.Namespace) -> None:
    from reservebucket.pdf.pdfio import read_schedule

    locale = _locale(args)
    document = read_schedule(args.pdf, locale=locale, merge_pages=args.merge_pages)
    payload = build_payload(document, _query(args, document))
    payload["source"] = args.pdf
    _emit(args, payload, locale)


def _cmd_bucket_sim(args: argparse.Namespace) -> None:
    # Assemble first so a missing --date can snap to the fixture's reserve days.
    locale = _locale(args)
    loaded = run_from_fixture(args.fixture, locale=locale, merge_pages=args.merge_pages, query={})
    document: ScheduleDocument = loaded["schedule"]
    payload = build_payload(document, _query(args, document))
    payload["source"] = loaded["source"]
    _emit(args, payload, locale)


def _add_query_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--date", type=_us_date, required=False, help="MM-DD-YYYY (defaults to nearest reserve day)")
    p.add_argument("--days", type=int, required=True, help="Exact consecutive reserve days (1-6)")
    p.add_argument("--status", choices=[s.value for s in ReserveStatus], help="Only this reserve status")
    p.add_argument("--sort", choices=[k.value for k in SortKey], default=SortKey.SENIORITY.value)
    p.add_argument("--out", required=False, help="Output TXT path")
    p.add_argument("--emit-json", action="store_true", help="Also write JSON twin")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="reservebucket")
    ap.add_argument("--verbose", "-v", action="count", default=0, help="More logging (-vv for debug)")
    ap.add_argument("--locale", required=False, help="Locale JSON (month names, status codes)")
    ap.add_argument("--merge-pages", action="store_true", help="Merge a person's records across pages")
    sp = ap.add_subparsers(dest="cmd")

    p = sp.add_parser("parse", help="Summarize a reserve schedule PDF")
    p.add_argument("--pdf", required=True, help="Path to schedule PDF")
    p.set_defaults(func=_cmd_parse)

    b = sp.add_parser("bucket", help="List crew on an exact run of reserve days")
    b.add_argument("--pdf", required=True, help="Path to schedule PDF")
    _add_query_flags(b)
    b.set_defaults(func=_cmd_bucket)

    q = sp.add_parser("bucket-sim", help="Same as bucket, from a JSON page fixture (no PDF)")
    q.add_argument("--fixture", required=True, help="Path to fixture JSON")
    _add_query_flags(q)
    q.set_defaults(func=_cmd_bucket_sim)

    args = ap.parse_args(argv)
    if getattr(args, "emit_json", False) and not args.out:
        ap.error("--emit-json requires --out")
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if not hasattr(args, "func"):
        ap.print_help()
        return 0
    try:
        args.func(args)
    except ScheduleError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        # Unreadable or malformed locale config, fixture or output path.
        print(f"reservebucket: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
