from __future__ import annotations
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple
import pytest

from reservebucket.core.locale import default_locale
from reservebucket.core.models import Person, ReserveStatus
from reservebucket.pdf.pdfio import _load_fitz

try:
    fitz = _load_fitz()  # PyMuPDF
except ImportError:
    fitz = None

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"

PersonSpec = Tuple[int, str, Sequence[str]]


def page_lines(persons: Sequence[PersonSpec], period: str | None = "December 2024") -> List[str]:
    """Synthetic page text: optional period banner, then a header and marker lines per person."""
    lines: List[str] = ["Reserve Schedule"]
    if period:
        lines.append(f"Period: {period}")
    for seniority, employee, codes in persons:
        lines.append(f"#{seniority} / {employee}")
        for idx, code in enumerate(codes, start=1):
            lines.append(code)
            lines.append(f"Day {idx}")
    return lines


def make_person(seniority: int, employee: str, start: date, codes: Sequence[str]) -> Person:
    days: Dict[date, ReserveStatus] = {}
    for offset, code in enumerate(codes):
        if code:
            days[date.fromordinal(start.toordinal() + offset)] = ReserveStatus(code)
    return Person(seniority=seniority, employee=employee, reserve_days=days)


@pytest.fixture
def locale():
    return default_locale()


@pytest.fixture
def build_page() -> Callable[..., List[str]]:
    return page_lines


@pytest.fixture
def person_factory() -> Callable[..., Person]:
    return make_person


@pytest.fixture(scope="session")
def sample_fixture_path() -> Path:
    return FIXTURES / "sample_sim_dec_2024.json"


@pytest.fixture(scope="session")
def preview_persons() -> List[Person]:
    start = date(2024, 12, 1)
    return [
        make_person(87, "157629", start, ["RSA"] * 16),
        make_person(89, "586473", date(2024, 12, 6), ["RSP"] * 11),
        make_person(90, "280137", date(2024, 12, 11), ["RSA"] * 14),
        make_person(101, "802791", date(2024, 12, 4), ["RSP"] * 19),
    ]


@pytest.fixture(scope="session")
def schedule_pdf(tmp_path_factory: pytest.TempPathFactory) -> Path:
    if fitz is None:
        pytest.skip("PyMuPDF not installed; synthetic PDF generation requires fitz")
    out = tmp_path_factory.mktemp("pdfs") / "reserve_schedule.pdf"
    _write_schedule_pdf(
        out,
        pages=[
            page_lines([(87, "157629", ["RSA"] * 5), (89, "586473", ["RSP"] * 3)]),
            page_lines([(90, "280137", ["RSA", "RSP", "RSP"])], period=None),
        ],
    )
    return out


def _write_schedule_pdf(path: Path, pages: Sequence[Sequence[str]]) -> None:
    assert fitz is not None, "PyMuPDF required to synthesize PDFs in tests"
    doc = fitz.open()
    line_h = 10.0
    for lines in pages:
        page = doc.new_page(width=612, height=792)
        y = 48.0
        for line in lines:
            page.insert_text(fitz.Point(72, y), line, fontsize=8, fontname="helv")
            y += line_h
    doc.save(path)
    doc.close()
