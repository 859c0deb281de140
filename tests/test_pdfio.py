from __future__ import annotations
from datetime import date

import pytest

from reservebucket.core.errors import InvalidSource
from reservebucket.core.models import ReserveStatus
from reservebucket.pdf import pdfio


def test_extract_text_by_page_reads_lines(schedule_pdf):
    pages = pdfio.extract_text_by_page(str(schedule_pdf))
    assert len(pages) == 2
    assert "Period: December 2024" in pages[0]
    assert "#87 / 157629" in pages[0]
    assert all(line == line.strip() and line for page in pages for line in page)


def test_read_schedule_end_to_end(schedule_pdf):
    doc = pdfio.read_schedule(str(schedule_pdf))
    assert (doc.month, doc.year, doc.pages) == (12, 2024, 2)
    assert [p.seniority for p in doc.persons] == [87, 89, 90]
    last = doc.persons[-1]
    assert last.reserve_days[date(2024, 12, 2)] is ReserveStatus.RSP


def test_pdfplumber_fallback_matches_primary(monkeypatch, schedule_pdf):
    pytest.importorskip("pdfplumber")
    primary = pdfio.extract_text_by_page(str(schedule_pdf))

    def _broken(path):
        raise RuntimeError("MuPDF not available")

    monkeypatch.setattr(pdfio, "_extract_with_pymupdf", _broken)
    with pytest.warns(RuntimeWarning, match="mupdf"):
        fallback = pdfio.extract_text_by_page(str(schedule_pdf))
    assert len(fallback) == len(primary)
    fallback_doc = pdfio.assemble(fallback)
    primary_doc = pdfio.assemble(primary)
    assert [p.key for p in fallback_doc.persons] == [p.key for p in primary_doc.persons]
    assert [p.reserve_days for p in fallback_doc.persons] == [p.reserve_days for p in primary_doc.persons]


def test_missing_file_is_invalid_source(tmp_path):
    with pytest.raises(InvalidSource) as err:
        pdfio.extract_text_by_page(str(tmp_path / "nope.pdf"))
    assert err.value.checkpoint == "source"
    assert err.value.reason == "file not found"


def test_unreadable_file_is_invalid_source(monkeypatch, tmp_path):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not a pdf")

    def _missing(path):
        raise ModuleNotFoundError("backend")

    for name in ("_extract_with_pymupdf", "_extract_with_pdfplumber", "_extract_with_pdfminer"):
        monkeypatch.setattr(pdfio, name, _missing)
    with pytest.raises(InvalidSource, match="no PDF backend available"):
        pdfio.extract_text_by_page(str(bogus))


def test_normalize_lines_collapses_inner_whitespace():
    text = "  Period:\tDecember   2024 \n\n#87  /  157629\n   \nRSA  "
    assert pdfio._normalize_lines(text) == ["Period: December 2024", "#87 / 157629", "RSA"]


def test_last_backend_failure_does_not_warn(monkeypatch, tmp_path, recwarn):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not a pdf")

    def _missing(path):
        raise ModuleNotFoundError("backend")

    def _broken(path):
        raise RuntimeError("bad xref")

    monkeypatch.setattr(pdfio, "_extract_with_pymupdf", _missing)
    monkeypatch.setattr(pdfio, "_extract_with_pdfplumber", _missing)
    monkeypatch.setattr(pdfio, "_extract_with_pdfminer", _broken)
    with pytest.raises(InvalidSource, match="pdfminer: bad xref"):
        pdfio.extract_text_by_page(str(bogus))
    assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]


def test_earlier_backend_failure_warns_before_next(monkeypatch, tmp_path):
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not a pdf")

    def _broken(path):
        raise RuntimeError("bad xref")

    def _pages(path):
        return [["Period: December 2024"]]

    monkeypatch.setattr(pdfio, "_extract_with_pymupdf", _broken)
    monkeypatch.setattr(pdfio, "_extract_with_pdfplumber", _pages)
    with pytest.warns(RuntimeWarning, match="trying the next backend"):
        assert pdfio.extract_text_by_page(str(bogus)) == [["Period: December 2024"]]
