from __future__ import annotations

import importlib
import logging
import warnings
from pathlib import Path
from types import ModuleType
from typing import Callable, List, Optional, Sequence, Tuple

from reservebucket.core.engine.assemble import assemble
from reservebucket.core.errors import InvalidSource
from reservebucket.core.locale import ScheduleLocale
from reservebucket.core.models import ScheduleDocument

LOGGER = logging.getLogger(__name__)

PageLines = List[List[str]]

# PyMuPDF's SWIG bindings register helper types without __module__.
_SWIG_NOISE = r"builtin type .* has no __module__ attribute"


def extract_text_by_page(path: str) -> PageLines:
    """
    Return the textual contents of each PDF page as a list of line lists.

    Backends are tried in order (PyMuPDF, pdfplumber, pdfminer.six) and the
    first one that succeeds wins. Raises InvalidSource when the file is
    missing or no backend can read it.
    """
    pdf_path = Path(path)
    if not pdf_path.exists():
        raise InvalidSource(str(pdf_path), "file not found")

    errors: List[str] = []
    extractors: Sequence[Tuple[str, Callable[[str], PageLines]]] = (
        ("mupdf", _extract_with_pymupdf),
        ("pdfplumber", _extract_with_pdfplumber),
        ("pdfminer", _extract_with_pdfminer),
    )
    last = len(extractors) - 1
    for idx, (name, extractor) in enumerate(extractors):
        try:
            pages = extractor(str(pdf_path))
        except ImportError:
            LOGGER.debug("PDF backend %s not installed", name)
            continue
        except Exception as exc:
            errors.append(f"{name}: {exc}")
            if idx == last:
                LOGGER.warning("PDF backend '%s' failed (%s); no backend left", name, exc)
                continue
            message = _format_backend_warning(name, exc)
            LOGGER.warning(message)
            warnings.warn(message, RuntimeWarning, stacklevel=2)
            continue
        LOGGER.info("Extracted %d page(s) from %s with %s", len(pages), pdf_path.name, name)
        return pages

    error_detail = "; ".join(errors) if errors else "no PDF backend available"
    raise InvalidSource(str(pdf_path), error_detail)


def read_schedule(
    path: str,
    locale: Optional[ScheduleLocale] = None,
    merge_pages: bool = False,
) -> ScheduleDocument:
    return assemble(extract_text_by_page(path), locale=locale, merge_pages=merge_pages)


def _format_backend_warning(backend: str, exc: Exception) -> str:
    reason = str(exc) or exc.__class__.__name__
    return f"PDF backend '{backend}' failed ({reason}); trying the next backend."


def _normalize_lines(text: str) -> List[str]:
    """Non-blank lines with runs of spaces and tabs collapsed to one space."""
    return [" ".join(raw.split()) for raw in text.splitlines() if raw.strip()]


def _load_fitz() -> ModuleType:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=_SWIG_NOISE, category=DeprecationWarning)
        return importlib.import_module("fitz")


def _extract_with_pymupdf(path: str) -> PageLines:
    fitz = _load_fitz()
    doc = fitz.open(path)
    try:
        return [_normalize_lines(page.get_text("text") or "") for page in doc]
    finally:
        doc.close()


def _extract_with_pdfplumber(path: str) -> PageLines:
    import pdfplumber

    with pdfplumber.open(path) as pdf:
        return [_normalize_lines(page.extract_text() or "") for page in pdf.pages]


def _extract_with_pdfminer(path: str) -> PageLines:
    from pdfminer.high_level import extract_pages
    from pdfminer.layout import LAParams, LTTextContainer

    laparams = LAParams(char_margin=2.0, line_margin=0.5, word_margin=0.1)
    pages: PageLines = []
    for page_layout in extract_pages(path, laparams=laparams):
        text = "".join(el.get_text() for el in page_layout if isinstance(el, LTTextContainer))
        pages.append(_normalize_lines(text))
    return pages
