"""Opening PDFs with PyMuPDF and reading positioned text fragments."""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Union

import pymupdf as fitz

from question_bank.errors import PDFProcessingError

logger = logging.getLogger(__name__)

PDFSource = Union[bytes, str, os.PathLike]


@dataclass(frozen=True)
class TextFragment:
    """One positioned line of text on a page."""

    text: str
    size: float
    page: int
    x: float = 0.0
    y: float = 0.0


@contextmanager
def open_pdf(source: PDFSource) -> Iterator[fitz.Document]:
    """Open a PDF from raw bytes or a filesystem path."""
    try:
        if isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            path = os.fspath(source)
            if not os.path.exists(path):
                raise FileNotFoundError(f"PDF not found: {path}")
            doc = fitz.open(path)
    except FileNotFoundError:
        raise
    except Exception as exc:
        logger.error("failed to open PDF: %s", exc)
        raise PDFProcessingError(f"Could not open PDF: {exc}") from exc

    logger.debug("opened PDF with %d pages", doc.page_count)
    try:
        yield doc
    finally:
        doc.close()


def page_fragments(page: fitz.Page, page_number: int) -> List[TextFragment]:
    """Return the page's text lines in reading order with their font size.

    A line's size is the largest span size on it, so a bold numbered title
    made of several spans keeps its heading size.
    """
    fragments: List[TextFragment] = []
    data = page.get_text("dict", sort=True)
    for block in data.get("blocks", []):
        if block.get("type", 0) != 0:
            continue  # image block
        for line in block.get("lines", []):
            spans = line.get("spans", [])
            text = "".join(s.get("text", "") for s in spans).strip()
            if not text:
                continue
            size = max((float(s.get("size", 0.0)) for s in spans), default=0.0)
            x0, y0 = line.get("bbox", (0.0, 0.0, 0.0, 0.0))[:2]
            fragments.append(
                TextFragment(text=text, size=round(size, 2), page=page_number, x=x0, y=y0)
            )
    return fragments
