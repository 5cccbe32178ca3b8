"""Plain-text extraction that feeds the question prompt."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from question_bank.configuration import settings
from question_bank.errors import InsufficientContentError, InvalidPageRangeError

from .document import PDFSource, open_pdf
from .page_range import parse_page_range

logger = logging.getLogger(__name__)

# pages at or below this many characters carry no usable text
PAGE_MIN_CHARS = 10

_WS_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


@dataclass
class PageContent:
    text: str
    pages: List[int] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)


def extract_full_text(
    source: PDFSource,
    max_pages: Optional[int] = None,
    min_chars: Optional[int] = None,
) -> str:
    """Concatenate the text of the first ``max_pages`` pages.

    Raises InsufficientContentError when the result is shorter than
    ``min_chars``.
    """
    limit = settings.full_text_max_pages if max_pages is None else max_pages
    minimum = settings.min_content_chars if min_chars is None else min_chars

    parts: List[str] = []
    with open_pdf(source) as doc:
        for idx in range(min(doc.page_count, limit)):
            page_text = normalize_whitespace(doc.load_page(idx).get_text("text"))
            if page_text:
                parts.append(page_text)

    text = "\n\n".join(parts)
    if len(text) < minimum:
        logger.warning("full-text extraction yielded %d chars (< %d)", len(text), minimum)
        raise InsufficientContentError(len(text), minimum)
    logger.info("extracted %d chars from %d pages", len(text), len(parts))
    return text


def extract_page_content(
    source: PDFSource,
    page_range: str,
    max_pages: Optional[int] = None,
    min_chars: Optional[int] = None,
) -> PageContent:
    """Extract the pages named by ``page_range``, each prefixed ``Page N:``.

    Pages beyond the document or with almost no text are skipped; at most
    ``max_pages`` pages are read.
    """
    limit = settings.page_content_max_pages if max_pages is None else max_pages
    minimum = settings.min_content_chars if min_chars is None else min_chars

    requested = parse_page_range(page_range)
    if not requested:
        raise InvalidPageRangeError(
            f"Invalid page range {page_range!r}; use e.g. '1-3' or '1,2,3'."
        )
    if len(requested) > limit:
        logger.info("page range truncated from %d to %d pages", len(requested), limit)

    result = PageContent(text="")
    chunks: List[str] = []
    with open_pdf(source) as doc:
        for num in requested[:limit]:
            if num > doc.page_count:
                logger.warning("page %d is out of range (document has %d)", num, doc.page_count)
                result.skipped.append(num)
                continue
            page_text = normalize_whitespace(doc.load_page(num - 1).get_text("text"))
            if len(page_text) <= PAGE_MIN_CHARS:
                result.skipped.append(num)
                continue
            chunks.append(f"Page {num}: {page_text}")
            result.pages.append(num)

    result.text = "\n\n".join(chunks)
    if len(result.text) < minimum:
        raise InsufficientContentError(len(result.text), minimum)
    return result
