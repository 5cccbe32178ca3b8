"""
Heuristic outline detection
- Input: positioned text fragments (one per PDF line) with their font size
- Output: a two-level outline of section titles and the short lines under them

A fragment is a heading when it is short and either rendered larger than the
body text or starts with a section number (Arabic or CJK numerals followed by
a separator, or a "第N章" chapter marker). Short non-heading lines that follow
a heading on the same page are grouped under it.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from pydantic import BaseModel, Field

from question_bank.configuration import settings
from question_bank.errors import InvalidPageRangeError

from .document import PDFSource, TextFragment, open_pdf, page_fragments
from .page_range import parse_page_range

logger = logging.getLogger(__name__)

HEADING_FONT_SIZE = 16.0
HEADING_MAX_CHARS = 100
SUBITEM_MIN_CHARS = 2
SUBITEM_MAX_CHARS = 60
MAX_SUBITEMS = 8

_ARABIC_NUMBERING = re.compile(r"^\d+[.)、]")
_CJK_NUMBERING = re.compile(r"^[一二三四五六七八九十百零〇]+[、.．)）]")
_CHAPTER_MARKER = re.compile(r"^第[0-9一二三四五六七八九十百零〇]+[章節节篇]")
_DOTTED_NUMBERING = re.compile(r"^\d+\.\d+")
_PAGE_NUMBER = re.compile(r"^\d+$")


class OutlineItem(BaseModel):
    id: str
    title: str
    page: int
    level: int = 1
    children: List["OutlineItem"] = Field(default_factory=list)


def matches_numbering(text: str) -> bool:
    t = text.strip()
    return bool(
        _ARABIC_NUMBERING.match(t) or _CJK_NUMBERING.match(t) or _CHAPTER_MARKER.match(t)
    )


def is_heading(fragment: TextFragment, font_threshold: float = HEADING_FONT_SIZE) -> bool:
    """True when the fragment looks like a section title."""
    text = fragment.text.strip()
    if len(text) < 2 or len(text) >= HEADING_MAX_CHARS:
        return False
    if _PAGE_NUMBER.match(text):
        return False
    return fragment.size > font_threshold or matches_numbering(text)


def _is_subitem(fragment: TextFragment) -> bool:
    text = fragment.text.strip()
    if _PAGE_NUMBER.match(text):
        return False
    return SUBITEM_MIN_CHARS <= len(text) <= SUBITEM_MAX_CHARS


def build_outline(
    fragments: Iterable[TextFragment],
    font_threshold: float = HEADING_FONT_SIZE,
    pages: Optional[Sequence[int]] = None,
) -> List[OutlineItem]:
    """Group fragments into top-level headings with nested sub-items.

    ``pages`` lists every page that was scanned; pages without any heading
    still get a ``Page N`` entry so the outline covers the whole selection.
    """
    outline: List[OutlineItem] = []
    current: Optional[OutlineItem] = None
    pages_with_heading = set()

    by_page: dict = {}
    for frag in fragments:
        by_page.setdefault(frag.page, []).append(frag)
    all_pages = sorted(set(pages or []) | set(by_page))

    for page in all_pages:
        current = None
        for frag in by_page.get(page, []):
            text = frag.text.strip()
            if is_heading(frag, font_threshold):
                pages_with_heading.add(page)
                # "2.1 Foo" under an open "2. Bar" nests one level down
                if current is not None and _DOTTED_NUMBERING.match(text):
                    if len(current.children) < MAX_SUBITEMS:
                        current.children.append(
                            OutlineItem(
                                id=f"{current.id}.{len(current.children) + 1}",
                                title=text,
                                page=page,
                                level=2,
                            )
                        )
                    continue
                current = OutlineItem(id=str(len(outline) + 1), title=text, page=page, level=1)
                outline.append(current)
                continue
            if current is not None and _is_subitem(frag) and len(current.children) < MAX_SUBITEMS:
                current.children.append(
                    OutlineItem(
                        id=f"{current.id}.{len(current.children) + 1}",
                        title=text,
                        page=page,
                        level=2,
                    )
                )
        if page not in pages_with_heading:
            outline.append(OutlineItem(id=str(len(outline) + 1), title=f"Page {page}", page=page))

    return outline


def _select_pages(page_count: int, page_range: Optional[str], max_pages: int) -> List[int]:
    if page_range and page_range.strip():
        requested = parse_page_range(page_range)
        if not requested:
            raise InvalidPageRangeError(
                f"Invalid page range {page_range!r}; use e.g. '1-3' or '1,2,3'."
            )
        pages = [p for p in requested if p <= page_count]
        skipped = [p for p in requested if p > page_count]
        if skipped:
            logger.warning("pages %s exceed document length %d", skipped, page_count)
    else:
        pages = list(range(1, page_count + 1))
    return pages[:max_pages]


def extract_outline(
    source: PDFSource,
    page_range: Optional[str] = None,
    max_pages: Optional[int] = None,
) -> List[OutlineItem]:
    """Read a PDF and return its heuristic outline."""
    limit = settings.outline_max_pages if max_pages is None else max_pages
    with open_pdf(source) as doc:
        pages = _select_pages(doc.page_count, page_range, limit)
        fragments: List[TextFragment] = []
        for num in pages:
            fragments.extend(page_fragments(doc.load_page(num - 1), num))
    outline = build_outline(fragments, pages=pages)
    logger.info("outline built: %d top-level items from %d pages", len(outline), len(pages))
    return outline


def flatten_titles(outline: Sequence[OutlineItem], selected_ids: Optional[Iterable[str]] = None) -> List[str]:
    """Titles of all items (or only the selected ids) in outline order."""
    wanted = set(selected_ids) if selected_ids is not None else None
    out: List[str] = []
    for item in outline:
        if wanted is None or item.id in wanted:
            out.append(item.title)
        out.extend(flatten_titles(item.children, wanted))
    return out
