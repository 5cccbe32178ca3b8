"""Service helpers around the PDF extraction package."""

from typing import Any, Dict, List, Optional

from question_bank.extraction import (
    extract_full_text,
    extract_outline,
    extract_page_content,
    flatten_titles,
    parse_page_range,
)


def parse_pages(page_range: str) -> List[int]:
    return parse_page_range(page_range)


def build_outline(pdf: bytes, page_range: Optional[str] = None) -> Dict[str, Any]:
    """Outline items plus their flattened titles."""
    outline = extract_outline(pdf, page_range=page_range)
    return {"outline": outline, "titles": flatten_titles(outline)}


def extract_text(pdf: bytes, page_range: Optional[str] = None) -> Dict[str, Any]:
    """Selected pages when a range is given, otherwise the whole document."""
    if page_range and page_range.strip():
        content = extract_page_content(pdf, page_range)
        return {"text": content.text, "pages": content.pages, "skipped_pages": content.skipped}
    return {"text": extract_full_text(pdf), "pages": [], "skipped_pages": []}
