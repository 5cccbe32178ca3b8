"""PDF extraction package: page ranges, plain text and heuristic outlines."""
from .document import TextFragment, open_pdf, page_fragments
from .outline import OutlineItem, build_outline, extract_outline, flatten_titles, is_heading
from .page_range import parse_page_range
from .text import PageContent, extract_full_text, extract_page_content, normalize_whitespace

__all__ = [
    "TextFragment",
    "open_pdf",
    "page_fragments",
    "OutlineItem",
    "build_outline",
    "extract_outline",
    "flatten_titles",
    "is_heading",
    "parse_page_range",
    "PageContent",
    "extract_full_text",
    "extract_page_content",
    "normalize_whitespace",
]
