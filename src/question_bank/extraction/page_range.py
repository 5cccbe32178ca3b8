"""Page-range descriptor parsing ("1-5, 8, 10-12")."""
from __future__ import annotations

import re
from typing import List

# no real course material comes near this; keeps "1-999999999" from expanding
MAX_PAGE_NUMBER = 10_000

_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")
_SINGLE_RE = re.compile(r"^\d+$")


def parse_page_range(page_range: str | None, max_page: int = MAX_PAGE_NUMBER) -> List[int]:
    """Return the sorted, deduplicated 1-based pages named by a descriptor.

    Tokens are comma separated. ``a-b`` expands to ``a..b`` when
    ``1 <= a <= b``; reversed ranges, zero, and non-numeric tokens are skipped.
    Pages above ``max_page`` are dropped and ranges are clipped to it.
    """
    pages = set()
    for part in (page_range or "").split(","):
        token = part.strip()
        if not token:
            continue
        m = _RANGE_RE.match(token)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if 1 <= start <= end and start <= max_page:
                pages.update(range(start, min(end, max_page) + 1))
            continue
        if _SINGLE_RE.match(token):
            num = int(token)
            if 0 < num <= max_page:
                pages.add(num)
    return sorted(pages)
