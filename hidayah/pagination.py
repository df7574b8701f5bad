# hidayah/pagination.py
import math
import re
from typing import List, Optional, Sequence

from .models import Hadith, PagedView

DEFAULT_PAGE_SIZE = 5

_LEADING_INT = re.compile(r"^[+-]?\d+")


def _parses_as_int(query: str) -> bool:
    # Same leniency as parseInt: "12abc" counts, "abc12" does not
    return bool(_LEADING_INT.match(query))


def matches(hadith: Hadith, query: str) -> bool:
    """
    Case-insensitive match for Latin-script fields, exact substring for Arabic/Urdu.

    `query` is the raw text the user typed. An empty query matches everything.
    """
    if not query or not query.strip():
        return True
    q = query.strip().lower()

    if _parses_as_int(q):
        if q in str(hadith.hadith_number):
            return True
        if hadith.reference and q in hadith.reference.lower():
            return True
    if q in hadith.english_text.lower():
        return True
    if query in hadith.arabic_text or query in hadith.urdu_text:
        return True
    if hadith.narrator and q in hadith.narrator.lower():
        return True
    if hadith.section and q in hadith.section.lower():
        return True
    return False


def filter_records(records: Sequence[Hadith], query: Optional[str]) -> List[Hadith]:
    return [h for h in records if matches(h, query or "")]


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    return math.ceil(count / page_size) if count > 0 else 0


def clamp_page(page: int, pages: int) -> int:
    """Clamp a requested page into [1, pages]; page 1 when there is nothing to show."""
    return max(1, min(page, max(pages, 1)))


def paginate(records: Sequence[Hadith], query: Optional[str] = "", page: int = 1,
             page_size: int = DEFAULT_PAGE_SIZE) -> PagedView:
    """Filter `records` by `query` and cut out the requested 1-based page."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    filtered = filter_records(records, query)
    pages = total_pages(len(filtered), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return PagedView(
        page=current,
        page_size=page_size,
        total_pages=pages,
        total_matches=len(filtered),
        records=filtered[start:start + page_size],
    )
