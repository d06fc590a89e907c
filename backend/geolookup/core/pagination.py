"""Pagination — lenient page/pageSize resolution and page arithmetic.

Invariants:
    - page >= 1 and 1 <= page_size <= max_page_size after resolution
    - Malformed, missing or non-positive input is defaulted, never rejected
    - A well-formed page_size above max_page_size is rejected, never clamped
    - total_pages is ceil(total_records / page_size); page_size is never 0 here
"""

import math
from dataclasses import dataclass

from geolookup.core.errors import PageSizeLimitError

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """A resolved (page, page_size) pair."""
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def _parse_positive_int(raw: str | int | None) -> int | None:
    """Parse a client-supplied integer; None if missing, malformed or < 1."""
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def resolve_page_request(
    page: str | int | None = None,
    page_size: str | int | None = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> PageRequest:
    """Resolve raw query values into a PageRequest. Pure, no IO.

    Raises PageSizeLimitError when page_size parses above max_page_size.
    """
    resolved_page = _parse_positive_int(page) or DEFAULT_PAGE
    resolved_size = _parse_positive_int(page_size) or default_page_size
    if resolved_size > max_page_size:
        raise PageSizeLimitError(resolved_size, max_page_size)
    return PageRequest(page=resolved_page, page_size=resolved_size)


def total_pages(total_records: int, page_size: int) -> int:
    """Number of pages needed to show total_records at page_size per page."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total_records / page_size)
