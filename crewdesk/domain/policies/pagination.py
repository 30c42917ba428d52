"""PaginationPolicy — turn a 1-based (page, page_size) into an offset/limit window."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 200


@dataclass(frozen=True)
class PageWindow:
    offset: int
    limit: int
    page: int
    page_size: int


def to_window(page: int | None = 1, page_size: int | None = DEFAULT_PAGE_SIZE) -> PageWindow:
    """Clamp page to >= 1 and page_size to [1, MAX_PAGE_SIZE]."""
    if page is None:
        page = 1
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    safe_page = max(1, page)
    safe_size = min(max(1, page_size), MAX_PAGE_SIZE)
    return PageWindow(
        offset=(safe_page - 1) * safe_size,
        limit=safe_size,
        page=safe_page,
        page_size=safe_size,
    )
