"""Page windowing for the post list."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, TypeVar

from .announcer import Announcer
from .logging_setup import get_logger
from .metrics import page_changes_total
from .types import ELLIPSIS, PageChange, PageEntry, PageWindow, Priority

log = get_logger(__name__)

SHOW_PAGES = 5

T = TypeVar("T")


def total_pages_for(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(max(0, total_items) / page_size)


def clamp_page(requested: int, total_pages: int) -> int:
    """Force ``requested`` into ``[1, max(1, total_pages)]``."""
    return min(max(1, requested), max(1, total_pages))


def page_window(current_page: int, total_pages: int) -> Tuple[int, int]:
    """First and last page number of the button run centred on ``current_page``.

    The start is pulled back when the end hits ``total_pages`` but the end is
    not pushed forward when the start hits 1.
    """
    start = max(1, current_page - SHOW_PAGES // 2)
    end = min(total_pages, start + SHOW_PAGES - 1)
    if end - start < SHOW_PAGES - 1:
        start = max(1, end - SHOW_PAGES + 1)
    return start, end


def page_numbers(current_page: int, total_pages: int) -> Tuple[PageEntry, ...]:
    if total_pages <= 1:
        return ()

    start, end = page_window(current_page, total_pages)
    entries: List[PageEntry] = []

    if start > 1:
        entries.append(1)
        if start > 2:
            entries.append(ELLIPSIS)

    entries.extend(range(start, end + 1))

    if end < total_pages:
        if end < total_pages - 1:
            entries.append(ELLIPSIS)
        entries.append(total_pages)

    return tuple(entries)


def paginate(total_items: int, page_size: int, current_page: int = 1) -> PageWindow:
    """Compute the visible slice bounds and navigation for one page."""
    total_pages = total_pages_for(total_items, page_size)
    current_page = max(1, current_page)
    start_index = (current_page - 1) * page_size
    end_index = min(total_items, current_page * page_size)

    return PageWindow(
        current_page=current_page,
        total_pages=total_pages,
        total_items=max(0, total_items),
        # An out-of-range page yields an empty range rather than a negative one
        visible_range=(start_index, max(start_index, end_index)),
        page_numbers=page_numbers(current_page, total_pages),
        has_prev=current_page > 1,
        has_next=current_page < total_pages,
    )


def move_announcement(page: int) -> str:
    return f"Moved to page {page}"


class Paginator:
    """Current page of a result set; announces every page change."""

    def __init__(self, announcer: Announcer, page_size: int = 6):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.announcer = announcer
        self.page_size = page_size
        self.total_items = 0
        self.current_page = 1

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_items, self.page_size)

    def update(self, total_items: int) -> PageWindow:
        """Point the paginator at a new result set, starting from page 1."""
        self.total_items = max(0, total_items)
        self.current_page = 1
        return self.window()

    def change_page(self, requested_page: int) -> PageChange:
        page = clamp_page(requested_page, self.total_pages)
        if page != requested_page:
            log.debug("page_clamped", requested=requested_page, page=page)
        self.current_page = page

        change = PageChange(page=page, announcement=move_announcement(page))
        page_changes_total.inc()
        self.announcer.announce(change.announcement, Priority.POLITE)
        log.info("page_changed", page=page, total_pages=self.total_pages)
        return change

    def window(self) -> PageWindow:
        return paginate(self.total_items, self.page_size, self.current_page)

    def slice(self, items: Sequence[T]) -> List[T]:
        start, end = self.window().visible_range
        return list(items[start:end])
