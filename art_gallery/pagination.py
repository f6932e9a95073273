"""Pagination window shown under the card grid.

A pure function of (page, total_pages): at most ``PAGINATION_WINDOW`` page
numbers around the current page, plus first/previous/next/last controls.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import PAGINATION_WINDOW


@dataclass(frozen=True)
class PageControl:
    """One clickable element of the pagination bar."""

    label: str
    target: int
    disabled: bool = False
    active: bool = False


@dataclass(frozen=True)
class PaginationWindow:
    page: int
    total_pages: int
    start: int
    end: int

    @property
    def pages(self) -> range:
        return range(self.start, self.end + 1)

    @property
    def at_first(self) -> bool:
        return self.page <= 1

    @property
    def at_last(self) -> bool:
        return self.page >= self.total_pages

    def controls(self) -> list[PageControl]:
        """Controls in display order: first, previous, page numbers, next, last."""
        controls = [
            PageControl("«", 1, disabled=self.at_first),
            PageControl("‹", max(1, self.page - 1), disabled=self.at_first),
        ]
        controls.extend(
            PageControl(str(number), number, active=number == self.page)
            for number in self.pages
        )
        controls.extend([
            PageControl("›", min(self.total_pages, self.page + 1), disabled=self.at_last),
            PageControl("»", self.total_pages, disabled=self.at_last),
        ])
        return controls


def pagination_window(page: int, total_pages: int,
                      window: int = PAGINATION_WINDOW) -> PaginationWindow:
    """Compute the visible page range for ``page`` out of ``total_pages``.

    The window starts ``window // 2`` pages before the current page. Near the
    last page it is shifted back so it always holds ``min(window, total_pages)``
    entries.
    """
    total_pages = max(1, total_pages)
    page = min(max(1, page), total_pages)

    start = max(1, min(page - window // 2, total_pages - window + 1))
    end = min(total_pages, start + window - 1)
    return PaginationWindow(page=page, total_pages=total_pages, start=start, end=end)
