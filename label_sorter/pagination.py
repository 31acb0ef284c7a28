"""Pagination of the live image listing."""

from dataclasses import dataclass
from typing import Optional, Sequence, Union


@dataclass(frozen=True)
class Page:
    """One page of the image grid."""
    items: list[str]
    current_page: int
    total_pages: int
    total_items: int
    page_size: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def previous_page(self) -> int:
        return max(1, self.current_page - 1)

    @property
    def next_page(self) -> int:
        return min(self.total_pages, self.current_page + 1)


def count_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for total_count items; never less than 1."""
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, -(-total_count // page_size))


def resolve_page(requested: Optional[Union[int, str]], total_pages: int) -> int:
    """
    Clamp a user-supplied page number into [1, total_pages].

    Missing, non-numeric, zero and negative values give page 1; values past
    the end give the last page.
    """
    try:
        page = int(requested)
    except (TypeError, ValueError):
        return 1
    if page < 1:
        return 1
    return min(page, total_pages)


def paginate(
    items: Sequence[str],
    requested_page: Optional[Union[int, str]],
    page_size: int
) -> Page:
    """Slice the full listing down to the requested page."""
    total = len(items)
    total_pages = count_pages(total, page_size)
    page = resolve_page(requested_page, total_pages)

    start = (page - 1) * page_size
    end = min(page * page_size, total)

    return Page(
        items=list(items[start:end]),
        current_page=page,
        total_pages=total_pages,
        total_items=total,
        page_size=page_size,
    )
