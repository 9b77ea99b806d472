"""Page-slicing contract shared by every list endpoint.

:func:`paginate` is pure arithmetic; the repositories combine its ``skip``
with a ``LIMIT/OFFSET`` fetch and a separate ``COUNT(*)`` query. The two
queries are not run in one snapshot, so under concurrent writes the total
may lag the slice slightly.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class PageWindow:
    """
    Result of :func:`paginate`.

    :param page: Effective 1-based page (after clamping).
    :type page: int
    :param take: Effective page size (after clamping).
    :type take: int
    :param skip: Rows to skip, ``(page - 1) * take``. Never negative.
    :type skip: int
    :param page_count: ``ceil(all_count / take)``.
    :type page_count: int
    """

    page: int
    take: int
    skip: int
    page_count: int


def paginate(all_count: int, page: int, take: int) -> PageWindow:
    """
    Compute the slice for ``page`` of size ``take`` over ``all_count`` rows.

    ``page < 1`` is treated as page 1 and ``take < 1`` as a page size of 1,
    so ``skip`` can never go negative and ``page_count`` never divides by
    zero. A negative ``all_count`` counts as zero.

    :param all_count: Total number of rows matching the query.
    :type all_count: int
    :param page: Requested 1-based page.
    :type page: int
    :param take: Requested page size.
    :type take: int
    :returns: The clamped window.
    :rtype: PageWindow
    """
    page = max(int(page), 1)
    take = max(int(take), 1)
    total = max(int(all_count), 0)
    return PageWindow(
        page=page,
        take=take,
        skip=(page - 1) * take,
        page_count=-(-total // take),
    )


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """
    One page of a list query.

    :param items: Rows on this page, in query order.
    :type items: Sequence[T]
    :param total_count: Rows matching the query across all pages.
    :type total_count: int
    :param page: 1-based page number.
    :type page: int
    :param take: Page size.
    :type take: int
    :param page_count: Number of pages for ``total_count`` at ``take``.
    :type page_count: int
    """

    items: Sequence[T]
    total_count: int
    page: int
    take: int
    page_count: int

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        """Return a page with ``fn`` applied to each item and the same metadata."""
        return Page(
            items=tuple(fn(item) for item in self.items),
            total_count=self.total_count,
            page=self.page,
            take=self.take,
            page_count=self.page_count,
        )
