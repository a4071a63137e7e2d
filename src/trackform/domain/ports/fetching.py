"""Ports for listing remote objects one page at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class PageOptions:
    """Cursor for one listing call: 1-based page number and requested size."""

    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def next(self) -> PageOptions:
        return PageOptions(page_number=self.page_number + 1, page_size=self.page_size)


@dataclass(frozen=True, slots=True)
class Page[T]:
    """One page of a listing plus the server's advertised total, if any.

    ``total_count`` is a hint only; callers must not trust it to terminate.
    """

    items: tuple[T, ...] = field(default_factory=tuple)
    total_count: int | None = None


class FetchPage[T](Protocol):
    """Callable port returning one page of items for the given cursor."""

    def __call__(self, options: PageOptions, /) -> Page[T]: ...


__all__ = ["DEFAULT_PAGE_SIZE", "FetchPage", "Page", "PageOptions"]
