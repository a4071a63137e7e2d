"""Drain a paginated remote listing into one in-memory list."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE, PageOptions

from .errors import ListingError

if TYPE_CHECKING:
    from trackform.domain.ports.fetching import FetchPage, Page

log = getLogger(__name__)


def fetch_all[T](
    fetch_page: FetchPage[T],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    kind: str = "item",
) -> list[T]:
    """Return every item of a listing, in the order the server enumerates them.

    Pages are requested sequentially starting at page 1. The listing ends on the
    first page shorter than ``page_size``, empty included. The advertised total
    is only compared afterwards and never extends the listing. Any failing call
    aborts the whole listing with ``ListingError``; a partial collection is
    never returned.
    """

    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    items: list[T] = []
    options = PageOptions(page_number=1, page_size=page_size)
    while True:
        try:
            page = fetch_page(options)
        except Exception as exc:
            raise ListingError(kind, page_number=options.page_number) from exc

        items.extend(page.items)
        if _is_last_page(page, requested=options.page_size):
            break
        options = options.next()

    if page.total_count is not None and page.total_count != len(items):
        log.warning(
            "Server advertised %d %s item(s) but listed %d", page.total_count, kind, len(items)
        )
    log.debug("Listed %d %s item(s) in %d page(s)", len(items), kind, options.page_number)
    return items


def _is_last_page[T](page: Page[T], *, requested: int) -> bool:
    return len(page.items) < requested
