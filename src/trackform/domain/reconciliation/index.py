"""Index items by a natural key."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE

from .paging import fetch_all

if TYPE_CHECKING:
    from trackform.domain.ports.fetching import FetchPage

log = getLogger(__name__)


def index_by[K: Hashable, T](items: Iterable[T], key_of: Callable[[T], K]) -> dict[K, T]:
    """Map ``key_of(item)`` to item.

    Keys are expected to be unique. When they are not (e.g. while the server is
    mid-migration) the later item wins and a warning is logged.
    """

    index: dict[K, T] = {}
    for item in items:
        key = key_of(item)
        if key in index:
            log.warning("Duplicate key %r, keeping the later item", key)
        index[key] = item
    return index


def fetch_all_indexed[K: Hashable, T](
    fetch_page: FetchPage[T],
    key_of: Callable[[T], K],
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    kind: str = "item",
) -> dict[K, T]:
    return index_by(fetch_all(fetch_page, page_size=page_size, kind=kind), key_of)
