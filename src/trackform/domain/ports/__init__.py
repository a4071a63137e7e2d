"""Domain ports (interfaces implemented by adapters)."""

from __future__ import annotations

from .fetching import DEFAULT_PAGE_SIZE, FetchPage, Page, PageOptions
from .remote import DependencyTrackPort

__all__ = ["DEFAULT_PAGE_SIZE", "DependencyTrackPort", "FetchPage", "Page", "PageOptions"]
