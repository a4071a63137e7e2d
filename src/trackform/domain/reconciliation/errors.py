"""Failures surfaced by the reconciliation core.

Each class is a distinct condition so callers can tell a broken listing from a
bad reference in the configuration or a remote write that went wrong halfway.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from enum import StrEnum


class EdgeOperation(StrEnum):
    ADD = "add"
    REMOVE = "remove"


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""

    def __init__(self, message: str, *, kind: str) -> None:
        super().__init__(message)
        self.kind = kind


class ListingError(ReconciliationError):
    """A page fetch failed; nothing was collected and nothing reconciled."""

    def __init__(self, kind: str, *, page_number: int) -> None:
        super().__init__(f"Could not list {kind} items (page {page_number})", kind=kind)
        self.page_number = page_number


class UnresolvedReferenceError(ReconciliationError):
    """Desired keys that do not exist among the addressable remote objects."""

    def __init__(self, kind: str, keys: Iterable[Hashable]) -> None:
        self.keys: tuple[Hashable, ...] = tuple(keys)
        names = ", ".join(repr(key) for key in self.keys)
        super().__init__(f"Referenced {kind} not found: {names}", kind=kind)


class MutationError(ReconciliationError):
    """A single add/remove call failed; earlier edits stay applied."""

    def __init__(
        self,
        kind: str,
        *,
        operation: EdgeOperation,
        key: Hashable,
        succeeded: Iterable[Hashable] = (),
        not_attempted: Iterable[Hashable] = (),
    ) -> None:
        self.operation = operation
        self.key = key
        self.succeeded: tuple[Hashable, ...] = tuple(succeeded)
        self.not_attempted: tuple[Hashable, ...] = tuple(not_attempted)
        super().__init__(
            f"Could not {operation} {kind} {key!r} "
            f"({len(self.succeeded)} applied, {len(self.not_attempted)} not attempted)",
            kind=kind,
        )
