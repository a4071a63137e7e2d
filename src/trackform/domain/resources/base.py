"""Outcome records and errors shared by the resource handlers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from trackform.domain.reconciliation import RelationResult


class ChangeAction(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True, kw_only=True)
class ResourceChange:
    """What a handler did (or, in a dry run, would do) to one remote object."""

    kind: str
    label: str
    action: ChangeAction
    relations: tuple[RelationResult[str], ...] = ()
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        if self.action is not ChangeAction.UNCHANGED:
            return True
        return any(relation.changed for relation in self.relations)


class ResourceError(RuntimeError):
    """Base class for resource handler failures."""

    def __init__(self, message: str, *, kind: str) -> None:
        super().__init__(message)
        self.kind = kind


class ResourceExistsError(ResourceError):
    def __init__(self, kind: str, label: str, *, uuid: UUID | None = None) -> None:
        detail = f" with UUID {uuid}" if uuid is not None else ""
        super().__init__(f"A {kind} named {label!r} exists already{detail}", kind=kind)
        self.label = label
        self.uuid = uuid


class ResourceNotFoundError(ResourceError):
    def __init__(self, kind: str, label: str) -> None:
        super().__init__(f"No {kind} named {label!r}", kind=kind)
        self.label = label


class UnsupportedOperationError(ResourceError):
    """The server offers no way to perform the requested operation."""
