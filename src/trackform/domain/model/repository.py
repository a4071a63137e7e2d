"""Component repositories used by Dependency-Track for version lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import RepositoryType

if TYPE_CHECKING:
    from uuid import UUID

type RepositoryKey = tuple[RepositoryType, str]


@dataclass(frozen=True, slots=True, kw_only=True)
class Repository:
    type: RepositoryType
    identifier: str
    url: str
    uuid: UUID | None = None
    resolution_order: int | None = None
    enabled: bool = True
    internal: bool = False
    authentication_required: bool = False
    username: str | None = None
    # write-only: the server never returns it
    password: str | None = None

    @property
    def key(self) -> RepositoryKey:
        return (self.type, self.identifier)

    def differs_from(self, other: Repository) -> bool:
        """Whether the user-controlled, readable fields disagree with ``other``."""

        return (
            self.url != other.url
            or self.enabled != other.enabled
            or self.internal != other.internal
            or self.authentication_required != other.authentication_required
            or (self.username or None) != (other.username or None)
        )
