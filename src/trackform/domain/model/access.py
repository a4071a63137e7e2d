"""Teams, permissions and OIDC groups: the access-control side of the server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class Permission:
    """A named capability; the name is both natural key and remote identifier."""

    name: str
    description: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class OidcGroup:
    uuid: UUID
    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class OidcMapping:
    """Edge between a team and an OIDC group, identified by its own UUID."""

    uuid: UUID
    group: OidcGroup


@dataclass(frozen=True, slots=True, kw_only=True)
class Team:
    uuid: UUID
    name: str
    permissions: tuple[Permission, ...] = ()
    mapped_oidc_groups: tuple[OidcMapping, ...] = ()

    def mapping_for(self, group_uuid: UUID) -> OidcMapping | None:
        for mapping in self.mapped_oidc_groups:
            if mapping.group.uuid == group_uuid:
                return mapping
        return None
