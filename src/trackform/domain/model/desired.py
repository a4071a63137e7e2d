"""Declared (desired) configuration, independent of how it was written down.

``None`` for a relation list means the relation is not managed at all, while an
empty tuple means "no edges". Handlers must keep that distinction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import RepositoryType
from .repository import Repository, RepositoryKey


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredTeam:
    name: str
    permissions: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredOidcGroup:
    name: str
    teams: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredRepository:
    type: RepositoryType
    identifier: str
    url: str
    enabled: bool = True
    internal: bool = False
    authentication_required: bool = False
    username: str | None = None
    password: str | None = None

    @property
    def key(self) -> RepositoryKey:
        return (self.type, self.identifier)

    def to_repository(self, *, existing: Repository | None = None) -> Repository:
        return Repository(
            uuid=existing.uuid if existing else None,
            resolution_order=existing.resolution_order if existing else None,
            type=self.type,
            identifier=self.identifier,
            url=self.url,
            enabled=self.enabled,
            internal=self.internal,
            authentication_required=self.authentication_required,
            username=self.username,
            password=self.password,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredConfigProperty:
    group_name: str
    name: str
    value: str


@dataclass(slots=True, kw_only=True)
class DesiredState:
    teams: list[DesiredTeam] = field(default_factory=list["DesiredTeam"])
    oidc_groups: list[DesiredOidcGroup] = field(default_factory=list["DesiredOidcGroup"])
    repositories: list[DesiredRepository] = field(default_factory=list["DesiredRepository"])
    config_properties: list[DesiredConfigProperty] = field(
        default_factory=list["DesiredConfigProperty"]
    )

    @property
    def is_empty(self) -> bool:
        return not (self.teams or self.oidc_groups or self.repositories or self.config_properties)
