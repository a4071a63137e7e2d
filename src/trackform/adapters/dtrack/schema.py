"""Pydantic models describing the Dependency-Track REST payloads."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class DependencyTrackBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PermissionPayload(DependencyTrackBaseModel):
    name: str
    description: str | None = None


class OidcGroupPayload(DependencyTrackBaseModel):
    uuid: UUID
    name: str


class MappedOidcGroupPayload(DependencyTrackBaseModel):
    uuid: UUID
    group: OidcGroupPayload


class TeamPayload(DependencyTrackBaseModel):
    uuid: UUID
    name: str
    permissions: list[PermissionPayload] = Field(default_factory=list[PermissionPayload])
    mapped_oidc_groups: list[MappedOidcGroupPayload] = Field(
        default_factory=list[MappedOidcGroupPayload], alias="mappedOidcGroups"
    )

    @field_validator("permissions", "mapped_oidc_groups", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class RepositoryPayload(DependencyTrackBaseModel):
    type: str
    identifier: str
    url: str
    uuid: UUID | None = None
    resolution_order: int | None = Field(default=None, alias="resolutionOrder")
    enabled: bool = True
    internal: bool = False
    authentication_required: bool = Field(default=False, alias="authenticationRequired")
    username: str | None = None
    password: str | None = None

    _normalize_username = field_validator("username", mode="before")(_blank_to_none)


class ConfigPropertyPayload(DependencyTrackBaseModel):
    group_name: str = Field(alias="groupName")
    property_name: str = Field(alias="propertyName")
    property_value: str | None = Field(default=None, alias="propertyValue")
    property_type: str | None = Field(default=None, alias="propertyType")
    description: str | None = None


class OidcMappingPayload(DependencyTrackBaseModel):
    uuid: UUID
    group: OidcGroupPayload
