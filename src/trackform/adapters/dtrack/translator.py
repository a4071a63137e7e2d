"""Translate Dependency-Track payloads to domain objects and back."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.model import (
    ConfigProperty,
    ConfigPropertyType,
    OidcGroup,
    OidcMapping,
    Permission,
    Repository,
    RepositoryType,
    Team,
)

from .schema import (
    ConfigPropertyPayload,
    MappedOidcGroupPayload,
    OidcGroupPayload,
    OidcMappingPayload,
    PermissionPayload,
    RepositoryPayload,
    TeamPayload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def parse_permission(payload: PermissionPayload) -> Permission:
    return Permission(name=payload.name, description=payload.description)


def parse_oidc_group(payload: OidcGroupPayload) -> OidcGroup:
    return OidcGroup(uuid=payload.uuid, name=payload.name)


def parse_oidc_mapping(payload: MappedOidcGroupPayload | OidcMappingPayload) -> OidcMapping:
    return OidcMapping(uuid=payload.uuid, group=parse_oidc_group(payload.group))


def parse_team(payload: TeamPayload) -> Team:
    return Team(
        uuid=payload.uuid,
        name=payload.name,
        permissions=tuple(parse_permission(item) for item in payload.permissions),
        mapped_oidc_groups=tuple(parse_oidc_mapping(item) for item in payload.mapped_oidc_groups),
    )


def _parse_repository_type(value: str) -> RepositoryType:
    try:
        return RepositoryType(value.upper())
    except ValueError:
        log.warning("Unknown repository type %r, treating it as unsupported", value)
        return RepositoryType.UNSUPPORTED


def parse_repository(payload: RepositoryPayload) -> Repository:
    return Repository(
        type=_parse_repository_type(payload.type),
        identifier=payload.identifier,
        url=payload.url,
        uuid=payload.uuid,
        resolution_order=payload.resolution_order,
        enabled=payload.enabled,
        internal=payload.internal,
        authentication_required=payload.authentication_required,
        username=payload.username,
    )


def _parse_property_type(value: str | None) -> ConfigPropertyType | str | None:
    if value is None:
        return None
    try:
        return ConfigPropertyType(value)
    except ValueError:
        return value


def parse_config_property(payload: ConfigPropertyPayload) -> ConfigProperty:
    return ConfigProperty(
        group_name=payload.group_name,
        name=payload.property_name,
        value=payload.property_value,
        type=_parse_property_type(payload.property_type),
        description=payload.description,
    )


def team_to_payload(team: Team) -> dict[str, object]:
    return {"uuid": str(team.uuid), "name": team.name}


def oidc_group_to_payload(group: OidcGroup) -> dict[str, object]:
    return {"uuid": str(group.uuid), "name": group.name}


def repository_to_payload(repository: Repository) -> dict[str, object]:
    """Request body for repository create (no UUID) and update (with UUID)."""

    payload: dict[str, object] = {
        "type": str(repository.type),
        "identifier": repository.identifier,
        "url": repository.url,
        "enabled": repository.enabled,
        "internal": repository.internal,
        "authenticationRequired": repository.authentication_required,
    }
    if repository.uuid is not None:
        payload["uuid"] = str(repository.uuid)
    if repository.resolution_order is not None:
        payload["resolutionOrder"] = repository.resolution_order
    if repository.username is not None:
        payload["username"] = repository.username
    if repository.password is not None:
        payload["password"] = repository.password
    return payload


def config_property_to_payload(prop: ConfigProperty) -> Mapping[str, object]:
    return {
        "groupName": prop.group_name,
        "propertyName": prop.name,
        "propertyValue": prop.value,
    }
