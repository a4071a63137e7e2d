"""Public domain model surface."""

from __future__ import annotations

from trackform.domain.model.access import OidcGroup, OidcMapping, Permission, Team
from trackform.domain.model.config_property import (
    ConfigProperty,
    ConfigPropertyKey,
    config_property_id,
)
from trackform.domain.model.desired import (
    DesiredConfigProperty,
    DesiredOidcGroup,
    DesiredRepository,
    DesiredState,
    DesiredTeam,
)
from trackform.domain.model.enums import ConfigPropertyType, RepositoryType, ResourceKind
from trackform.domain.model.repository import Repository, RepositoryKey

__all__ = [
    "ConfigProperty",
    "ConfigPropertyKey",
    "ConfigPropertyType",
    "DesiredConfigProperty",
    "DesiredOidcGroup",
    "DesiredRepository",
    "DesiredState",
    "DesiredTeam",
    "OidcGroup",
    "OidcMapping",
    "Permission",
    "Repository",
    "RepositoryKey",
    "RepositoryType",
    "ResourceKind",
    "Team",
    "config_property_id",
]
