"""Resource handlers: CRUD per remote object kind, relations via the core."""

from __future__ import annotations

from .base import (
    ChangeAction,
    ResourceChange,
    ResourceError,
    ResourceExistsError,
    ResourceNotFoundError,
    UnsupportedOperationError,
)
from .config_properties import ConfigPropertyHandler
from .oidc_groups import MappedTeam, OidcGroupHandler
from .repositories import RepositoryHandler, repository_label
from .teams import TeamHandler

__all__ = [
    "ChangeAction",
    "ConfigPropertyHandler",
    "MappedTeam",
    "OidcGroupHandler",
    "RepositoryHandler",
    "ResourceChange",
    "ResourceError",
    "ResourceExistsError",
    "ResourceNotFoundError",
    "TeamHandler",
    "UnsupportedOperationError",
    "repository_label",
]
