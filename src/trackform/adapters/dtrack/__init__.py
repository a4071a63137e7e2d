"""Public interface for the Dependency-Track adapter."""

from __future__ import annotations

from .client import DependencyTrackAPIError, DependencyTrackClient
from .schema import (
    ConfigPropertyPayload,
    OidcGroupPayload,
    PermissionPayload,
    RepositoryPayload,
    TeamPayload,
)

__all__ = [
    "ConfigPropertyPayload",
    "DependencyTrackAPIError",
    "DependencyTrackClient",
    "OidcGroupPayload",
    "PermissionPayload",
    "RepositoryPayload",
    "TeamPayload",
]
