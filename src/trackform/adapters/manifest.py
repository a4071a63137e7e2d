"""Load the declared configuration from a TOML manifest.

Example::

    [[teams]]
    name = "Automation"
    permissions = ["BOM_UPLOAD", "VIEW_PORTFOLIO"]

    [[oidc_groups]]
    name = "dt-admins"
    teams = ["Administrators"]

    [[repositories]]
    type = "PYPI"
    identifier = "internal-pypi"
    url = "https://pypi.example.com/simple/"
    internal = true

    [[config_properties]]
    group = "general"
    name = "base.url"
    value = "https://dtrack.example.com"

Leaving out ``permissions`` or ``teams`` means that relation is not managed;
an empty list removes every edge.
"""

from __future__ import annotations

import tomllib
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from trackform.domain.model import (
    DesiredConfigProperty,
    DesiredOidcGroup,
    DesiredRepository,
    DesiredState,
    DesiredTeam,
    RepositoryType,
)

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)


class ManifestError(RuntimeError):
    """Raised when a manifest cannot be read or does not validate."""


def _strip_name(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    return value


class ManifestModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class TeamEntry(ManifestModel):
    name: str = Field(min_length=1)
    permissions: list[str] | None = None

    _normalize_name = field_validator("name", mode="before")(_strip_name)


class OidcGroupEntry(ManifestModel):
    name: str = Field(min_length=1)
    teams: list[str] | None = None

    _normalize_name = field_validator("name", mode="before")(_strip_name)


class RepositoryEntry(ManifestModel):
    type: RepositoryType
    identifier: str = Field(min_length=1)
    url: str = Field(min_length=1)
    enabled: bool = True
    internal: bool = False
    authentication_required: bool = False
    username: str | None = None
    password: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _upper_type(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("type")
    @classmethod
    def _reject_unsupported(cls, value: RepositoryType) -> RepositoryType:
        if value is RepositoryType.UNSUPPORTED:
            raise ValueError("UNSUPPORTED only describes unknown server-side types")
        return value


class ConfigPropertyEntry(ManifestModel):
    group: str = Field(min_length=1)
    name: str = Field(min_length=1)
    value: str

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        # TOML booleans and numbers are sent as the strings the server stores
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int | float):
            return str(value)
        return value


class ManifestDocument(ManifestModel):
    teams: list[TeamEntry] = Field(default_factory=list[TeamEntry])
    oidc_groups: list[OidcGroupEntry] = Field(default_factory=list[OidcGroupEntry])
    repositories: list[RepositoryEntry] = Field(default_factory=list[RepositoryEntry])
    config_properties: list[ConfigPropertyEntry] = Field(
        default_factory=list[ConfigPropertyEntry]
    )

    def to_desired_state(self) -> DesiredState:
        return DesiredState(
            teams=[
                DesiredTeam(
                    name=entry.name,
                    permissions=None if entry.permissions is None else tuple(entry.permissions),
                )
                for entry in self.teams
            ],
            oidc_groups=[
                DesiredOidcGroup(
                    name=entry.name,
                    teams=None if entry.teams is None else tuple(entry.teams),
                )
                for entry in self.oidc_groups
            ],
            repositories=[
                DesiredRepository(
                    type=entry.type,
                    identifier=entry.identifier,
                    url=entry.url,
                    enabled=entry.enabled,
                    internal=entry.internal,
                    authentication_required=entry.authentication_required,
                    username=entry.username,
                    password=entry.password,
                )
                for entry in self.repositories
            ],
            config_properties=[
                DesiredConfigProperty(group_name=entry.group, name=entry.name, value=entry.value)
                for entry in self.config_properties
            ],
        )


def parse_manifest(text: str, *, source: str = "<manifest>") -> DesiredState:
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"{source}: invalid TOML: {exc}") from exc
    try:
        document = ManifestDocument.model_validate(raw)
    except ValidationError as exc:
        raise ManifestError(f"{source}: {exc}") from exc

    state = document.to_desired_state()
    log.debug(
        "Loaded %s: %d team(s), %d OIDC group(s), %d repositories, %d config properties",
        source,
        len(state.teams),
        len(state.oidc_groups),
        len(state.repositories),
        len(state.config_properties),
    )
    return state


def load_manifest(path: Path) -> DesiredState:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Could not read manifest {path}: {exc}") from exc
    return parse_manifest(text, source=str(path))
