"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from trackform.adapters.dtrack import DependencyTrackClient
from trackform.adapters.manifest import load_manifest
from trackform.config import get_dtrack_config
from trackform.domain.convergence import ConvergenceResult, converge
from trackform.domain.model import RepositoryType, ResourceKind
from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE
from trackform.domain.resources import (
    ConfigPropertyHandler,
    OidcGroupHandler,
    RepositoryHandler,
    TeamHandler,
    UnsupportedOperationError,
    repository_label,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from trackform.domain.model import ConfigProperty, Repository, RepositoryKey
    from trackform.domain.ports.remote import DependencyTrackPort

log = getLogger(__name__)

MASKED_VALUE = "********"


def build_dtrack_client() -> tuple[DependencyTrackClient, int]:
    """Client plus configured page size, both read from the environment."""

    config = get_dtrack_config()
    return DependencyTrackClient(config=config), config.page_size


def _resolve_remote(
    remote: DependencyTrackPort | None,
    page_size: int | None,
) -> tuple[DependencyTrackPort, int]:
    if remote is None:
        client, configured = build_dtrack_client()
        return client, page_size or configured
    return remote, page_size or DEFAULT_PAGE_SIZE


def apply_manifest(
    path: Path,
    *,
    dry_run: bool = False,
    remote: DependencyTrackPort | None = None,
    page_size: int | None = None,
) -> ConvergenceResult:
    """Converge the server to the manifest at ``path``."""

    desired = load_manifest(path)
    if desired.is_empty:
        log.warning("Manifest %s declares nothing, there is nothing to apply", path)
        return ConvergenceResult(dry_run=dry_run)

    effective_remote, effective_page_size = _resolve_remote(remote, page_size)
    log.info("Applying %s (dry_run=%s, page_size=%s)", path, dry_run, effective_page_size)
    return converge(
        desired,
        remote=effective_remote,
        page_size=effective_page_size,
        dry_run=dry_run,
    )


def _describe_repository(repository: Repository) -> str:
    flags: list[str] = []
    if repository.internal:
        flags.append("internal")
    if not repository.enabled:
        flags.append("disabled")
    suffix = f" [{', '.join(flags)}]" if flags else ""
    return f"{repository_label(repository.key)} {repository.url}{suffix}"


def _describe_config_property(prop: ConfigProperty) -> str:
    value = MASKED_VALUE if prop.is_secret else prop.value
    return f"{prop.property_id} = {value}"


def list_resources(
    kind: ResourceKind,
    *,
    remote: DependencyTrackPort | None = None,
    page_size: int | None = None,
) -> list[str]:
    """One human-readable line per remote object of ``kind``."""

    effective_remote, effective_page_size = _resolve_remote(remote, page_size)
    if kind is ResourceKind.TEAM:
        teams = TeamHandler(effective_remote, page_size=effective_page_size).list_all()
        return [team.name for team in teams]
    if kind is ResourceKind.PERMISSION:
        handler = TeamHandler(effective_remote, page_size=effective_page_size)
        return [permission.name for permission in handler.list_permissions()]
    if kind is ResourceKind.OIDC_GROUP:
        groups = OidcGroupHandler(effective_remote, page_size=effective_page_size).list_all()
        return [group.name for group in groups]
    if kind is ResourceKind.REPOSITORY:
        repositories = RepositoryHandler(effective_remote, page_size=effective_page_size)
        return [_describe_repository(repository) for repository in repositories.list_all()]
    props = ConfigPropertyHandler(effective_remote).list_all()
    return [_describe_config_property(prop) for prop in props]


def parse_repository_key(value: str) -> RepositoryKey:
    """Parse ``TYPE/identifier`` as printed by ``list repository``."""

    repository_type, sep, identifier = value.partition("/")
    if not sep or not identifier:
        raise ValueError(f"Expected TYPE/identifier, got {value!r}")
    try:
        return RepositoryType(repository_type.upper()), identifier
    except ValueError as exc:
        raise ValueError(f"Unknown repository type {repository_type!r}") from exc


def delete_resources(
    kind: ResourceKind,
    keys: Sequence[str],
    *,
    remote: DependencyTrackPort | None = None,
    page_size: int | None = None,
) -> list[str]:
    """Delete the named objects of ``kind``; returns the keys that existed."""

    if kind in (ResourceKind.PERMISSION, ResourceKind.CONFIG_PROPERTY):
        raise UnsupportedOperationError(f"Objects of kind {kind} can not be deleted", kind=kind)
    # every key is parsed before the first delete call
    repository_keys: list[RepositoryKey] = []
    if kind is ResourceKind.REPOSITORY:
        repository_keys = [parse_repository_key(key) for key in keys]

    effective_remote, effective_page_size = _resolve_remote(remote, page_size)
    deleted: list[str] = []
    if kind is ResourceKind.REPOSITORY:
        repositories = RepositoryHandler(effective_remote, page_size=effective_page_size)
        for key, repository_key in zip(keys, repository_keys, strict=True):
            if repositories.delete(*repository_key):
                deleted.append(key)
    elif kind is ResourceKind.TEAM:
        teams = TeamHandler(effective_remote, page_size=effective_page_size)
        deleted = [key for key in keys if teams.delete(key)]
    else:
        groups = OidcGroupHandler(effective_remote, page_size=effective_page_size)
        deleted = [key for key in keys if groups.delete(key)]

    log.info("Deleted %d of %d %s object(s)", len(deleted), len(keys), kind)
    return deleted
