"""Application service converging a server to a declared configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE
from trackform.domain.resources import (
    ChangeAction,
    ConfigPropertyHandler,
    OidcGroupHandler,
    RepositoryHandler,
    TeamHandler,
)

if TYPE_CHECKING:
    from trackform.domain.model import DesiredState
    from trackform.domain.ports.remote import DependencyTrackPort
    from trackform.domain.reconciliation import RelationResult
    from trackform.domain.resources import ResourceChange

log = getLogger(__name__)


@dataclass(slots=True)
class ConvergenceResult:
    """Outcome of one convergence run, in the order resources were handled."""

    changes: list[ResourceChange] = field(default_factory=list["ResourceChange"])
    dry_run: bool = False

    def labels(self, action: ChangeAction) -> list[str]:
        return [
            f"{change.kind} {change.label}" for change in self.changes if change.action is action
        ]

    @property
    def created(self) -> list[str]:
        return self.labels(ChangeAction.CREATED)

    @property
    def updated(self) -> list[str]:
        return self.labels(ChangeAction.UPDATED)

    @property
    def unchanged(self) -> list[str]:
        return self.labels(ChangeAction.UNCHANGED)

    @property
    def relations(self) -> list[RelationResult[str]]:
        return [relation for change in self.changes for relation in change.relations]

    @property
    def changed(self) -> bool:
        return any(change.changed for change in self.changes)


def converge(
    desired: DesiredState,
    *,
    remote: DependencyTrackPort,
    page_size: int = DEFAULT_PAGE_SIZE,
    dry_run: bool = False,
) -> ConvergenceResult:
    """Apply ``desired`` to the server behind ``remote``.

    Order: config properties, repositories, teams (with permissions), then OIDC
    groups (with team mappings) so that freshly created teams can be mapped.
    Objects that the manifest does not mention are left alone. The first failure
    propagates; changes made before it stay applied and a rerun picks up from
    the server's current state.
    """

    result = ConvergenceResult(dry_run=dry_run)
    properties = ConfigPropertyHandler(remote)
    repositories = RepositoryHandler(remote, page_size=page_size)
    teams = TeamHandler(remote, page_size=page_size)
    groups = OidcGroupHandler(remote, page_size=page_size)

    for prop in desired.config_properties:
        result.changes.append(properties.ensure(prop, dry_run=dry_run))
    for repository in desired.repositories:
        result.changes.append(repositories.ensure(repository, dry_run=dry_run))
    planned_teams: list[str] = []
    for team in desired.teams:
        change = teams.ensure(team, dry_run=dry_run)
        if dry_run and change.action is ChangeAction.CREATED:
            planned_teams.append(change.label)
        result.changes.append(change)
    for group in desired.oidc_groups:
        result.changes.append(
            groups.ensure(group, dry_run=dry_run, planned_teams=planned_teams)
        )

    log.info(
        "Convergence %s: created=%d, updated=%d, unchanged=%d, relation edits=%d",
        "planned" if dry_run else "finished",
        len(result.created),
        len(result.updated),
        len(result.unchanged),
        sum(len(relation.added) + len(relation.removed) for relation in result.relations),
    )
    return result
