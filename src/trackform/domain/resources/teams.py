"""Team handler: team lifecycle plus the team <-> permission relation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.model import Permission, ResourceKind, Team
from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE
from trackform.domain.reconciliation import (
    RelationReconciler,
    RelationResult,
    fetch_all,
    fetch_all_indexed,
    index_by,
    plan_relation,
)

from .base import ChangeAction, ResourceChange, ResourceExistsError, ResourceNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from trackform.domain.model import DesiredTeam
    from trackform.domain.ports.remote import DependencyTrackPort
    from trackform.domain.reconciliation import RelationPlan

log = getLogger(__name__)

type PermissionPlan = RelationPlan[str, Permission, Permission]


def _team_name(team: Team) -> str:
    return team.name


def _permission_name(permission: Permission) -> str:
    return permission.name


@dataclass(slots=True)
class TeamHandler:
    remote: DependencyTrackPort
    page_size: int = DEFAULT_PAGE_SIZE

    def list_all(self) -> list[Team]:
        return fetch_all(self.remote.list_teams, page_size=self.page_size, kind=ResourceKind.TEAM)

    def list_permissions(self) -> list[Permission]:
        return fetch_all(
            self.remote.list_permissions,
            page_size=self.page_size,
            kind=ResourceKind.PERMISSION,
        )

    def index(self) -> dict[str, Team]:
        return index_by(self.list_all(), _team_name)

    def find(self, name: str) -> Team | None:
        return self.index().get(name)

    def create(self, desired: DesiredTeam) -> ResourceChange:
        """Create a team and grant its permissions.

        Fails with ``ResourceExistsError`` when the name is taken. Permission
        names are resolved before the team is created, so a typo leaves no
        half-configured team behind.
        """

        existing = self.find(desired.name)
        if existing is not None:
            raise ResourceExistsError(ResourceKind.TEAM, desired.name, uuid=existing.uuid)
        return self._create(desired)

    def ensure(self, desired: DesiredTeam, *, dry_run: bool = False) -> ResourceChange:
        team = self.find(desired.name)
        if team is None:
            if dry_run:
                return self._plan_create(desired)
            return self._create(desired)

        relations: tuple[RelationResult[str], ...] = ()
        if desired.permissions is not None:
            relations = (self.reconcile_permissions(team, desired.permissions, dry_run=dry_run),)
        return ResourceChange(
            kind=ResourceKind.TEAM,
            label=team.name,
            action=ChangeAction.UNCHANGED,
            relations=relations,
            dry_run=dry_run,
        )

    def rename(self, name: str, new_name: str) -> Team:
        teams = self.index()
        if new_name in teams:
            raise ResourceExistsError(ResourceKind.TEAM, new_name, uuid=teams[new_name].uuid)
        team = teams.get(name)
        if team is None:
            raise ResourceNotFoundError(ResourceKind.TEAM, name)
        renamed = self.remote.update_team(replace(team, name=new_name))
        log.info("Renamed team %r to %r", name, new_name)
        return renamed

    def delete(self, name: str) -> bool:
        team = self.find(name)
        if team is None:
            log.info("Team %r does not exist, nothing to delete", name)
            return False
        self.remote.delete_team(team)
        log.info("Deleted team %r (%s)", team.name, team.uuid)
        return True

    def reconcile_permissions(
        self,
        team: Team,
        permissions: Iterable[str],
        *,
        dry_run: bool = False,
    ) -> RelationResult[str]:
        """Make ``team`` hold exactly ``permissions``, re-reading it first."""

        fresh = self.remote.get_team(team.uuid)
        current = index_by(fresh.permissions, _permission_name)
        return self._reconciler(fresh).reconcile(
            permissions,
            current=current,
            universe=self._permission_universe(),
            dry_run=dry_run,
        )

    def _create(self, desired: DesiredTeam) -> ResourceChange:
        plan = self._plan_permissions(desired, current={})
        team = self.remote.create_team(desired.name)
        log.info("Created team %r (%s)", team.name, team.uuid)

        relations: tuple[RelationResult[str], ...] = ()
        if plan is not None:
            relations = (self._reconciler(team).apply(plan),)
        return ResourceChange(
            kind=ResourceKind.TEAM,
            label=team.name,
            action=ChangeAction.CREATED,
            relations=relations,
        )

    def _plan_create(self, desired: DesiredTeam) -> ResourceChange:
        plan = self._plan_permissions(desired, current={})
        relations: tuple[RelationResult[str], ...] = ()
        if plan is not None:
            relations = (RelationResult.from_plan(plan, dry_run=True),)
        return ResourceChange(
            kind=ResourceKind.TEAM,
            label=desired.name,
            action=ChangeAction.CREATED,
            relations=relations,
            dry_run=True,
        )

    def _plan_permissions(
        self,
        desired: DesiredTeam,
        *,
        current: Mapping[str, Permission],
    ) -> PermissionPlan | None:
        if not desired.permissions:
            return None
        return plan_relation(
            desired.permissions,
            current=current,
            universe=self._permission_universe(),
            kind=ResourceKind.PERMISSION,
        )

    def _permission_universe(self) -> dict[str, Permission]:
        return fetch_all_indexed(
            self.remote.list_permissions,
            _permission_name,
            page_size=self.page_size,
            kind=ResourceKind.PERMISSION,
        )

    def _reconciler(self, team: Team) -> RelationReconciler[str, Permission, Permission]:
        def grant(_name: str, permission: Permission) -> object:
            return self.remote.add_permission_to_team(permission.name, team.uuid)

        def revoke(_name: str, permission: Permission) -> object:
            return self.remote.remove_permission_from_team(permission.name, team.uuid)

        return RelationReconciler(kind=ResourceKind.PERMISSION, add_edge=grant, remove_edge=revoke)
