"""OIDC group handler: group lifecycle plus the group <-> team mappings.

A mapping is its own remote object with a UUID. The teams mapped to a group are
listed through the group, and each listed team carries the mapping objects that
point at it, which is where the mapping UUID needed for removal comes from.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import UUID

from trackform.domain.model import OidcGroup, OidcMapping, ResourceKind, Team
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
    from collections.abc import Collection, Iterable

    from trackform.domain.model import DesiredOidcGroup
    from trackform.domain.ports.fetching import Page, PageOptions
    from trackform.domain.ports.remote import DependencyTrackPort
    from trackform.domain.reconciliation import RelationPlan

log = getLogger(__name__)

MAPPING_KIND = "oidc mapping"
PLANNED_TEAM_UUID = UUID(int=0)


@dataclass(frozen=True, slots=True)
class MappedTeam:
    """Current edge: a team together with its mapping to the anchor group."""

    team: Team
    mapping: OidcMapping


def _group_name(group: OidcGroup) -> str:
    return group.name


def _team_name(team: Team) -> str:
    return team.name


def _mapped_team_name(edge: MappedTeam) -> str:
    return edge.team.name


type MappingPlan = RelationPlan[str, Team, MappedTeam]


@dataclass(slots=True)
class OidcGroupHandler:
    remote: DependencyTrackPort
    page_size: int = DEFAULT_PAGE_SIZE

    def list_all(self) -> list[OidcGroup]:
        return fetch_all(
            self.remote.list_oidc_groups,
            page_size=self.page_size,
            kind=ResourceKind.OIDC_GROUP,
        )

    def index(self) -> dict[str, OidcGroup]:
        return index_by(self.list_all(), _group_name)

    def find(self, name: str) -> OidcGroup | None:
        return self.index().get(name)

    def create(self, name: str) -> OidcGroup:
        existing = self.find(name)
        if existing is not None:
            raise ResourceExistsError(ResourceKind.OIDC_GROUP, name, uuid=existing.uuid)
        group = self.remote.create_oidc_group(name)
        log.info("Created OIDC group %r (%s)", group.name, group.uuid)
        return group

    def ensure(
        self,
        desired: DesiredOidcGroup,
        *,
        dry_run: bool = False,
        planned_teams: Collection[str] = (),
    ) -> ResourceChange:
        """Create the group if missing and converge its team mappings.

        ``planned_teams`` names teams that a dry run would create earlier in the
        same run; they count as resolvable while planning and are ignored otherwise.
        """

        group = self.find(desired.name)
        if group is None:
            if dry_run:
                return self._plan_create(desired, planned_teams=planned_teams)
            return self._create(desired)

        relations: tuple[RelationResult[str], ...] = ()
        if desired.teams is not None:
            relations = (
                self.reconcile_teams(
                    group,
                    desired.teams,
                    dry_run=dry_run,
                    planned_teams=planned_teams,
                ),
            )
        return ResourceChange(
            kind=ResourceKind.OIDC_GROUP,
            label=group.name,
            action=ChangeAction.UNCHANGED,
            relations=relations,
            dry_run=dry_run,
        )

    def rename(self, name: str, new_name: str) -> OidcGroup:
        groups = self.index()
        taken = groups.get(new_name)
        if taken is not None:
            raise ResourceExistsError(ResourceKind.OIDC_GROUP, new_name, uuid=taken.uuid)
        group = groups.get(name)
        if group is None:
            raise ResourceNotFoundError(ResourceKind.OIDC_GROUP, name)
        renamed = self.remote.update_oidc_group(replace(group, name=new_name))
        log.info("Renamed OIDC group %r to %r", name, new_name)
        return renamed

    def delete(self, name: str) -> bool:
        group = self.find(name)
        if group is None:
            log.info("OIDC group %r does not exist, nothing to delete", name)
            return False
        self.remote.delete_oidc_group(group.uuid)
        log.info("Deleted OIDC group %r (%s)", group.name, group.uuid)
        return True

    def mapped_teams(self, group: OidcGroup) -> dict[str, MappedTeam]:
        """Current team edges of ``group`` keyed by team name."""

        def fetch_page(options: PageOptions) -> Page[Team]:
            return self.remote.list_oidc_group_teams(group.uuid, options)

        teams = fetch_all(fetch_page, page_size=self.page_size, kind=ResourceKind.TEAM)
        edges: list[MappedTeam] = []
        for team in teams:
            mapping = team.mapping_for(group.uuid)
            if mapping is None:
                raise ResourceNotFoundError(MAPPING_KIND, f"{group.name} -> {team.name}")
            edges.append(MappedTeam(team=team, mapping=mapping))
        return index_by(edges, _mapped_team_name)

    def reconcile_teams(
        self,
        group: OidcGroup,
        teams: Iterable[str],
        *,
        dry_run: bool = False,
        planned_teams: Collection[str] = (),
    ) -> RelationResult[str]:
        """Make exactly ``teams`` mapped to ``group``."""

        return self._reconciler(group).reconcile(
            teams,
            current=self.mapped_teams(group),
            universe=self._team_universe(planned_teams if dry_run else ()),
            dry_run=dry_run,
        )

    def _create(self, desired: DesiredOidcGroup) -> ResourceChange:
        plan = self._plan_teams(desired)
        group = self.remote.create_oidc_group(desired.name)
        log.info("Created OIDC group %r (%s)", group.name, group.uuid)

        relations: tuple[RelationResult[str], ...] = ()
        if plan is not None:
            relations = (self._reconciler(group).apply(plan),)
        return ResourceChange(
            kind=ResourceKind.OIDC_GROUP,
            label=group.name,
            action=ChangeAction.CREATED,
            relations=relations,
        )

    def _plan_create(
        self,
        desired: DesiredOidcGroup,
        *,
        planned_teams: Collection[str],
    ) -> ResourceChange:
        plan = self._plan_teams(desired, planned_teams=planned_teams)
        relations: tuple[RelationResult[str], ...] = ()
        if plan is not None:
            relations = (RelationResult.from_plan(plan, dry_run=True),)
        return ResourceChange(
            kind=ResourceKind.OIDC_GROUP,
            label=desired.name,
            action=ChangeAction.CREATED,
            relations=relations,
            dry_run=True,
        )

    def _plan_teams(
        self,
        desired: DesiredOidcGroup,
        *,
        planned_teams: Collection[str] = (),
    ) -> MappingPlan | None:
        if not desired.teams:
            return None
        return plan_relation(
            desired.teams,
            current={},
            universe=self._team_universe(planned_teams),
            kind=MAPPING_KIND,
        )

    def _team_universe(self, planned: Collection[str] = ()) -> dict[str, Team]:
        teams = fetch_all_indexed(
            self.remote.list_teams,
            _team_name,
            page_size=self.page_size,
            kind=ResourceKind.TEAM,
        )
        # placeholders only ever reach a plan, never an add call
        for name in planned:
            teams.setdefault(name, Team(uuid=PLANNED_TEAM_UUID, name=name))
        return teams

    def _reconciler(self, group: OidcGroup) -> RelationReconciler[str, Team, MappedTeam]:
        def map_team(_name: str, team: Team) -> object:
            return self.remote.add_oidc_mapping(group.uuid, team.uuid)

        def unmap_team(_name: str, edge: MappedTeam) -> object:
            self.remote.remove_oidc_mapping(edge.mapping.uuid)
            return None

        return RelationReconciler(kind=MAPPING_KIND, add_edge=map_team, remove_edge=unmap_team)
