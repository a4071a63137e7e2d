"""Generic relation reconciler shared by every many-to-many relation kind.

The engine bundles the two remote mutations for one relation (for example
"grant permission to team" / "revoke permission from team") and runs the
plan/apply stages from ``relations``. Fetching current edges and the universe
stays with the caller, so every run works on freshly listed state.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .relations import RelationResult, apply_relation_plan, plan_relation

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .relations import AddEdge, RelationPlan, RemoveEdge

log = getLogger(__name__)


@dataclass(slots=True)
class RelationReconciler[K: Hashable, T, E]:
    """Converge one anchor's edges of ``kind`` to a desired key set."""

    kind: str
    add_edge: AddEdge[K, T]
    remove_edge: RemoveEdge[K, E]

    def plan(
        self,
        desired: Iterable[K],
        *,
        current: Mapping[K, E],
        universe: Mapping[K, T],
    ) -> RelationPlan[K, T, E]:
        return plan_relation(desired, current=current, universe=universe, kind=self.kind)

    def apply(self, plan: RelationPlan[K, T, E]) -> RelationResult[K]:
        return apply_relation_plan(plan, add_edge=self.add_edge, remove_edge=self.remove_edge)

    def reconcile(
        self,
        desired: Iterable[K],
        *,
        current: Mapping[K, E],
        universe: Mapping[K, T],
        dry_run: bool = False,
    ) -> RelationResult[K]:
        """Plan and, unless ``dry_run``, apply. A no-op plan makes no remote calls."""

        plan = self.plan(desired, current=current, universe=universe)
        log.debug(
            "Planned %s edits: add=%s remove=%s keep=%d",
            self.kind,
            list(plan.to_add),
            list(plan.to_remove),
            len(plan.kept),
        )
        if dry_run or plan.is_noop:
            return RelationResult.from_plan(plan, dry_run=dry_run)
        return self.apply(plan)
