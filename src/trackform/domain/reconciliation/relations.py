"""Set reconciliation for one anchor's many-to-many relation.

Two stages:
1) ``plan_relation`` diffs the desired keys against the current edges and
   resolves every key to add against the universe of target objects. Nothing
   is mutated, and any unresolved key fails the whole plan.
2) ``apply_relation_plan`` performs the adds, then the removes, one remote call
   at a time, stopping at the first failure.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from logging import getLogger

from .errors import EdgeOperation, MutationError, UnresolvedReferenceError

log = getLogger(__name__)

type AddEdge[K, T] = Callable[[K, T], object]
type RemoveEdge[K, E] = Callable[[K, E], object]


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationPlan[K: Hashable, T, E]:
    """Edits needed to make the current edges match the desired keys.

    ``to_add`` maps each missing key to the resolved target object and
    ``to_remove`` maps each surplus key to its existing edge.
    """

    kind: str
    to_add: dict[K, T] = field(default_factory=dict)
    to_remove: dict[K, E] = field(default_factory=dict)
    kept: tuple[K, ...] = ()

    @property
    def is_noop(self) -> bool:
        return not self.to_add and not self.to_remove

    @property
    def mutation_count(self) -> int:
        return len(self.to_add) + len(self.to_remove)


@dataclass(frozen=True, slots=True, kw_only=True)
class RelationResult[K: Hashable]:
    kind: str
    added: tuple[K, ...] = ()
    removed: tuple[K, ...] = ()
    kept: tuple[K, ...] = ()
    dry_run: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)

    @classmethod
    def from_plan[T, E](cls, plan: RelationPlan[K, T, E], *, dry_run: bool) -> RelationResult[K]:
        return cls(
            kind=plan.kind,
            added=tuple(plan.to_add),
            removed=tuple(plan.to_remove),
            kept=plan.kept,
            dry_run=dry_run,
        )


def plan_relation[K: Hashable, T, E](
    desired: Iterable[K],
    *,
    current: Mapping[K, E],
    universe: Mapping[K, T],
    kind: str,
) -> RelationPlan[K, T, E]:
    """Diff ``desired`` against ``current``, resolving additions in ``universe``.

    Duplicate desired keys collapse to one. Raises ``UnresolvedReferenceError``
    naming every desired key that is neither a current edge nor in the universe.
    """

    remaining = dict(current)
    seen: set[K] = set()
    kept: list[K] = []
    to_add: dict[K, T] = {}
    unresolved: list[K] = []

    for key in desired:
        if key in seen:
            continue
        seen.add(key)
        if key in remaining:
            del remaining[key]
            kept.append(key)
            continue
        if key not in universe:
            unresolved.append(key)
            continue
        to_add[key] = universe[key]

    if unresolved:
        raise UnresolvedReferenceError(kind, unresolved)

    return RelationPlan(kind=kind, to_add=to_add, to_remove=remaining, kept=tuple(kept))


def apply_relation_plan[K: Hashable, T, E](
    plan: RelationPlan[K, T, E],
    *,
    add_edge: AddEdge[K, T],
    remove_edge: RemoveEdge[K, E],
) -> RelationResult[K]:
    """Apply adds before removes; raise ``MutationError`` on the first failure."""

    steps: list[tuple[EdgeOperation, K, Callable[[], object]]] = []
    for key, target in plan.to_add.items():
        steps.append((EdgeOperation.ADD, key, _bind(add_edge, key, target)))
    for key, edge in plan.to_remove.items():
        steps.append((EdgeOperation.REMOVE, key, _bind(remove_edge, key, edge)))

    succeeded: list[K] = []
    for position, (operation, key, call) in enumerate(steps):
        try:
            call()
        except Exception as exc:
            log.error(
                "Failed to %s %s %r after %d edit(s)", operation, plan.kind, key, len(succeeded)
            )
            raise MutationError(
                plan.kind,
                operation=operation,
                key=key,
                succeeded=succeeded,
                not_attempted=[pending for _, pending, _ in steps[position + 1 :]],
            ) from exc
        verb = "Added" if operation is EdgeOperation.ADD else "Removed"
        log.info("%s %s %r", verb, plan.kind, key)
        succeeded.append(key)

    return RelationResult.from_plan(plan, dry_run=False)


def _bind[K, V](func: Callable[[K, V], object], key: K, value: V) -> Callable[[], object]:
    def call() -> object:
        return func(key, value)

    return call
