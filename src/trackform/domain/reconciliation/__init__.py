"""Reconciliation core: paged listing, keyed indexing and relation set sync.

Flow used by every relation handler:
1) list the anchor's current edges and index them by natural key
2) list the universe of target objects and index it the same way
3) plan the adds/removes against the desired keys (resolving all keys first)
4) apply adds, then removes, stopping at the first failed remote call
"""

from __future__ import annotations

from .engine import RelationReconciler
from .errors import (
    EdgeOperation,
    ListingError,
    MutationError,
    ReconciliationError,
    UnresolvedReferenceError,
)
from .index import fetch_all_indexed, index_by
from .paging import fetch_all
from .relations import (
    AddEdge,
    RelationPlan,
    RelationResult,
    RemoveEdge,
    apply_relation_plan,
    plan_relation,
)

__all__ = [
    "AddEdge",
    "EdgeOperation",
    "ListingError",
    "MutationError",
    "ReconciliationError",
    "RelationPlan",
    "RelationReconciler",
    "RelationResult",
    "RemoveEdge",
    "UnresolvedReferenceError",
    "apply_relation_plan",
    "fetch_all",
    "fetch_all_indexed",
    "index_by",
    "plan_relation",
]
