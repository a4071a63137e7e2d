from __future__ import annotations

import pytest

from trackform.domain.reconciliation import (
    MutationError,
    RelationReconciler,
    UnresolvedReferenceError,
)

UNIVERSE = {"A": 1, "B": 2, "C": 3, "D": 4}


class _Edges:
    """A tiny in-memory relation: the current key set plus a call log."""

    def __init__(self, *keys: str, fail_on: str | None = None) -> None:
        self.keys = list(keys)
        self.fail_on = fail_on
        self.calls: list[str] = []

    def current(self) -> dict[str, str]:
        return {key: f"edge-{key}" for key in self.keys}

    def add(self, key: str, _target: int) -> object:
        if key == self.fail_on:
            raise RuntimeError("remote rejected the edge")
        self.calls.append(f"+{key}")
        self.keys.append(key)
        return None

    def remove(self, key: str, _edge: str) -> object:
        self.calls.append(f"-{key}")
        self.keys.remove(key)
        return None

    def reconciler(self) -> RelationReconciler[str, int, str]:
        return RelationReconciler(kind="letter", add_edge=self.add, remove_edge=self.remove)


def test_reconcile_converges_and_reports() -> None:
    edges = _Edges("B", "C", "D")

    result = edges.reconciler().reconcile(
        ["A", "B", "C"], current=edges.current(), universe=UNIVERSE
    )

    assert edges.calls == ["+A", "-D"]
    assert sorted(edges.keys) == ["A", "B", "C"]
    assert result.added == ("A",)
    assert result.removed == ("D",)
    assert result.kept == ("B", "C")


def test_reconcile_is_idempotent() -> None:
    edges = _Edges("B", "C", "D")
    reconciler = edges.reconciler()

    reconciler.reconcile(["A", "B", "C"], current=edges.current(), universe=UNIVERSE)
    edges.calls.clear()
    second = reconciler.reconcile(["A", "B", "C"], current=edges.current(), universe=UNIVERSE)

    assert edges.calls == []
    assert not second.changed


def test_reconcile_dry_run_makes_no_calls() -> None:
    edges = _Edges("D")

    result = edges.reconciler().reconcile(
        ["A"], current=edges.current(), universe=UNIVERSE, dry_run=True
    )

    assert edges.calls == []
    assert result.dry_run
    assert result.added == ("A",)
    assert result.removed == ("D",)


def test_reconcile_unresolved_key_mutates_nothing() -> None:
    edges = _Edges("D")

    with pytest.raises(UnresolvedReferenceError):
        edges.reconciler().reconcile(["A", "Z"], current=edges.current(), universe=UNIVERSE)

    assert edges.calls == []
    assert edges.keys == ["D"]


def test_reconcile_rerun_after_partial_failure_finishes_the_job() -> None:
    edges = _Edges(fail_on="B")
    reconciler = edges.reconciler()

    with pytest.raises(MutationError):
        reconciler.reconcile(["A", "B", "C"], current=edges.current(), universe=UNIVERSE)
    assert edges.keys == ["A"]

    edges.fail_on = None
    result = reconciler.reconcile(["A", "B", "C"], current=edges.current(), universe=UNIVERSE)

    assert result.added == ("B", "C")
    assert sorted(edges.keys) == ["A", "B", "C"]
