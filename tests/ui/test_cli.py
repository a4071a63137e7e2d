from __future__ import annotations

from pathlib import Path

import pytest

from trackform import __version__
from trackform.adapters.manifest import ManifestError
from trackform.domain.convergence import ConvergenceResult
from trackform.domain.model import ResourceKind
from trackform.ui import cli as cli_module


def test_apply_passes_manifest_and_dry_run(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_apply(path: Path, **kwargs: object) -> ConvergenceResult:
        captured["path"] = path
        captured.update(kwargs)
        return ConvergenceResult(dry_run=True)

    monkeypatch.setattr(cli_module, "apply_manifest", fake_apply)

    cli_module.main(["apply", "dtrack.toml", "--dry-run"])

    assert captured == {"path": Path("dtrack.toml"), "dry_run": True}


def test_list_prints_one_line_per_object(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: list[ResourceKind] = []

    def fake_list(kind: ResourceKind) -> list[str]:
        captured.append(kind)
        return ["dt-admins", "dt-ci"]

    monkeypatch.setattr(cli_module, "list_resources", fake_list)

    cli_module.main(["list", "oidc-group"])

    assert captured == [ResourceKind.OIDC_GROUP]
    assert capsys.readouterr().out.splitlines() == ["dt-admins", "dt-ci"]


def test_delete_passes_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_delete(kind: ResourceKind, keys: list[str]) -> list[str]:
        captured["kind"] = kind
        captured["keys"] = keys
        return keys[:1]

    monkeypatch.setattr(cli_module, "delete_resources", fake_delete)

    cli_module.main(["--log-level", "debug", "delete", "team", "Automation", "Ghosts"])

    assert captured == {"kind": ResourceKind.TEAM, "keys": ["Automation", "Ghosts"]}


def test_invalid_repository_key_exits_with_code_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_delete(*_: object, **__: object) -> list[str]:
        raise AssertionError("delete must not run")

    monkeypatch.setattr(cli_module, "delete_resources", fake_delete)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["delete", "repository", "missing-slash"])

    assert exc.value.code == 2


def test_unknown_kind_is_rejected_by_argparse() -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main(["list", "project"])

    assert exc.value.code == 2


def test_manifest_error_exits_with_code_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_apply(*_: object, **__: object) -> ConvergenceResult:
        raise ManifestError("bad manifest")

    monkeypatch.setattr(cli_module, "apply_manifest", fake_apply)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["apply", "dtrack.toml"])

    assert exc.value.code == 2


def test_runtime_failure_exits_with_code_1(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_list(*_: object, **__: object) -> list[str]:
        raise RuntimeError("server down")

    monkeypatch.setattr(cli_module, "list_resources", fake_list)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["list", "team"])

    assert exc.value.code == 1


def test_version_flag_prints_package_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        cli_module.main(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out
