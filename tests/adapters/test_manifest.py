from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from trackform.adapters.manifest import ManifestError, load_manifest, parse_manifest
from trackform.domain.model import RepositoryType

MANIFEST = """
[[teams]]
name = " Automation "
permissions = ["BOM_UPLOAD", "VIEW_PORTFOLIO"]

[[teams]]
name = "Administrators"

[[teams]]
name = "Locked"
permissions = []

[[oidc_groups]]
name = "dt-admins"
teams = ["Administrators"]

[[repositories]]
type = "pypi"
identifier = "internal-pypi"
url = "https://pypi.example.com/simple/"
internal = true
authentication_required = true
username = "ci"
password = "s3cret"

[[config_properties]]
group = "general"
name = "badge.enabled"
value = true

[[config_properties]]
group = "general"
name = "base.url"
value = "https://dtrack.example.com"
"""


def test_parse_manifest_builds_desired_state() -> None:
    state = parse_manifest(MANIFEST)

    automation, administrators, locked = state.teams
    assert automation.name == "Automation"
    assert automation.permissions == ("BOM_UPLOAD", "VIEW_PORTFOLIO")
    assert administrators.permissions is None
    assert locked.permissions == ()

    assert state.oidc_groups[0].teams == ("Administrators",)

    repository = state.repositories[0]
    assert repository.type is RepositoryType.PYPI
    assert repository.enabled is True
    assert repository.password == "s3cret"

    badge, base_url = state.config_properties
    assert badge.value == "true"
    assert base_url.group_name == "general"
    assert base_url.value == "https://dtrack.example.com"


def test_empty_manifest_is_empty_state() -> None:
    assert parse_manifest("").is_empty


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ManifestError, match="premissions"):
        parse_manifest('[[teams]]\nname = "x"\npremissions = []\n')


def test_unknown_repository_type_is_rejected() -> None:
    manifest = '[[repositories]]\ntype = "APT"\nidentifier = "x"\nurl = "https://x"\n'

    with pytest.raises(ManifestError):
        parse_manifest(manifest)


def test_unsupported_repository_type_is_rejected() -> None:
    manifest = '[[repositories]]\ntype = "unsupported"\nidentifier = "x"\nurl = "https://x"\n'

    with pytest.raises(ManifestError, match="unknown server-side types"):
        parse_manifest(manifest)


def test_invalid_toml_is_reported_with_source() -> None:
    with pytest.raises(ManifestError, match="broken.toml: invalid TOML"):
        parse_manifest("[[teams]\n", source="broken.toml")


def test_load_manifest_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "dtrack.toml"
    path.write_text(MANIFEST, encoding="utf-8")

    assert len(load_manifest(path).teams) == 3


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Could not read manifest"):
        load_manifest(tmp_path / "missing.toml")
