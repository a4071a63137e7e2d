from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pytest

from tests.helpers.fake_dtrack import FakeDependencyTrack, make_config_property
from trackform import app as app_module
from trackform.domain.model import (
    ConfigPropertyType,
    Repository,
    RepositoryType,
    ResourceKind,
)
from trackform.domain.resources import UnsupportedOperationError


@pytest.fixture
def remote() -> FakeDependencyTrack:
    remote = FakeDependencyTrack(
        config_properties=[
            make_config_property("general", "base.url", "http://localhost"),
            make_config_property(
                "email", "smtp.password", "hunter2", type=ConfigPropertyType.ENCRYPTEDSTRING
            ),
        ]
    )
    remote.seed_team("Administrators")
    remote.seed_repository(
        Repository(
            type=RepositoryType.NPM,
            identifier="npmjs",
            url="https://registry.npmjs.org/",
            enabled=False,
        )
    )
    return remote


def test_apply_manifest_converges(tmp_path: Path, remote: FakeDependencyTrack) -> None:
    manifest = tmp_path / "dtrack.toml"
    manifest.write_text(
        '[[teams]]\nname = "Automation"\npermissions = ["BOM_UPLOAD"]\n', encoding="utf-8"
    )

    result = app_module.apply_manifest(manifest, remote=remote, page_size=10)

    assert result.created == ["team Automation"]
    assert remote.list_calls[0][1].page_size == 10


def test_apply_empty_manifest_skips_remote(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manifest = tmp_path / "empty.toml"
    manifest.write_text("", encoding="utf-8")

    def fail_build() -> None:
        raise AssertionError("no client should be built")

    monkeypatch.setattr(app_module, "build_dtrack_client", fail_build)

    result = app_module.apply_manifest(manifest, dry_run=True)

    assert result.changes == []
    assert result.dry_run


def test_list_resources_masks_secrets(remote: FakeDependencyTrack) -> None:
    lines = app_module.list_resources(ResourceKind.CONFIG_PROPERTY, remote=remote)

    assert lines == ["general_base-url = http://localhost", "email_smtp-password = ********"]


def test_list_resources_describes_repositories(remote: FakeDependencyTrack) -> None:
    lines = app_module.list_resources(ResourceKind.REPOSITORY, remote=remote)

    assert lines == ["NPM/npmjs https://registry.npmjs.org/ [disabled]"]


def test_list_resources_teams_and_permissions(remote: FakeDependencyTrack) -> None:
    assert app_module.list_resources(ResourceKind.TEAM, remote=remote) == ["Administrators"]
    assert "BOM_UPLOAD" in app_module.list_resources(ResourceKind.PERMISSION, remote=remote)


def test_delete_resources_reports_existing_keys(remote: FakeDependencyTrack) -> None:
    deleted = app_module.delete_resources(
        ResourceKind.TEAM, ["Administrators", "Ghosts"], remote=remote
    )

    assert deleted == ["Administrators"]
    assert remote.mutations == [("delete_team", "Administrators")]


def test_delete_repository_by_type_and_identifier(remote: FakeDependencyTrack) -> None:
    deleted = app_module.delete_resources(ResourceKind.REPOSITORY, ["npm/npmjs"], remote=remote)

    assert deleted == ["npm/npmjs"]
    assert remote.repositories == {}


def test_delete_repository_with_bad_key_deletes_nothing(remote: FakeDependencyTrack) -> None:
    with pytest.raises(ValueError, match="TYPE/identifier"):
        app_module.delete_resources(
            ResourceKind.REPOSITORY, ["NPM/npmjs", "no-slash"], remote=remote
        )

    assert remote.mutations == []


def test_delete_config_property_is_unsupported(remote: FakeDependencyTrack) -> None:
    with pytest.raises(UnsupportedOperationError):
        app_module.delete_resources(
            ResourceKind.CONFIG_PROPERTY, ["general_base-url"], remote=remote
        )
