from __future__ import annotations

import pytest

from tests.helpers.fake_dtrack import FakeDependencyTrack, make_config_property
from trackform.domain.model import ConfigPropertyType, DesiredConfigProperty
from trackform.domain.resources import (
    ChangeAction,
    ConfigPropertyHandler,
    ResourceNotFoundError,
    UnsupportedOperationError,
)


@pytest.fixture
def remote() -> FakeDependencyTrack:
    return FakeDependencyTrack(
        config_properties=[
            make_config_property("general", "base.url", "http://localhost:8080"),
            make_config_property(
                "email", "smtp.password", "hunter2", type=ConfigPropertyType.ENCRYPTEDSTRING
            ),
        ]
    )


def test_ensure_updates_changed_value(remote: FakeDependencyTrack) -> None:
    desired = DesiredConfigProperty(
        group_name="general", name="base.url", value="https://dtrack.example.com"
    )

    change = ConfigPropertyHandler(remote).ensure(desired)

    assert change.action is ChangeAction.UPDATED
    assert change.label == "general_base-url"
    assert remote.config_properties[("general", "base.url")].value == "https://dtrack.example.com"


def test_ensure_same_value_is_unchanged(remote: FakeDependencyTrack) -> None:
    desired = DesiredConfigProperty(
        group_name="general", name="base.url", value="http://localhost:8080"
    )

    change = ConfigPropertyHandler(remote).ensure(desired)

    assert change.action is ChangeAction.UNCHANGED
    assert remote.mutations == []


def test_ensure_always_rewrites_secrets(remote: FakeDependencyTrack) -> None:
    desired = DesiredConfigProperty(group_name="email", name="smtp.password", value="hunter2")

    change = ConfigPropertyHandler(remote).ensure(desired)

    assert change.action is ChangeAction.UPDATED
    assert remote.mutations == [("update_config_property", "email_smtp-password")]


def test_ensure_dry_run_does_not_write(remote: FakeDependencyTrack) -> None:
    desired = DesiredConfigProperty(group_name="general", name="base.url", value="x")

    change = ConfigPropertyHandler(remote).ensure(desired, dry_run=True)

    assert change.action is ChangeAction.UPDATED
    assert remote.mutations == []


def test_ensure_unknown_property_raises(remote: FakeDependencyTrack) -> None:
    desired = DesiredConfigProperty(group_name="general", name="no.such", value="x")

    with pytest.raises(ResourceNotFoundError, match="general_no-such"):
        ConfigPropertyHandler(remote).ensure(desired)


def test_delete_is_unsupported(remote: FakeDependencyTrack) -> None:
    with pytest.raises(UnsupportedOperationError):
        ConfigPropertyHandler(remote).delete("general", "base.url")
