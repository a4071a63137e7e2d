"""Configuration property handler.

Properties are predefined by the server: they can be read and updated, never
created or deleted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.model import ResourceKind, config_property_id
from trackform.domain.reconciliation import index_by

from .base import ChangeAction, ResourceChange, ResourceNotFoundError, UnsupportedOperationError

if TYPE_CHECKING:
    from trackform.domain.model import ConfigProperty, ConfigPropertyKey, DesiredConfigProperty
    from trackform.domain.ports.remote import DependencyTrackPort

log = getLogger(__name__)


def _property_key(prop: ConfigProperty) -> ConfigPropertyKey:
    return prop.key


@dataclass(slots=True)
class ConfigPropertyHandler:
    remote: DependencyTrackPort

    def list_all(self) -> list[ConfigProperty]:
        return self.remote.list_config_properties()

    def find(self, group_name: str, name: str) -> ConfigProperty | None:
        return index_by(self.list_all(), _property_key).get((group_name, name))

    def ensure(self, desired: DesiredConfigProperty, *, dry_run: bool = False) -> ResourceChange:
        label = config_property_id(desired.group_name, desired.name)
        existing = self.find(desired.group_name, desired.name)
        if existing is None:
            raise ResourceNotFoundError(ResourceKind.CONFIG_PROPERTY, label)

        # the server masks encrypted values, so they can only ever be rewritten
        if not existing.is_secret and existing.value == desired.value:
            action = ChangeAction.UNCHANGED
        else:
            action = ChangeAction.UPDATED
            if not dry_run:
                self.remote.update_config_property(replace(existing, value=desired.value))
                log.info("Updated config property %s", label)

        return ResourceChange(
            kind=ResourceKind.CONFIG_PROPERTY,
            label=label,
            action=action,
            dry_run=dry_run,
        )

    def delete(self, group_name: str, name: str) -> bool:
        raise UnsupportedOperationError(
            "Configuration properties can not be deleted "
            f"({config_property_id(group_name, name)})",
            kind=ResourceKind.CONFIG_PROPERTY,
        )
