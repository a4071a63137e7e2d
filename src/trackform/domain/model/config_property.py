"""Server configuration properties (group/name/value triples)."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ConfigPropertyType

type ConfigPropertyKey = tuple[str, str]


def config_property_id(group_name: str, name: str) -> str:
    """Stable identifier for a property, e.g. ``email_smtp-enabled``."""

    return f"{group_name}_{name.replace('.', '-')}"


@dataclass(frozen=True, slots=True, kw_only=True)
class ConfigProperty:
    group_name: str
    name: str
    value: str | None = None
    type: ConfigPropertyType | str | None = None
    description: str | None = None

    @property
    def key(self) -> ConfigPropertyKey:
        return (self.group_name, self.name)

    @property
    def property_id(self) -> str:
        return config_property_id(self.group_name, self.name)

    @property
    def is_secret(self) -> bool:
        return self.type == ConfigPropertyType.ENCRYPTEDSTRING
