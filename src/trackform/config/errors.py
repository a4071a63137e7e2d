"""Errors raised while reading trackform settings from the environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """An environment variable is set but unusable."""

    def __init__(self, message: str, *, names: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.names: tuple[str, ...] = tuple(names)


class MissingConfigurationError(ConfigurationError):
    """Required variables are absent or blank; all of them are named at once."""

    def __init__(self, names: Iterable[str]) -> None:
        missing = sorted(names)
        super().__init__(f"Missing configuration for: {', '.join(missing)}", names=missing)
