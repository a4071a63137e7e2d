"""Application configuration helpers."""

from __future__ import annotations

from .dtrack import (
    DependencyTrackConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    api_headers,
    api_root,
    get_dtrack_config,
)
from .env import optional_env_number, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "DependencyTrackConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "api_headers",
    "api_root",
    "configure_logging",
    "get_dtrack_config",
    "optional_env_number",
    "require_env_vars",
]
