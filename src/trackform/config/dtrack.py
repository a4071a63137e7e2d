"""Dependency-Track connection settings.

The retry and rate-limit records here are consumed by
``trackform.adapters.http_resilience.ResilientClient``; their defaults are the
ones a Dependency-Track API server needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from .env import optional_env_number, require_env_vars

if TYPE_CHECKING:
    from collections.abc import Mapping

DTRACK_API_PREFIX = "/api/v1/"
DTRACK_DEFAULT_PAGE_SIZE = 100
DTRACK_TIMEOUT_SECONDS = 30.0

# PUT creates a new object on every call, so replaying it could duplicate teams
DTRACK_RETRY_METHODS = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "POST"})
# 500 usually means a rejected payload, which a retry cannot fix
DTRACK_RETRY_STATUSES = frozenset({429, 502, 503, 504})
DTRACK_TRANSIENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 4
    backoff_factor: float = 0.5
    backoff_jitter: float = 1.0
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = DTRACK_RETRY_METHODS
    status_forcelist: frozenset[int] = DTRACK_RETRY_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = DTRACK_TRANSIENT_ERRORS


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float = 1.0


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Transport settings for one HTTP client."""

    name: str = "dtrack"
    base_url: str | None = None
    timeout_seconds: float = DTRACK_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None


@dataclass(frozen=True)
class DependencyTrackConfig:
    """Holds Dependency-Track API configuration values."""

    base_url: str
    api_key: str
    resilience: ResilienceConfig
    page_size: int = DTRACK_DEFAULT_PAGE_SIZE


def api_root(base_url: str) -> str:
    """Return the v1 API root for a server URL, with a trailing slash."""

    return base_url.rstrip("/") + DTRACK_API_PREFIX


def api_headers(api_key: str) -> dict[str, str]:
    return {"X-Api-Key": api_key, "Accept": "application/json"}


def get_dtrack_config(*, resilience: ResilienceConfig | None = None) -> DependencyTrackConfig:
    values = require_env_vars(("DTRACK_BASE_URL", "DTRACK_API_KEY"))
    base_url = values["DTRACK_BASE_URL"]
    api_key = values["DTRACK_API_KEY"]

    page_size = optional_env_number(
        "DTRACK_PAGE_SIZE", parse=int, default=DTRACK_DEFAULT_PAGE_SIZE
    )
    timeout = optional_env_number(
        "DTRACK_TIMEOUT_SECONDS", parse=float, default=DTRACK_TIMEOUT_SECONDS
    )
    max_calls = optional_env_number("DTRACK_MAX_CALLS_PER_SECOND", parse=int, default=None)

    return DependencyTrackConfig(
        base_url=base_url,
        api_key=api_key,
        page_size=page_size or DTRACK_DEFAULT_PAGE_SIZE,
        resilience=resilience
        or ResilienceConfig(
            base_url=api_root(base_url),
            timeout_seconds=timeout or DTRACK_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=max_calls) if max_calls else None,
            default_headers=api_headers(api_key),
        ),
    )
