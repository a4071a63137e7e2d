from __future__ import annotations

import pytest

from trackform.config import (
    ConfigurationError,
    MissingConfigurationError,
    ResilienceConfig,
    RetryPolicy,
    api_headers,
    api_root,
    get_dtrack_config,
    optional_env_number,
    require_env_vars,
)


@pytest.fixture
def dtrack_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("DTRACK_BASE_URL", "https://dtrack.example.com/")
    monkeypatch.setenv("DTRACK_API_KEY", " odt_secret ")
    for name in ("DTRACK_PAGE_SIZE", "DTRACK_TIMEOUT_SECONDS", "DTRACK_MAX_CALLS_PER_SECOND"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_names_every_missing_var(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)
    assert exc.value.names == ("MISSING_A", "MISSING_B")


def test_optional_env_number_defaults_and_parses(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_NUMBER", raising=False)
    assert optional_env_number("EXAMPLE_NUMBER", parse=int, default=5) == 5

    monkeypatch.setenv("EXAMPLE_NUMBER", "2.5")
    assert optional_env_number("EXAMPLE_NUMBER", parse=float, default=None) == 2.5


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_optional_env_number_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("EXAMPLE_NUMBER", raw)

    with pytest.raises(ConfigurationError, match="EXAMPLE_NUMBER"):
        optional_env_number("EXAMPLE_NUMBER", parse=int, default=1)


def test_api_root_normalises_trailing_slash() -> None:
    assert api_root("https://dtrack.example.com") == "https://dtrack.example.com/api/v1/"
    assert api_root("https://dtrack.example.com/") == "https://dtrack.example.com/api/v1/"


def test_get_dtrack_config_defaults(dtrack_env: pytest.MonkeyPatch) -> None:
    config = get_dtrack_config()

    assert config.api_key == "odt_secret"
    assert config.page_size == 100
    assert config.resilience.base_url == "https://dtrack.example.com/api/v1/"
    assert config.resilience.timeout_seconds == 30.0
    assert config.resilience.ratelimit is None
    assert config.resilience.default_headers == {
        "X-Api-Key": "odt_secret",
        "Accept": "application/json",
    }
    assert "PUT" not in config.resilience.retry.allowed_methods


def test_get_dtrack_config_overrides(dtrack_env: pytest.MonkeyPatch) -> None:
    dtrack_env.setenv("DTRACK_PAGE_SIZE", "25")
    dtrack_env.setenv("DTRACK_TIMEOUT_SECONDS", "5.5")
    dtrack_env.setenv("DTRACK_MAX_CALLS_PER_SECOND", "10")

    config = get_dtrack_config()

    assert config.page_size == 25
    assert config.resilience.timeout_seconds == 5.5
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 10


def test_get_dtrack_config_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DTRACK_BASE_URL", raising=False)
    monkeypatch.delenv("DTRACK_API_KEY", raising=False)

    with pytest.raises(MissingConfigurationError, match="DTRACK_API_KEY"):
        get_dtrack_config()


def test_retry_defaults_never_replay_creates_or_server_errors() -> None:
    policy = RetryPolicy()

    assert "PUT" not in policy.allowed_methods
    assert {"GET", "POST", "DELETE"} <= policy.allowed_methods
    assert 500 not in policy.status_forcelist
    assert 429 in policy.status_forcelist


def test_resilience_config_defaults_target_dtrack() -> None:
    config = ResilienceConfig(default_headers=api_headers("k"))

    assert config.name == "dtrack"
    assert config.timeout_seconds == 30.0
    assert config.retry == RetryPolicy()
    assert config.default_headers == {"X-Api-Key": "k", "Accept": "application/json"}
