from __future__ import annotations

import pytest

DTRACK_ENV_VARS = (
    "DTRACK_BASE_URL",
    "DTRACK_API_KEY",
    "DTRACK_PAGE_SIZE",
    "DTRACK_TIMEOUT_SECONDS",
    "DTRACK_MAX_CALLS_PER_SECOND",
)


@pytest.fixture(autouse=True)
def _isolate_dtrack_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's real server settings out of the test run."""
    for name in DTRACK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
