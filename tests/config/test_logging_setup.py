from __future__ import annotations

import logging

from trackform.config import configure_logging


def test_configure_logging_accepts_level_names() -> None:
    configure_logging(level="warning", force=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_debug_level_lets_http_logs_through() -> None:
    configure_logging(level=logging.DEBUG, force=True)

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.NOTSET
