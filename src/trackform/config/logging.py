"""Root logger setup for the trackform CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
NOISY_LOGGERS = ("httpx", "httpcore", "httpx_retries")


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Configure the root logger; ``level`` may be a number or a name like ``"DEBUG"``.

    Below DEBUG the HTTP stack only reports warnings, so request lines do not
    bury reconciliation output. ``force=True`` replaces existing handlers.
    """

    numeric = logging.getLevelNamesMapping()[level.upper()] if isinstance(level, str) else level
    logging.basicConfig(level=numeric, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    quiet = logging.NOTSET if numeric <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
