from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_LEVEL_ENV = "MOVIE_MONDAY_LOG_LEVEL"


def resolve_log_level(level: str | None = None) -> int:
    """Explicit level, else ``MOVIE_MONDAY_LOG_LEVEL``, else INFO."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return resolved


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(level=resolve_log_level(level), format=LOG_FORMAT)
