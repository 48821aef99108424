"""Logging setup shared by the CLI and services.

Service modules only ask for loggers. Handlers are installed once, by the
CLI entry point, at the level given on the command line or in LOG_LEVEL.
"""

from __future__ import annotations

import logging
import os

DEFAULT_LEVEL = "WARNING"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def resolve_level(level: str | int | None = None) -> int:
    """Turn a level name or number into a logging level.

    Args:
        level: Name such as "debug", a numeric level, or None to read
            LOG_LEVEL (default WARNING)

    Raises:
        ValueError: If the name is not a logging level
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", DEFAULT_LEVEL)
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def configure_logging(level: str | int | None = None) -> None:
    """Install the root handler on first call; later calls are ignored."""
    global _configured
    if _configured:
        return
    logging.basicConfig(level=resolve_level(level), format=_FORMAT)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module; pass ``__name__``.

    Unlike configure_logging this never touches handlers, so importing a
    service does not change logging for the host application.
    """
    return logging.getLogger(name)
