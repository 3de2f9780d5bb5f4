"""Central logging configuration utilities for sfds_status.

Log records always go to stderr so that stdout carries only the rendered
report, which keeps the JSON and CSV output machine-parsable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}


def resolve_level(level: str | int | None) -> int:
    """Translate a level name (or number) into a logging level."""
    if level is None:
        level = os.environ.get("SFDS_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    if isinstance(level, str):
        return _LEVEL_MAP.get(level.strip().upper(), logging.WARNING)
    return level


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger.

    Order of precedence for level:
    1. Explicit `level` argument if given
    2. Environment variable `SFDS_LOG_LEVEL`
    3. Fallback to `WARNING`
    """
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=force,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a project logger. Handlers are installed by `configure_logging`."""
    return logging.getLogger(name or "sfds_status")


__all__ = ["configure_logging", "get_logger", "resolve_level"]
