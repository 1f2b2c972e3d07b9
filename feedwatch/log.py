"""Loguru sink setup for the command line."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from feedwatch.config import LogLevelLiteral


LOG_LEVELS: dict[str, str | None] = {
    "off": None,
    "error": "ERROR",
    "warn": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
    "trace": "TRACE",
}

_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}"


def configure_logging(level: LogLevelLiteral, *, sink: TextIO | None = None) -> int | None:
    """Replace every loguru handler with a single stderr sink at ``level``.

    Returns the new handler id, or ``None`` when logging is switched off.
    """

    logger.remove()
    loguru_level = LOG_LEVELS[level]
    if loguru_level is None:
        return None
    return logger.add(sink or sys.stderr, level=loguru_level, format=_FORMAT)


__all__ = ["LOG_LEVELS", "configure_logging"]
