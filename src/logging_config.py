"""
Centralized logging configuration.

Usage:
- Default: concise INFO-level logs.
- Debugging: set LOG_LEVEL=DEBUG (or call setup_logging(level="DEBUG")) for verbose logs.

Environment variables:
- LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _resolve_level(level: str | None) -> int:
    level_str = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return LOG_LEVELS.get(level_str, logging.INFO)


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger.

    Args:
        level: Optional level name (e.g. "DEBUG"). If omitted, uses LOG_LEVEL env var or INFO.
    """
    numeric_level = _resolve_level(level)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    is_debug = numeric_level <= logging.DEBUG
    fmt_verbose = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(funcName)s | %(message)s"
    fmt_concise = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt=fmt_verbose if is_debug else fmt_concise, datefmt="%H:%M:%S")
    )

    root.setLevel(numeric_level)
    root.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if is_debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Convenience wrapper to get a module logger."""
    return logging.getLogger(name)
