"""
Logging configuration — central setup for the CLI entry point.

Called once at startup by ``pong.cli.app``.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    --verbose flag  >  PONG_LOG_LEVEL env var  >  WARNING (default)
"""

from __future__ import annotations

import logging
import sys

# WARNING level — minimal, no noise
_FMT_MINIMAL = "pong: %(message)s"

# DEBUG / INFO — module context for diagnostics
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"


def setup_logging(level: str = "WARNING") -> None:
    """Configure Python logging for the ``pong`` logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = _parse_level(level)

    if numeric_level <= logging.INFO:
        formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    else:
        formatter = logging.Formatter(_FMT_MINIMAL)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)

    root = logging.getLogger("pong")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)


def _parse_level(level: str) -> int:
    """Convert a level name to its numeric value, defaulting to WARNING."""
    numeric = getattr(logging, level.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.WARNING
