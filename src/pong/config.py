"""Environment-backed settings.

Command-line flags always win; these values only provide defaults.

Variables
---------
PONG_AUR_HELPER
    Name of the AUR helper that delegated commands run through
    (e.g. ``paru``).  Unset or empty disables delegation.
PONG_LOG_LEVEL
    Log level name used when ``--verbose`` is not given.
    Defaults to ``WARNING``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

AUR_HELPER_ENV: str = "PONG_AUR_HELPER"
LOG_LEVEL_ENV: str = "PONG_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "WARNING"


@dataclass(frozen=True, slots=True)
class Settings:
    """Defaults read from the process environment."""

    aur_helper: str | None
    log_level: str


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Read :class:`Settings` from *environ* (``os.environ`` by default)."""
    env = os.environ if environ is None else environ

    helper = env.get(AUR_HELPER_ENV, "").strip()
    level = env.get(LOG_LEVEL_ENV, "").strip().upper()

    return Settings(
        aur_helper=helper or None,
        log_level=level or DEFAULT_LOG_LEVEL,
    )
