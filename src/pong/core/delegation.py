"""AUR-helper delegation transform.

Helpers such as ``paru`` or ``yay`` accept pacman's argument syntax and
extend it to AUR packages, so delegating a command only means swapping
its program name.  Every other token is left untouched.
"""

from __future__ import annotations

import dataclasses
import logging

from pong.core.builder import GeneratedCommand

logger = logging.getLogger(__name__)


def apply_delegation(command: GeneratedCommand, helper: str | None) -> GeneratedCommand:
    """Rewrite *command* to run through *helper* when delegation applies.

    Delegation applies when the generating rule requested it and a helper
    name is configured.  Without a helper the request is ignored and the
    original program is kept.
    """
    if not command.delegate:
        return command
    if not helper:
        logger.debug("Delegation requested but no AUR helper configured; keeping %s", command.program)
        return command

    logger.debug("Delegating %s to %s", command.program, helper)
    return dataclasses.replace(
        command,
        argv=(helper, *command.argv[1:]),
        delegated=True,
    )
