"""Infrastructure: run a generated command in place of this process.

This module is the **only** place in the codebase that escalates
privileges or replaces the running process.  OS-level failures are
caught here and re-raised as typed
:class:`~pong.exceptions.PongError` subclasses.

Escalation policy
-----------------
A command is prefixed with ``sudo`` when it requires root, was not
delegated to an AUR helper (helpers escalate on their own), and the
current effective user is not already root.
"""

from __future__ import annotations

import logging
import os

from pong.core.builder import GeneratedCommand
from pong.exceptions import ExecutionError, PrivilegeEscalationError
from pong.infra.tool_detector import detect_tool, require_tool

logger = logging.getLogger(__name__)


def _is_root() -> bool:
    return os.geteuid() == 0


def needs_escalation(command: GeneratedCommand) -> bool:
    """Return ``True`` when *command* must be run through ``sudo``."""
    return command.requires_root and not command.delegated and not _is_root()


def build_invocation(command: GeneratedCommand) -> list[str]:
    """Return the exact argv that will be executed for *command*.

    Raises
    ------
    PrivilegeEscalationError
        When escalation is needed but ``sudo`` is not available.
    """
    argv = list(command.argv)
    if not needs_escalation(command):
        return argv

    sudo = detect_tool("sudo")
    if not sudo.found:
        raise PrivilegeEscalationError(
            "failed to gain root privileges: sudo is not available.",
            hint="Run pong as root, or install sudo.",
        )
    return ["sudo", *argv]


def execute(command: GeneratedCommand) -> None:
    """Replace the current process with *command*.

    On success this function never returns.

    Raises
    ------
    ExecutableNotFoundError
        When the target program is not on PATH.
    PrivilegeEscalationError
        When root is needed but cannot be obtained.
    ExecutionError
        When the operating system refuses to start the program.
    """
    require_tool(command.program)
    argv = build_invocation(command)
    logger.info("Executing: %s", " ".join(argv))

    try:
        os.execvp(argv[0], argv)
    except OSError as exc:
        raise ExecutionError(
            f"Could not execute {argv[0]}: {exc.strerror or exc}",
        ) from exc
