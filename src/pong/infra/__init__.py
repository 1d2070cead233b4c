"""Infrastructure layer — operating-system integration.

This layer wraps all interaction with the terminal, the PATH, ``sudo``
and process replacement.  Every raw OS exception must be caught here and
re-raised as a :class:`~pong.exceptions.PongError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from pong.infra.executor import build_invocation, execute, needs_escalation
from pong.infra.terminal import stdout_is_terminal
from pong.infra.tool_detector import ToolStatus, detect_tool, require_tool

__all__: list[str] = [
    "ToolStatus",
    "build_invocation",
    "detect_tool",
    "execute",
    "needs_escalation",
    "require_tool",
    "stdout_is_terminal",
]
