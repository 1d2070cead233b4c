"""Custom exception hierarchy for pong.

All exceptions that cross layer boundaries must inherit from
:class:`PongError`.  Raw OS-level exceptions (e.g. from ``os.execvp``)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
PongError
├── IncompatibleOptionsError
├── UnrepresentablePathError
├── EmptyCommandError
├── ExecutionError
└── EnvironmentError
    ├── ExecutableNotFoundError
    └── PrivilegeEscalationError
"""

from __future__ import annotations


class PongError(Exception):
    """Base exception for all pong errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command generation ----------------------------------------------------

class IncompatibleOptionsError(PongError):
    """Raised when two options that cannot be combined are both set."""


class UnrepresentablePathError(PongError):
    """Raised when a configured path cannot be passed on as UTF-8 text."""


class EmptyCommandError(PongError):
    """Raised when a flag character is appended to an empty command."""


# --- Execution -------------------------------------------------------------

class ExecutionError(PongError):
    """Raised when the generated command could not be started."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(PongError):
    """Raised when a required runtime dependency is not available."""


class ExecutableNotFoundError(EnvironmentError):
    """Raised when a required program cannot be located on PATH."""


class PrivilegeEscalationError(EnvironmentError):
    """Raised when root privileges are required but cannot be obtained."""
