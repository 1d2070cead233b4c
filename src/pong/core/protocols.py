"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol


class TerminalProbe(Protocol):
    """Contract for the single environmental read the engine performs.

    Any zero-argument callable returning a ``bool`` satisfies this
    protocol structurally, including a plain ``lambda: True`` in tests.
    """

    def __call__(self) -> bool:
        """Return ``True`` when standard output is an interactive terminal.

        Implementations must be evaluated afresh on every call; callers
        never cache the answer.
        """
        ...  # pragma: no cover
