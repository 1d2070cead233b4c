"""Infrastructure: terminal attachment probe.

Satisfies :class:`~pong.core.protocols.TerminalProbe` by asking the
current ``sys.stdout`` whether it is a TTY.  ``sys.stdout`` is looked up
at call time so that redirection (and pytest's capture) is honoured.
"""

from __future__ import annotations

import sys


def stdout_is_terminal() -> bool:
    """Return ``True`` when standard output is attached to a terminal."""
    stream = sys.stdout
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except ValueError:
        # Closed stream.
        return False
