"""Process exit codes returned by pong itself.

Once a command has been handed over with ``exec`` the exit code is the
underlying program's; these values only cover the paths where pong
exits on its own.  argparse usage errors exit with ``2`` by themselves.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Help, version, doctor, or ``--generate-command`` finished cleanly."""

GENERAL_ERROR: int = 1
"""A PongError (conflict, bad path, missing tool) was reported on stderr."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""An exception outside the PongError hierarchy reached the boundary."""
