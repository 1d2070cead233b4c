"""Allow ``python -m pong`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m pong`` behaves identically to the ``pong`` console
script.
"""

from __future__ import annotations

from pong.cli.app import cli

if __name__ == "__main__":
    cli()
