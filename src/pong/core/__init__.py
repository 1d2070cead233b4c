"""Core layer — the pure command-generation engine.

Rules
-----
* No ``print()`` calls.
* No filesystem, network, or process I/O.
* No imports from ``cli`` or ``infra``.
* The only environmental read (terminal attachment) is injected.
"""

from pong.core.builder import CommandBuilder, GeneratedCommand
from pong.core.delegation import apply_delegation
from pong.core.models import (
    INTENT_TYPES,
    Clean,
    ColorMode,
    GlobalOptions,
    Install,
    Intent,
    List,
    Pin,
    Remove,
    Search,
    Tree,
    Upgrade,
    View,
    Which,
)
from pong.core.protocols import TerminalProbe
from pong.core.rules import generate_command

__all__: list[str] = [
    "INTENT_TYPES",
    "Clean",
    "ColorMode",
    "CommandBuilder",
    "GeneratedCommand",
    "GlobalOptions",
    "Install",
    "Intent",
    "List",
    "Pin",
    "Remove",
    "Search",
    "TerminalProbe",
    "Tree",
    "Upgrade",
    "View",
    "Which",
    "apply_delegation",
    "generate_command",
]
