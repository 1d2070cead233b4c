"""Infrastructure: locate the external programs pong drives.

This module is responsible for finding ``pacman``, ``pactree``,
``sudo`` and the configured AUR helper on the system PATH, and for
providing installation guidance when one of them is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from pong.exceptions import ExecutableNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one program.

    Attributes
    ----------
    name : str
        Program name that was looked up.
    found : bool
        Whether the program was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_hint : str
        Suggested way to obtain the program.  Empty when it is present.
    """

    name: str
    found: bool
    path: Path | None
    install_hint: str


_INSTALL_HINTS: dict[str, str] = {
    "pacman": "pacman ships with Arch Linux and its derivatives.",
    "pactree": "sudo pacman -S pacman-contrib",
    "sudo": "pacman -S sudo (as root)",
    "paru": "https://github.com/Morganamilo/paru#installation",
    "yay": "https://github.com/Jguer/yay#installation",
}


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system for *name*.

    Returns a :class:`ToolStatus` regardless of whether the program is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_hint="",
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_hint=_INSTALL_HINTS.get(name, f"Install {name} and make sure it is on PATH."),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ExecutableNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        raise ExecutableNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint=status.install_hint or None,
        )
    return status.path
