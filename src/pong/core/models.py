"""Domain models for pong.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.

Two families live here:

* :class:`GlobalOptions` — the settings shared by every operation.
* The intent variants (:class:`Install` … :class:`Which`) — exactly one
  of them describes what the user asked for in a single run.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Union


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------

class ColorMode(str, enum.Enum):
    """Colour policy forwarded to pacman / pactree."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Settings shared by every operation of a single invocation."""

    debug: bool = False
    """Display debug messages from the underlying program."""

    simulate: bool = False
    """Print what would be done without performing any changes."""

    quiet: bool = False
    """Show less information for operations that support it."""

    yes: bool = False
    """Never ask for confirmation."""

    color: ColorMode | None = None
    """Explicit colour mode, or ``None`` when left unspecified."""

    config: Path | None = None
    """Alternate pacman configuration file."""

    dbpath: Path | None = None
    """Alternate package database location."""

    gpgdir: Path | None = None
    """Alternate GnuPG directory."""

    aur_helper: str | None = None
    """Program that takes over delegated commands (e.g. ``paru``)."""


# ---------------------------------------------------------------------------
# Mutating intents
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Install:
    """Install packages and all of their required dependencies."""

    packages: tuple[str, ...] = ()
    reinstall: bool = False
    download: bool = False
    aur: bool = False


@dataclass(frozen=True, slots=True)
class Remove:
    """Remove packages and, by default, their orphaned dependencies."""

    packages: tuple[str, ...] = ()
    cascade: bool = False
    keep_orphans: bool = False
    explicit: bool = False
    save: bool = False
    no_aur: bool = False


@dataclass(frozen=True, slots=True)
class Upgrade:
    """Refresh the sync database and upgrade packages."""

    no_refresh: bool = False
    refresh: bool = False
    download: bool = False
    no_aur: bool = False


@dataclass(frozen=True, slots=True)
class Clean:
    """Clean the package caches."""

    all: bool = False
    no_aur: bool = False


@dataclass(frozen=True, slots=True)
class Pin:
    """Mark packages as explicitly installed, or as dependencies."""

    packages: tuple[str, ...] = ()
    remove: bool = False


# ---------------------------------------------------------------------------
# Read-only intents
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Search:
    """Search the sync databases, or installed packages."""

    queries: tuple[str, ...] = ()
    installed: bool = False
    aur: bool = False


@dataclass(frozen=True, slots=True)
class List:
    """List installed packages, optionally filtered."""

    explicit: bool = False
    deps: bool = False
    free: bool = False
    sync: bool = False
    no_sync: bool = False
    upgrades: bool = False


@dataclass(frozen=True, slots=True)
class View:
    """Display information about packages."""

    packages: tuple[str, ...] = ()
    sync: bool = False
    package_file: bool = False
    more: bool = False
    files: bool = False
    changelog: bool = False


@dataclass(frozen=True, slots=True)
class Tree:
    """Show the dependency tree of a single package."""

    package: str
    ascii: bool = False
    depth: int | None = None
    depth_optional: int | None = None
    reverse: bool = False


@dataclass(frozen=True, slots=True)
class Which:
    """Find the packages that own the given files."""

    files: tuple[str, ...] = ()
    sync: bool = False
    aur: bool = False
    regex: bool = False


Intent = Union[Install, Remove, Upgrade, Clean, Pin, Search, List, View, Tree, Which]
"""Closed union of every operation pong knows how to translate."""

INTENT_TYPES: tuple[type, ...] = (
    Install,
    Remove,
    Upgrade,
    Clean,
    Pin,
    Search,
    List,
    View,
    Tree,
    Which,
)
"""Every intent variant, in declaration order."""
