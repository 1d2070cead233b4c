"""Generation rules — one per intent variant.

Every rule receives a fresh :class:`~pong.core.builder.CommandBuilder`
(already carrying the shared pacman prefix), the intent, and the global
options, and drives the builder in the exact order pacman accepts.

Guarantees
----------
* Pure — the only environmental read is the injected terminal probe,
  consulted by the tree rule on every call.
* No ``print()``, no subprocess, no filesystem access.
* ``requires_root`` is fixed per variant: true for install, remove,
  upgrade, clean and pin; false for everything else.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pong.core.builder import CommandBuilder, GeneratedCommand
from pong.core.models import (
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
from pong.exceptions import IncompatibleOptionsError

logger = logging.getLogger(__name__)

PACMAN: str = "pacman"
PACTREE: str = "pactree"

Rule = Callable[[CommandBuilder, Intent, GlobalOptions], None]


# ---------------------------------------------------------------------------
# Shared prefixes
# ---------------------------------------------------------------------------

def _forward_paths(cli: CommandBuilder, options: GlobalOptions) -> None:
    cli.option("--config", options.config)
    cli.option("--dbpath", options.dbpath)
    cli.option("--gpgdir", options.gpgdir)


def _pacman_prefix(options: GlobalOptions) -> CommandBuilder:
    """Start a pacman command carrying every forwarded global option."""
    cli = CommandBuilder(PACMAN)
    cli.arg_if("--print", options.simulate)
    cli.arg_if("--debug", options.debug)
    cli.arg_if("--noconfirm", options.yes)
    cli.option("--color", options.color or ColorMode.AUTO)
    _forward_paths(cli, options)
    return cli


def _pactree_prefix(options: GlobalOptions) -> CommandBuilder:
    """Start a pactree command.

    pactree has no notion of simulate, quiet or noconfirm, so only the
    debug flag and the path overrides are forwarded.
    """
    cli = CommandBuilder(PACTREE)
    cli.arg_if("--debug", options.debug)
    _forward_paths(cli, options)
    return cli


def resolve_color(color: ColorMode | None, is_terminal: TerminalProbe) -> bool:
    """Decide whether pactree should colourise its output.

    ``ALWAYS`` and ``NEVER`` are honoured as given; an unspecified or
    ``AUTO`` mode enables colour only when stdout is a terminal.
    """
    if color is ColorMode.ALWAYS:
        return True
    if color is ColorMode.NEVER:
        return False
    return is_terminal()


# ---------------------------------------------------------------------------
# Mutating operations
# ---------------------------------------------------------------------------

def _install(cli: CommandBuilder, intent: Install, options: GlobalOptions) -> None:
    cli.root = True
    cli.delegate = intent.aur
    cli.arg("-S")
    cli.flag("q", options.quiet)
    cli.flag("w", intent.download)
    cli.arg_if("--needed", not intent.reinstall)
    cli.extend(intent.packages)


def _remove(cli: CommandBuilder, intent: Remove, options: GlobalOptions) -> None:
    cli.root = True
    cli.delegate = not intent.no_aur
    cli.arg("-R")
    cli.flag("n", not intent.save)
    cli.flag("s", not intent.keep_orphans)
    # A second 's' also removes orphans that were explicitly installed.
    cli.flag("s", intent.explicit)
    cli.flag("c", intent.cascade)
    cli.extend(intent.packages)


def _upgrade(cli: CommandBuilder, intent: Upgrade, options: GlobalOptions) -> None:
    if intent.refresh and intent.no_refresh:
        raise IncompatibleOptionsError(
            "--refresh and --no-refresh cannot be used together.",
        )
    cli.root = True
    cli.delegate = not intent.no_aur
    cli.arg("-S")
    cli.flag("q", options.quiet)
    cli.flag("w", intent.download)
    cli.flag("y", not intent.no_refresh)
    cli.flag("u", not intent.refresh)


def _clean(cli: CommandBuilder, intent: Clean, options: GlobalOptions) -> None:
    cli.root = True
    cli.delegate = not intent.no_aur
    cli.arg("-Sc")
    cli.flag("c", intent.all)


def _pin(cli: CommandBuilder, intent: Pin, options: GlobalOptions) -> None:
    cli.root = True
    cli.arg("-D")
    cli.flag("q", options.quiet)
    cli.arg_if("--asexplicit", not intent.remove)
    cli.arg_if("--asdeps", intent.remove)
    cli.extend(intent.packages)


# ---------------------------------------------------------------------------
# Read-only operations
# ---------------------------------------------------------------------------

def _search(cli: CommandBuilder, intent: Search, options: GlobalOptions) -> None:
    cli.delegate = intent.aur
    cli.arg("-Qs" if intent.installed else "-Ss")
    cli.flag("q", options.quiet)
    cli.extend(intent.queries)


def _list(cli: CommandBuilder, intent: List, options: GlobalOptions) -> None:
    cli.arg("-Q")
    cli.flag("q", options.quiet)
    cli.flag("e", intent.explicit)
    cli.flag("d", intent.deps)
    cli.flag("m", intent.no_sync)
    cli.flag("n", intent.sync)
    cli.flag("t", intent.free)
    cli.flag("u", intent.upgrades)


def _view(cli: CommandBuilder, intent: View, options: GlobalOptions) -> None:
    if intent.sync:
        cli.arg("-F" if intent.files else "-S")
    else:
        cli.arg("-Q")
    cli.flag("q", options.quiet)
    cli.flag("p", intent.package_file)
    cli.flag("c", intent.changelog)
    cli.flag("l", intent.files)
    # The file database (-F) has no info letter.
    cli.flag("i", not (intent.changelog and intent.files) and not (intent.sync and intent.files))
    cli.flag("i", intent.more)
    cli.extend(intent.packages)


def _which(cli: CommandBuilder, intent: Which, options: GlobalOptions) -> None:
    # Searching the AUR only makes sense against the sync databases.
    sync = intent.sync or intent.aur
    cli.delegate = intent.aur
    if sync:
        cli.arg("-F")
        cli.flag("q", options.quiet)
        cli.flag("x", intent.regex)
    else:
        cli.arg("-Qo")
        cli.flag("q", options.quiet)
    cli.extend(intent.files)


def _tree(
    cli: CommandBuilder,
    intent: Tree,
    options: GlobalOptions,
    is_terminal: TerminalProbe,
) -> None:
    cli.arg("-")
    cli.flag("a", intent.ascii)
    cli.flag("c", resolve_color(options.color, is_terminal))
    cli.flag("r", intent.reverse)
    _discard_empty_flag_group(cli)

    cli.option("-d", intent.depth)
    if intent.depth_optional is not None:
        # pactree reads --optional's value only in the attached form.
        cli.arg(f"--optional={intent.depth_optional}")
    cli.arg(intent.package)


def _discard_empty_flag_group(cli: CommandBuilder) -> None:
    """Drop a trailing bare ``-`` left when no tree flag letter applied."""
    if cli.tokens[-1] == "-":
        cli.tokens.pop()


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

RULES: dict[type, Rule] = {
    Install: _install,
    Remove: _remove,
    Upgrade: _upgrade,
    Clean: _clean,
    Pin: _pin,
    Search: _search,
    List: _list,
    View: _view,
    Which: _which,
}
"""pacman-backed rules keyed by intent type.  Tree is handled separately."""


def generate_command(
    intent: Intent,
    options: GlobalOptions,
    is_terminal: TerminalProbe,
) -> GeneratedCommand:
    """Translate *intent* and *options* into the underlying command.

    Parameters
    ----------
    intent:
        The validated operation the user asked for.
    options:
        Global settings for this invocation.
    is_terminal:
        Probe consulted by the tree rule when the colour mode is
        unspecified or ``auto``.  Required: core never inspects the
        terminal itself, callers pass
        :func:`pong.infra.terminal.stdout_is_terminal` or a stub.

    Raises
    ------
    IncompatibleOptionsError
        When the intent combines options the underlying program cannot
        honour together.
    UnrepresentablePathError
        When a configured path is not valid UTF-8.
    TypeError
        When *intent* is not one of the known intent variants.
    """
    if isinstance(intent, Tree):
        cli = _pactree_prefix(options)
        _tree(cli, intent, options, is_terminal)
    else:
        rule = RULES.get(type(intent))
        if rule is None:
            raise TypeError(f"Unsupported intent: {type(intent).__name__}")
        cli = _pacman_prefix(options)
        rule(cli, intent, options)

    command = cli.build()
    logger.debug(
        "Generated %s (root=%s, delegate=%s)",
        command.argv,
        command.requires_root,
        command.delegate,
    )
    return command
