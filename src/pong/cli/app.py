"""CLI application entry point and command routing for pong.

This module is the **sole error boundary** for the entire application.
It catches :class:`~pong.exceptions.PongError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages on
stderr and returning well-defined exit codes.

Architecture notes
------------------
* No command-generation logic lives here — argv is turned into an intent
  and global options, and the core engine does the rest.
* Conflicts argparse can express are rejected here (exit code 2); the
  engine checks the remaining ones itself.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from pathlib import Path

from pong.cli import exit_codes
from pong.cli.console import console
from pong.config import Settings, load_settings
from pong.core.delegation import apply_delegation
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
from pong.core.rules import generate_command
from pong.exceptions import PongError
from pong.infra.terminal import stdout_is_terminal
from pong.logging_config import setup_logging
from pong.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------

def _non_negative_int(value: str) -> int:
    """argparse ``type=`` for depth limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value!r}")
    return number


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_global_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-g",
        "--generate-command",
        action="store_true",
        help="Print the underlying command without executing it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show pong's own debug log on stderr.",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Display debug messages.")
    parser.add_argument(
        "-s",
        "--simulate",
        action="store_true",
        help="Simulate a test run without performing any changes.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Show less information for certain operations.",
    )
    parser.add_argument("-y", "--yes", action="store_true", help="Never ask for confirmation.")
    parser.add_argument(
        "-c",
        "--color",
        type=ColorMode,
        choices=list(ColorMode),
        default=None,
        help="Colorize output.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="Specify an alternate configuration file.",
    )
    parser.add_argument(
        "--dbpath",
        type=Path,
        metavar="DIR",
        help="Specify an alternate database location.",
    )
    parser.add_argument(
        "--gpgdir",
        type=Path,
        metavar="DIR",
        help="Specify an alternate directory for GnuPG.",
    )
    parser.add_argument(
        "--aur-helper",
        metavar="NAME",
        default=None,
        help="AUR helper that AUR-aware operations are delegated to "
        "(default: $PONG_AUR_HELPER).",
    )


def _add_install(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "install",
        aliases=["i"],
        help="Install packages.",
        description="Install the specified packages and all of their required dependencies.",
    )
    sub.set_defaults(operation="install")
    sub.add_argument("packages", nargs="*", metavar="PACKAGE", help="Packages to install.")
    group = sub.add_mutually_exclusive_group()
    group.add_argument(
        "-r", "--reinstall", action="store_true",
        help="Reinstall packages that are already installed.",
    )
    group.add_argument(
        "-d", "--download", action="store_true",
        help="Retrieve packages, but do not install them.",
    )
    sub.add_argument(
        "-u", "--aur", action="store_true",
        help="Install from the AUR in addition to official sources.",
    )


def _add_remove(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "remove",
        aliases=["r"],
        help="Remove packages.",
        description="Remove all specified packages and recursively remove "
        "any orphaned dependencies.",
    )
    sub.set_defaults(operation="remove")
    sub.add_argument("packages", nargs="*", metavar="PACKAGE", help="Packages to remove.")
    sub.add_argument(
        "-c", "--cascade", action="store_true",
        help="Remove all packages that depend on the packages as well.",
    )
    group = sub.add_mutually_exclusive_group()
    group.add_argument(
        "-k", "--keep-orphans", action="store_true",
        help="Keep orphaned dependencies.",
    )
    group.add_argument(
        "-e", "--explicit", action="store_true",
        help="Remove orphaned dependencies, even if they are marked as "
        "explicitly installed.",
    )
    sub.add_argument("-s", "--save", action="store_true", help="Save configuration files.")
    sub.add_argument(
        "--no-aur", action="store_true",
        help="Do not perform AUR-specific operations when removing AUR packages.",
    )


def _add_upgrade(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "upgrade",
        aliases=["u"],
        help="Refresh the sync database and upgrade packages.",
    )
    sub.set_defaults(operation="upgrade")
    sub.add_argument(
        "-n", "--no-refresh", action="store_true",
        help="Only upgrade packages, do not refresh the sync database.",
    )
    sub.add_argument(
        "-r", "--refresh", action="store_true",
        help="Only refresh the sync database, do not perform upgrades.",
    )
    sub.add_argument(
        "-d", "--download", action="store_true",
        help="Retrieve packages, but do not perform upgrades.",
    )
    sub.add_argument("--no-aur", action="store_true", help="Do not upgrade AUR packages.")


def _add_clean(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "clean",
        aliases=["c"],
        help="Clean the package caches.",
        description="Remove packages that are no longer installed from the cache "
        "as well as unused sync databases.",
    )
    sub.set_defaults(operation="clean")
    sub.add_argument(
        "-a", "--all", action="store_true",
        help="Also remove installed packages from the cache.",
    )
    sub.add_argument("--no-aur", action="store_true", help="Do not perform AUR-specific cleaning.")


def _add_search(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser("search", aliases=["s"], help="Search for a package.")
    sub.set_defaults(operation="search")
    sub.add_argument("queries", nargs="*", metavar="REGEX", help="Query regexes to search for.")
    sub.add_argument(
        "-i", "--installed", action="store_true",
        help="Search in installed packages.",
    )
    sub.add_argument(
        "-u", "--aur", action="store_true",
        help="Search the AUR along with official repositories.",
    )


def _add_list(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser("list", aliases=["l"], help="List installed packages.")
    sub.set_defaults(operation="list")
    reason = sub.add_mutually_exclusive_group()
    reason.add_argument(
        "-e", "--explicit", action="store_true",
        help="Only list packages installed explicitly.",
    )
    reason.add_argument(
        "-d", "--deps", action="store_true",
        help="Only list packages installed as dependencies.",
    )
    sub.add_argument(
        "-f", "--free", action="store_true",
        help="Only list packages not required by any installed packages.",
    )
    origin = sub.add_mutually_exclusive_group()
    origin.add_argument(
        "-s", "--sync", action="store_true",
        help="Only list packages found in the sync database(s).",
    )
    origin.add_argument(
        "-n", "--no-sync", action="store_true",
        help="Only list packages not found in the sync database(s).",
    )
    sub.add_argument(
        "-u", "--upgrades", action="store_true",
        help="Only list packages that are out of date.",
    )


def _add_view(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "view",
        aliases=["v"],
        help="Display various information about packages.",
    )
    sub.set_defaults(operation="view")
    sub.add_argument(
        "packages", nargs="*", metavar="PACKAGE",
        help="Packages to display information about.",
    )
    sub.add_argument(
        "-s", "--sync", action="store_true",
        help="Query the sync database instead of installed packages.",
    )
    sub.add_argument(
        "-p", "--package-file", action="store_true",
        help="Query package files instead of installed packages.",
    )
    sub.add_argument(
        "-m", "--more", action="store_true",
        help="Print more information, including packages that require the "
        "named packages and backup file states.",
    )
    sub.add_argument(
        "-f", "--files", action="store_true",
        help="List the files that the packages provide.",
    )
    sub.add_argument(
        "-c", "--changelog", action="store_true",
        help="Print the ChangeLog of a local package.",
    )


def _add_tree(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "tree",
        aliases=["t"],
        help="Show the dependency tree of a package.",
    )
    sub.set_defaults(operation="tree")
    sub.add_argument("package", help="The package to show a dependency tree for.")
    sub.add_argument(
        "-a", "--ascii", action="store_true",
        help="Use ASCII characters for tree formatting.",
    )
    sub.add_argument(
        "-d", "--depth", type=_non_negative_int, metavar="NUMBER",
        help="Limit the depth of recursion.",
    )
    sub.add_argument(
        "-o", "--depth-optional", type=_non_negative_int, metavar="NUMBER",
        help="Limit recursion depth for optional dependencies.",
    )
    sub.add_argument(
        "-r", "--reverse", action="store_true",
        help="Show a tree of reverse dependencies.",
    )


def _add_pin(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser(
        "pin",
        aliases=["p"],
        help="Mark/unmark packages as explicitly installed.",
        description="By changing the install reason for a package to 'explicit', "
        "packages that were originally installed as dependencies can avoid "
        "being orphaned and removed indirectly.",
    )
    sub.set_defaults(operation="pin")
    sub.add_argument("packages", nargs="*", metavar="PACKAGE", help="Packages to mark.")
    sub.add_argument(
        "-r", "--remove", action="store_true",
        help="Mark the packages as dependencies instead, allowing indirect removal.",
    )


def _add_which(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser("which", aliases=["w"], help="Find packages that own files.")
    sub.set_defaults(operation="which")
    sub.add_argument("files", nargs="*", metavar="FILE", help="Files to search for.")
    sub.add_argument(
        "-s", "--sync", action="store_true",
        help="Search through the sync database(s).",
    )
    sub.add_argument(
        "-u", "--aur", action="store_true",
        help="Include packages from the AUR (implies --sync).",
    )
    sub.add_argument(
        "-x", "--regex", action="store_true",
        help="Use a regex for filtering (requires --sync).",
    )


def _add_doctor(subparsers: argparse._SubParsersAction) -> None:
    sub = subparsers.add_parser("doctor", help="Check that pacman and friends are available.")
    sub.set_defaults(operation="doctor")


def _build_parser() -> tuple[argparse.ArgumentParser, dict[str, argparse.ArgumentParser]]:
    """Construct the top-level parser and return it with its sub-parsers.

    The sub-parsers are keyed by canonical operation name so that
    post-parse conflict checks can report errors against the right
    usage line.
    """
    parser = argparse.ArgumentParser(
        prog="pong",
        description="A friendlier front end for pacman.",
    )
    _add_global_options(parser)
    parser.set_defaults(operation=None)

    subparsers = parser.add_subparsers(title="operations", metavar="OPERATION")
    for add in (
        _add_install,
        _add_remove,
        _add_upgrade,
        _add_clean,
        _add_search,
        _add_list,
        _add_view,
        _add_tree,
        _add_pin,
        _add_which,
        _add_doctor,
    ):
        add(subparsers)

    by_operation = {
        sub.get_default("operation"): sub
        for sub in subparsers.choices.values()
    }
    return parser, by_operation


# ---------------------------------------------------------------------------
# Conflicts argparse groups cannot express
# ---------------------------------------------------------------------------

def _check_conflicts(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Reject option combinations that mutually exclusive groups miss.

    Calls :meth:`argparse.ArgumentParser.error` (exit code 2) on the
    operation's own parser.
    """
    if args.operation == "view":
        pairs = (
            ("sync", "package_file"),
            ("sync", "changelog"),
            ("more", "files"),
            ("more", "changelog"),
            ("files", "changelog"),
        )
        for first, second in pairs:
            if getattr(args, first) and getattr(args, second):
                parser.error(
                    f"--{first.replace('_', '-')} cannot be used with "
                    f"--{second.replace('_', '-')}",
                )
    elif args.operation == "which":
        if args.regex and not (args.sync or args.aur):
            parser.error("--regex requires --sync")


# ---------------------------------------------------------------------------
# Namespace → domain values
# ---------------------------------------------------------------------------

def _install_intent(args: argparse.Namespace) -> Install:
    return Install(
        packages=tuple(args.packages),
        reinstall=args.reinstall,
        download=args.download,
        aur=args.aur,
    )


def _remove_intent(args: argparse.Namespace) -> Remove:
    return Remove(
        packages=tuple(args.packages),
        cascade=args.cascade,
        keep_orphans=args.keep_orphans,
        explicit=args.explicit,
        save=args.save,
        no_aur=args.no_aur,
    )


def _upgrade_intent(args: argparse.Namespace) -> Upgrade:
    return Upgrade(
        no_refresh=args.no_refresh,
        refresh=args.refresh,
        download=args.download,
        no_aur=args.no_aur,
    )


def _clean_intent(args: argparse.Namespace) -> Clean:
    return Clean(all=args.all, no_aur=args.no_aur)


def _search_intent(args: argparse.Namespace) -> Search:
    return Search(queries=tuple(args.queries), installed=args.installed, aur=args.aur)


def _list_intent(args: argparse.Namespace) -> List:
    return List(
        explicit=args.explicit,
        deps=args.deps,
        free=args.free,
        sync=args.sync,
        no_sync=args.no_sync,
        upgrades=args.upgrades,
    )


def _view_intent(args: argparse.Namespace) -> View:
    return View(
        packages=tuple(args.packages),
        sync=args.sync,
        package_file=args.package_file,
        more=args.more,
        files=args.files,
        changelog=args.changelog,
    )


def _tree_intent(args: argparse.Namespace) -> Tree:
    return Tree(
        package=args.package,
        ascii=args.ascii,
        depth=args.depth,
        depth_optional=args.depth_optional,
        reverse=args.reverse,
    )


def _pin_intent(args: argparse.Namespace) -> Pin:
    return Pin(packages=tuple(args.packages), remove=args.remove)


def _which_intent(args: argparse.Namespace) -> Which:
    return Which(files=tuple(args.files), sync=args.sync, aur=args.aur, regex=args.regex)


_INTENT_FACTORIES: dict[str, Callable[[argparse.Namespace], Intent]] = {
    "install": _install_intent,
    "remove": _remove_intent,
    "upgrade": _upgrade_intent,
    "clean": _clean_intent,
    "search": _search_intent,
    "list": _list_intent,
    "view": _view_intent,
    "tree": _tree_intent,
    "pin": _pin_intent,
    "which": _which_intent,
}


def _build_options(args: argparse.Namespace, settings: Settings) -> GlobalOptions:
    """Merge parsed global flags with environment defaults."""
    return GlobalOptions(
        debug=args.debug,
        simulate=args.simulate,
        quiet=args.quiet,
        yes=args.yes,
        color=args.color,
        config=args.config,
        dbpath=args.dbpath,
        gpgdir=args.gpgdir,
        aur_helper=args.aur_helper or settings.aur_helper,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_operation(args: argparse.Namespace, settings: Settings) -> int:
    """Generate the command for the parsed operation, then print or run it."""
    from pong.infra.executor import execute

    intent = _INTENT_FACTORIES[args.operation](args)
    options = _build_options(args, settings)
    logger.debug("Parsed %r with %r", intent, options)

    command = generate_command(intent, options, stdout_is_terminal)
    command = apply_delegation(command, options.aur_helper)

    if args.generate_command:
        print(command.render())
        return exit_codes.SUCCESS

    execute(command)
    # execute() only comes back when the process was not replaced.
    return exit_codes.GENERAL_ERROR


def _handle_doctor(settings: Settings, args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from pong.cli.doctor import run_doctor

    return run_doctor(aur_helper=args.aur_helper or settings.aur_helper)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the pong CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    settings = load_settings()
    parser, operation_parsers = _build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if args.operation is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.operation == "doctor":
        return _handle_doctor(settings, args)

    _check_conflicts(args, operation_parsers[args.operation])
    return _handle_operation(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except PongError as exc:
        console.error(str(exc), exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
