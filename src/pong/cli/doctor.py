"""``pong doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment has the programs pong drives.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No command generation happens
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from pong.cli import exit_codes
from pong.cli.console import console
from pong.infra.tool_detector import ToolStatus, detect_tool
from pong.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _pong_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the pong version row."""
    return "pong", __version__, "[green]OK[/green]"


def _tool_check(status: ToolStatus, *, required: bool) -> tuple[str, str, str]:
    """Return (label, value, status) for a PATH probe.

    A missing *required* tool is a failure; anything else only warns.
    """
    if status.found:
        return status.name, str(status.path), "[green]OK[/green]"
    if required:
        return status.name, "not found", "[red]FAIL[/red]"
    return status.name, "not found", "[yellow]WARN[/yellow]"


def _aur_helper_check(aur_helper: str | None) -> tuple[str, str, str] | None:
    """Return the AUR helper row, or ``None`` when no helper is configured."""
    if not aur_helper:
        return None
    return _tool_check(detect_tool(aur_helper), required=False)


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\npong doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(aur_helper: str | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    tools = [
        (detect_tool("pacman"), True),
        (detect_tool("pactree"), False),
        (detect_tool("sudo"), False),
    ]
    checks = [
        _pong_version_check(),
        _python_version_check(),
        *(_tool_check(status, required=required) for status, required in tools),
    ]
    helper_row = _aur_helper_check(aur_helper)
    if helper_row is not None:
        checks.append(helper_row)

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="pong doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    missing = [status for status, _ in tools if not status.found]
    for status in missing:
        if rich_available:
            console.print(f"[yellow]{status.name} is not installed.[/yellow]  {status.install_hint}")
        else:
            print(f"{status.name} is not installed.  {status.install_hint}", file=sys.stderr)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
