"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so the hot path (generate and exec pacman) never pays for
importing Rich, and keeps working when Rich is not installed.

Everything rendered here goes to **stderr**; stdout is reserved for the
generated command in ``--generate-command`` mode and for the output of
the program pong hands over to.
"""

from __future__ import annotations

import sys
from typing import Any

from pong.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, highlight=False, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with plain stderr fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def error(self, message: str, hint: str | None = None) -> None:
		"""Report a failure as one ``Error:`` line and an optional ``Hint:`` line.

		The message is printed verbatim: package names and paths may
		contain square brackets that Rich would otherwise read as markup.
		"""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(f"Error: {message}", file=sys.stderr)
			if hint:
				print(f"Hint: {hint}", file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
		if hint:
			rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


console = _ConsoleProxy()
