"""Command accumulator and the immutable command value it produces.

:class:`CommandBuilder` is an ordered, append-only list of tokens plus
two side-channel booleans.  Generation rules drive it token by token;
composition order is entirely the caller's responsibility — nothing here
sorts, deduplicates, or reorders.

:class:`GeneratedCommand` is the frozen result handed to the delegation
transform and, finally, to the CLI layer.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath

from pong.exceptions import EmptyCommandError, UnrepresentablePathError


@dataclass(frozen=True, slots=True)
class GeneratedCommand:
    """A ready-to-run argument vector and how it must be run."""

    argv: tuple[str, ...]
    """Program name first, then flags and positional arguments."""

    requires_root: bool
    """Whether the command mutates system package state."""

    delegate: bool
    """Whether the generating rule asked for AUR-helper delegation."""

    delegated: bool = False
    """Whether the program name was actually rewritten to the helper."""

    @property
    def program(self) -> str:
        return self.argv[0]

    def render(self) -> str:
        """Return the command as a single space-joined line."""
        return " ".join(self.argv)


def path_text(path: PurePath | str) -> str:
    """Convert *path* to the UTF-8 text form pacman expects.

    Raises
    ------
    UnrepresentablePathError
        If the path holds bytes that do not decode as UTF-8 (they show
        up as lone surrogates after ``surrogateescape`` decoding).
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise UnrepresentablePathError(
            f"Path is not valid UTF-8 and cannot be passed on: {text!r}",
            hint="Rename the file or directory, or pass a UTF-8 path.",
        ) from exc
    return text


class CommandBuilder:
    """Ordered token accumulator for a single command.

    Usage::

        cli = CommandBuilder("pacman")
        cli.arg("-S")
        cli.flag("q", options.quiet)
        cli.arg_if("--needed", not intent.reinstall)
        cli.extend(intent.packages)
        command = cli.build()
    """

    def __init__(self, program: str) -> None:
        # Public working state: rules may trim it, as the tree rule does
        # with its empty flag group.
        self.tokens: list[str] = [program]
        self.root: bool = False
        self.delegate: bool = False

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def arg(self, token: str) -> None:
        """Append *token* unconditionally."""
        self.tokens.append(token)

    def arg_if(self, token: str, condition: bool) -> None:
        """Append *token* only when *condition* holds."""
        if condition:
            self.tokens.append(token)

    def flag(self, char: str, condition: bool) -> None:
        """Append *char* to the last token when *condition* holds.

        The last token is expected to be a combined-flag token such as
        ``-S``.  ``tokens`` can be trimmed by a rule, so a builder that was
        emptied that way is rejected instead of failing with ``IndexError``.
        """
        if not self.tokens:
            raise EmptyCommandError(
                f"Cannot append flag {char!r}: the command has no tokens.",
            )
        if condition:
            self.tokens[-1] += char

    def option(self, name: str, value: object | None) -> None:
        """Append *name* and *value* as two tokens when *value* is set."""
        if value is None:
            return
        self.tokens.append(name)
        if isinstance(value, PurePath):
            self.tokens.append(path_text(value))
        else:
            self.tokens.append(str(value))

    def extend(self, tokens: Iterable[str]) -> None:
        """Append every token of *tokens*, preserving their order."""
        self.tokens.extend(tokens)

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------

    def build(self) -> GeneratedCommand:
        """Freeze the accumulated state into a :class:`GeneratedCommand`."""
        return GeneratedCommand(
            argv=tuple(self.tokens),
            requires_root=self.root,
            delegate=self.delegate,
        )
