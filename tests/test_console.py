"""Tests for the stderr console helpers (cli/console.py)."""

from __future__ import annotations

import sys

import pytest

from pong.cli.console import console


class TestError:
    def test_message_and_hint_lines(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error("pactree is not installed.", "Install pacman-contrib.")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "Error: pactree is not installed.",
            "Hint: Install pacman-contrib.",
        ]

    def test_no_hint_line_without_hint(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error("failed to gain root privileges.")
        assert capsys.readouterr().err.splitlines() == ["Error: failed to gain root privileges."]

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console.error("Path is not valid UTF-8: '/tmp/[bold]x'")
        assert "'/tmp/[bold]x'" in capsys.readouterr().err

    def test_plain_fallback_without_rich(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setitem(sys.modules, "rich", None)
        monkeypatch.setitem(sys.modules, "rich.console", None)

        console.error("--refresh and --no-refresh cannot be used together.", "Pick one.")

        err = capsys.readouterr().err
        assert err == (
            "Error: --refresh and --no-refresh cannot be used together.\n"
            "Hint: Pick one.\n"
        )
        assert "[bold red]" not in err
