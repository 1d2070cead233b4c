"""Tests for the AUR-helper delegation transform (core/delegation.py)."""

from __future__ import annotations

import pytest

from pong.core.builder import GeneratedCommand
from pong.core.delegation import apply_delegation
from pong.core.models import GlobalOptions, Install, Upgrade
from pong.core.rules import generate_command


def _command(*, delegate: bool) -> GeneratedCommand:
    return GeneratedCommand(
        argv=("pacman", "--color", "auto", "-Syu"),
        requires_root=True,
        delegate=delegate,
    )


class TestApplyDelegation:
    def test_rewrites_program_only(self) -> None:
        result = apply_delegation(_command(delegate=True), "paru")
        assert result.argv == ("paru", "--color", "auto", "-Syu")
        assert result.delegated is True
        assert result.requires_root is True

    def test_not_requested_keeps_command(self) -> None:
        command = _command(delegate=False)
        assert apply_delegation(command, "paru") is command

    @pytest.mark.parametrize("helper", [None, ""])
    def test_missing_helper_is_ignored(self, helper: str | None) -> None:
        command = _command(delegate=True)
        result = apply_delegation(command, helper)
        assert result is command
        assert result.program == "pacman"
        assert result.delegated is False

    def test_input_is_not_mutated(self) -> None:
        command = _command(delegate=True)
        apply_delegation(command, "yay")
        assert command.program == "pacman"


class TestWithRules:
    def test_upgrade_goes_through_helper_by_default(self) -> None:
        command = generate_command(Upgrade(), GlobalOptions(), lambda: False)
        assert apply_delegation(command, "yay").argv == ("yay", "--color", "auto", "-Syu")

    def test_install_stays_on_pacman_without_aur(self) -> None:
        command = generate_command(Install(packages=("vim",)), GlobalOptions(), lambda: False)
        assert apply_delegation(command, "yay").program == "pacman"
