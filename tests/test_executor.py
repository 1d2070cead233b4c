"""Tests for privilege escalation and process replacement (infra/executor.py).

``os.execvp``, ``os.geteuid`` and ``shutil.which`` are always mocked —
nothing is ever executed.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from pong.core.builder import GeneratedCommand
from pong.exceptions import ExecutableNotFoundError, ExecutionError, PrivilegeEscalationError
from pong.infra import executor


def _command(*, root: bool, delegated: bool = False, program: str = "pacman") -> GeneratedCommand:
    return GeneratedCommand(
        argv=(program, "--color", "auto", "-Syu"),
        requires_root=root,
        delegate=delegated,
        delegated=delegated,
    )


def _which(available: set[str]):
    return lambda name: f"/usr/bin/{name}" if name in available else None


# ---------------------------------------------------------------------------
# Escalation decision
# ---------------------------------------------------------------------------

class TestNeedsEscalation:
    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_root_command_as_user(self, _mock_uid: MagicMock) -> None:
        assert executor.needs_escalation(_command(root=True)) is True

    @patch("pong.infra.executor.os.geteuid", return_value=0)
    def test_already_root(self, _mock_uid: MagicMock) -> None:
        assert executor.needs_escalation(_command(root=True)) is False

    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_read_only_command(self, _mock_uid: MagicMock) -> None:
        assert executor.needs_escalation(_command(root=False)) is False

    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_delegated_command_escalates_itself(self, _mock_uid: MagicMock) -> None:
        command = _command(root=True, delegated=True, program="paru")
        assert executor.needs_escalation(command) is False


# ---------------------------------------------------------------------------
# Invocation construction
# ---------------------------------------------------------------------------

class TestBuildInvocation:
    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_prefixes_sudo(self, _mock_uid: MagicMock) -> None:
        with patch("pong.infra.tool_detector.shutil.which", side_effect=_which({"sudo"})):
            argv = executor.build_invocation(_command(root=True))
        assert argv == ["sudo", "pacman", "--color", "auto", "-Syu"]

    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_missing_sudo(self, _mock_uid: MagicMock) -> None:
        with patch("pong.infra.tool_detector.shutil.which", side_effect=_which(set())):
            with pytest.raises(PrivilegeEscalationError, match="root privileges"):
                executor.build_invocation(_command(root=True))

    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_no_prefix_for_read_only(self, _mock_uid: MagicMock) -> None:
        argv = executor.build_invocation(_command(root=False))
        assert argv == ["pacman", "--color", "auto", "-Syu"]


# ---------------------------------------------------------------------------
# execute()
# ---------------------------------------------------------------------------

class TestExecute:
    @patch("pong.infra.executor.os.execvp")
    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_execs_through_sudo(self, _mock_uid: MagicMock, mock_exec: MagicMock) -> None:
        with patch(
            "pong.infra.tool_detector.shutil.which",
            side_effect=_which({"sudo", "pacman"}),
        ):
            executor.execute(_command(root=True))
        mock_exec.assert_called_once_with(
            "sudo", ["sudo", "pacman", "--color", "auto", "-Syu"],
        )

    @patch("pong.infra.executor.os.execvp")
    @patch("pong.infra.executor.os.geteuid", return_value=1000)
    def test_execs_helper_directly(self, _mock_uid: MagicMock, mock_exec: MagicMock) -> None:
        command = _command(root=True, delegated=True, program="paru")
        with patch("pong.infra.tool_detector.shutil.which", side_effect=_which({"paru"})):
            executor.execute(command)
        mock_exec.assert_called_once_with("paru", list(command.argv))

    @patch("pong.infra.executor.os.execvp")
    def test_missing_program(self, mock_exec: MagicMock) -> None:
        with patch("pong.infra.tool_detector.shutil.which", side_effect=_which(set())):
            with pytest.raises(ExecutableNotFoundError, match="pacman"):
                executor.execute(_command(root=False))
        mock_exec.assert_not_called()

    @patch("pong.infra.executor.os.execvp", side_effect=PermissionError(13, "Permission denied"))
    def test_exec_failure_is_wrapped(self, _mock_exec: MagicMock) -> None:
        with patch("pong.infra.tool_detector.shutil.which", side_effect=_which({"pacman"})):
            with pytest.raises(ExecutionError, match="Permission denied"):
                executor.execute(_command(root=False))
