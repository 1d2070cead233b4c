"""Tests for environment settings (config.py) and logging setup (logging_config.py)."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from pong.config import DEFAULT_LOG_LEVEL, Settings, load_settings
from pong.logging_config import setup_logging


class TestLoadSettings:
    def test_defaults(self) -> None:
        assert load_settings({}) == Settings(aur_helper=None, log_level=DEFAULT_LOG_LEVEL)

    def test_reads_variables(self) -> None:
        settings = load_settings({"PONG_AUR_HELPER": "paru", "PONG_LOG_LEVEL": "debug"})
        assert settings.aur_helper == "paru"
        assert settings.log_level == "DEBUG"

    def test_blank_values_fall_back(self) -> None:
        settings = load_settings({"PONG_AUR_HELPER": "  ", "PONG_LOG_LEVEL": ""})
        assert settings.aur_helper is None
        assert settings.log_level == "WARNING"

    def test_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PONG_AUR_HELPER", "yay")
        assert load_settings().aur_helper == "yay"


class TestSetupLogging:
    def test_level_applied(self) -> None:
        setup_logging("DEBUG")
        logger = logging.getLogger("pong")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup_does_not_stack_handlers(self) -> None:
        setup_logging("INFO")
        setup_logging("WARNING")
        assert len(logging.getLogger("pong").handlers) == 1

    def test_unknown_level_defaults_to_warning(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger("pong").level == logging.WARNING

    def test_verbose_flag_enables_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        from pong.cli.app import main

        main(["-v", "-g", "upgrade"])
        assert logging.getLogger("pong").level == logging.DEBUG
        assert "Generated" in capsys.readouterr().err

    def test_env_level_used_without_verbose(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from pong.cli.app import main

        monkeypatch.setenv("PONG_LOG_LEVEL", "ERROR")
        with patch("pong.cli.app.setup_logging") as mock_setup:
            main(["-g", "list"])
        mock_setup.assert_called_once_with("ERROR")
