"""Shared pytest fixtures and configuration for the pong test suite.

Guidelines
----------
* No test ever executes pacman, pactree, or sudo.
* ``os.execvp``, ``shutil.which`` and ``os.geteuid`` are mocked at the
  infra boundary.
* Core tests must be pure — terminal attachment is injected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own PONG_* variables out of every test."""
    monkeypatch.delenv("PONG_AUR_HELPER", raising=False)
    monkeypatch.delenv("PONG_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def _reset_pong_logger() -> Iterator[None]:
    """Undo :func:`pong.logging_config.setup_logging` after each test."""
    yield
    logger = logging.getLogger("pong")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
