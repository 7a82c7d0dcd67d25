"""Tests for modmap.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from modmap.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "modmap"
    assert get_logger("reconciler").name == "modmap.reconciler"


def test_quiet_raises_level_and_verbose_wins() -> None:
    assert configure_logging().level == logging.INFO
    assert configure_logging(quiet=True).level == logging.WARNING
    assert configure_logging(verbose=True, quiet=True).level == logging.DEBUG


def test_reconfiguring_replaces_handlers(tmp_path: Path) -> None:
    configure_logging(log_file=tmp_path / "first.log")
    logger = configure_logging()

    assert len(logger.handlers) == 1
    assert not any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
