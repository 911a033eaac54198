"""Tests for logging setup."""

import logging
import sys
from pathlib import Path

import pytest
from rich.logging import RichHandler

from dotin.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch):
    """Put the root logger and excepthook back after each test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_setup_logging_console_only() -> None:
    """Test default logging setup."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], RichHandler)


def test_setup_logging_with_file(tmp_path: Path) -> None:
    """Test that the log file receives debug messages."""
    log_file = tmp_path / "logs" / "dotin.log"
    setup_logging(log_file=str(log_file))

    logging.getLogger("dotin.test").debug("Planned %d moves", 3)
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "Planned 3 moves" in log_file.read_text()
    assert sys.excepthook is not sys.__excepthook__
