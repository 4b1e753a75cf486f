from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
tagging of our own handlers, and log file rotation.
"""

import logging
import time
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from nodecat.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from nodecat.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from nodecat.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the root logger as we found it."""
    root = logging.getLogger()
    level = root.level
    shutdown_logging()
    yield
    shutdown_logging()
    root.setLevel(level)


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency():
    """Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    count = len(_our_handlers())
    configure_logging(cfg)

    assert count == 1
    assert len(_our_handlers()) == count


def test_force_reconfigures():
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    assert logging.getLogger().level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_queue_listener_architecture():
    configure_logging(LoggingConfig(level="INFO", console=True))
    root = logging.getLogger()

    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
    assert isinstance(_our_handlers()[0], QueueHandler)


def test_foreign_handlers_survive_reconfiguration():
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig(level="INFO"))
        configure_logging(LoggingConfig(level="INFO"), force=True)
        assert foreign in root.handlers
    finally:
        root.removeHandler(foreign)


def test_unknown_level_defaults_to_warning():
    configure_logging(LoggingConfig(level="chatty"))
    assert logging.getLogger().level == logging.WARNING


def test_no_handlers_when_console_disabled():
    configure_logging(LoggingConfig(console=False, log_file=None))
    assert _our_handlers() == []


def test_log_rotation(tmp_path: Path):
    log_file = tmp_path / "logs" / "nodecat.log"
    configure_logging(LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    ))
    logger = logging.getLogger("nodecat.test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Listener thread writes asynchronously
    shutdown_logging()
    time.sleep(0.1)

    assert log_file.exists()
    assert (tmp_path / "logs" / "nodecat.log.1").exists()


def test_unwritable_log_file_is_skipped(tmp_path: Path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    configure_logging(LoggingConfig(console=False, log_file=str(blocker / "sub" / "x.log")))

    assert _our_handlers() == []
    assert "cannot open log file" in capsys.readouterr().err
