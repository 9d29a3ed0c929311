from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from copyhead.logging_setup import LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _reset_handlers():
    logger = logging.getLogger(LOGGER_NAME)
    saved = list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        if handler not in saved:
            handler.close()
            logger.removeHandler(handler)


def test_verbosity_sets_console_level():
    for verbosity, level in ((0, logging.WARNING), (1, logging.INFO), (3, logging.DEBUG)):
        logger = setup_logging(verbosity)
        consoles = [h for h in logger.handlers if getattr(h, "_copyhead_console", False)]
        assert len(consoles) == 1
        assert consoles[0].level == level


def test_log_file_handler_is_added_once(tmp_path):
    log_path = tmp_path / "logs" / "copyhead.log"
    setup_logging(0, log_path)
    logger = setup_logging(1, log_path)
    files = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(files) == 1
    assert files[0].maxBytes == 5_000_000
    assert files[0].backupCount == 3

    logging.getLogger("copyhead.engine").info("engine.licensed")
    files[0].flush()
    assert "engine.licensed" in log_path.read_text(encoding="utf-8")
