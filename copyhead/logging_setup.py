# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "copyhead"
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _console_level(verbosity: int) -> int:
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbosity: int = 0, log_path: Optional[Path] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # the console handler follows the current sys.stderr, so it is rebuilt per call
    for handler in list(logger.handlers):
        if getattr(handler, "_copyhead_console", False):
            logger.removeHandler(handler)
    console = logging.StreamHandler(sys.stderr)
    console._copyhead_console = True  # type: ignore[attr-defined]
    console.setLevel(_console_level(verbosity))
    console.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(console)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        target = os.path.abspath(str(log_path))
        if not any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in logger.handlers
        ):
            handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "setup_logging"]
