# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Destinations for licensed file content."""

from __future__ import annotations

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Optional, Protocol, TextIO

from .errors import FileIOError

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def emit(self, path: str, content: str) -> None:
        ...


def atomic_write(path: Path, content: str) -> None:
    """Write *content* to a temp file beside *path*, then swap it in."""
    tmp_name: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            encoding="utf-8",
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as tf:
            tmp_name = tf.name
            tf.write(content)
        if path.exists():
            shutil.copymode(path, tmp_name)
        Path(tmp_name).replace(path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise FileIOError(f"failed to write {path}: {exc}", path=str(path)) from None


class StdoutSink:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    def emit(self, path: str, content: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(content)
        if not content.endswith("\n"):
            stream.write("\n")
        stream.flush()


class InPlaceSink:
    def emit(self, path: str, content: str) -> None:
        atomic_write(Path(path), content)
        logger.debug("sink.written", extra={"path": path, "bytes": len(content)})


def make_sink(change_in_place: bool) -> Sink:
    return InPlaceSink() if change_in_place else StdoutSink()


__all__ = ["InPlaceSink", "Sink", "StdoutSink", "atomic_write", "make_sink"]
