# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Exception types raised by the header pipeline and its collaborators."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CopyheadError(Exception):
    """Base class for every error copyhead reports to the user."""

    code = "error"

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "path": self.path}


class ConfigSelectionMiss(CopyheadError):
    """No license or commenter rule applies to a file."""

    code = "selection_miss"

    def __init__(self, path: str, kind: str) -> None:
        super().__init__(f"no {kind} rule matched", path=path)
        self.kind = kind


class MalformedSelector(CopyheadError, ValueError):
    code = "malformed_selector"

    def __init__(self, pattern: str, detail: str) -> None:
        super().__init__(f"invalid regex {pattern!r}: {detail}")
        self.pattern = pattern


class FileIOError(CopyheadError):
    code = "io_error"


class RenderError(CopyheadError):
    code = "render_error"


class TemplateFetchError(CopyheadError):
    code = "template_fetch_error"


class ConfigError(CopyheadError):
    code = "config_error"


class ConfigNotFound(ConfigError):
    code = "config_not_found"


class VcsError(CopyheadError):
    code = "vcs_error"


__all__ = [
    "ConfigError",
    "ConfigNotFound",
    "ConfigSelectionMiss",
    "CopyheadError",
    "FileIOError",
    "MalformedSelector",
    "RenderError",
    "TemplateFetchError",
    "VcsError",
]
