# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Per-file outcomes and the batch summary built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import ConfigSelectionMiss, CopyheadError


class FileStatus(str, Enum):
    PENDING = "pending"
    EXCLUDED = "excluded"
    UNMATCHED = "unmatched"
    ALREADY_LICENSED = "already_licensed"
    LICENSED = "licensed"
    FAILED = "failed"


@dataclass
class FileResult:
    """Terminal state of one file's pass through the pipeline."""

    path: str
    status: FileStatus = FileStatus.PENDING
    content: Optional[str] = None
    reason: Optional[str] = None
    # inserted / updated / replaced, set for licensed files
    action: Optional[str] = None
    error: Optional[CopyheadError] = None

    def fail(self, error: CopyheadError) -> "FileResult":
        self.status = FileStatus.FAILED
        self.error = error
        self.reason = error.message
        self.content = None
        return self

    def status_line(self, *, check_mode: bool = False) -> str:
        label = self.status.value
        if check_mode and self.status is FileStatus.LICENSED:
            label = "needs_license"
        line = f"[{label}] {self.path}"
        detail = self.reason or self.action
        if detail:
            line += f": {detail}"
        return line

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "status": self.status.value,
            "action": self.action,
            "reason": self.reason,
        }


@dataclass
class BatchReport:
    check_mode: bool = False
    results: List[FileResult] = field(default_factory=list)
    interrupted: bool = False

    def by_status(self, status: FileStatus) -> List[FileResult]:
        return [result for result in self.results if result.status is status]

    @property
    def licensed(self) -> List[FileResult]:
        return self.by_status(FileStatus.LICENSED)

    @property
    def already_licensed(self) -> List[FileResult]:
        return self.by_status(FileStatus.ALREADY_LICENSED)

    @property
    def excluded(self) -> List[FileResult]:
        return self.by_status(FileStatus.EXCLUDED)

    @property
    def unmatched(self) -> List[FileResult]:
        return self.by_status(FileStatus.UNMATCHED)

    @property
    def failed(self) -> List[FileResult]:
        return self.by_status(FileStatus.FAILED)

    @property
    def needing_commenter(self) -> List[FileResult]:
        return [
            result
            for result in self.unmatched
            if isinstance(result.error, ConfigSelectionMiss) and result.error.kind == "commenter"
        ]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def exit_code(self) -> int:
        if self.interrupted:
            return 130
        if self.failed:
            return 1
        if self.check_mode and (self.licensed or self.unmatched):
            return 1
        return 0

    def status_lines(self) -> List[str]:
        return [result.status_line(check_mode=self.check_mode) for result in self.results]

    def summary_line(self) -> str:
        licensed_label = "Needs license" if self.check_mode else "Licensed"
        line = (
            f"{licensed_label}: {len(self.licensed)} • "
            f"Already licensed: {len(self.already_licensed)} • "
            f"Excluded: {len(self.excluded)} • "
            f"Unmatched: {len(self.unmatched)} • "
            f"Failed: {len(self.failed)}"
        )
        if self.interrupted:
            line += " • interrupted"
        return line

    def summary(self) -> str:
        output = [self.summary_line()]
        if self.failed:
            output.append("\nErrors:")
            output.extend(f"  - {result.path}: {result.reason}" for result in self.failed)
        if self.unmatched:
            output.append("\nNot licensed with the given config:")
            output.extend(f"  - {result.path}: {result.reason}" for result in self.unmatched)
        return "\n".join(output)


__all__ = ["BatchReport", "FileResult", "FileStatus"]
