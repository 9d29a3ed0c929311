# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""git helpers: project file listing and per-file copyright years."""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import VcsError
from .template import YearRange

logger = logging.getLogger(__name__)


def _git(args: Sequence[str], cwd: Optional[Path] = None) -> str:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
        )
    except FileNotFoundError:
        raise VcsError("git is not installed or not on PATH") from None
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
        raise VcsError(f"git {args[0]} failed: {detail}. Make sure you're in a git repo.") from None
    return proc.stdout


def project_files(cwd: Optional[Path] = None) -> List[str]:
    """Tracked plus untracked-but-not-ignored files.

    Deleted files still listed by git and symlinks are dropped; a symlink's
    target is licensed when the real file comes up.
    """
    base = Path(cwd) if cwd else Path.cwd()
    listing = _git(["ls-files"], cwd) + _git(["ls-files", "--others", "--exclude-standard"], cwd)

    files: List[str] = []
    seen = set()
    for line in listing.splitlines():
        if not line or line in seen:
            continue
        seen.add(line)
        path = base / line
        if path.is_symlink() or not path.exists():
            continue
        files.append(str(path) if cwd else line)
    logger.debug("vcs.project_files", extra={"count": len(files)})
    return files


def file_years(path: str, *, now: Optional[datetime] = None) -> YearRange:
    """Year range spanned by the commits touching *path*.

    Files without history get the current year.
    """
    output = _git(["log", "--follow", "--format=%ad", "--date=format:%Y", "--", path])
    years = [int(token) for token in output.split() if token.isdigit()]
    if not years:
        logger.debug("vcs.no_history", extra={"path": path})
        return YearRange(end=(now or datetime.now()).year)
    return YearRange(start=min(years), end=max(years))


__all__ = ["file_years", "project_files"]
