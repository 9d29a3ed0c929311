# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""License header stamping for source trees."""

from importlib.metadata import version, PackageNotFoundError

__all__ = ["get_version"]


def get_version() -> str:
    """Return the package version if installed, otherwise ``"0.1.0"``."""
    try:
        return version("copyhead")
    except PackageNotFoundError:  # pragma: no cover - fallback for source checkouts
        return "0.1.0"
