# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Path classification: exclusions and first-match rule selection."""

from __future__ import annotations

import os
import re
from pathlib import PurePath
from typing import TYPE_CHECKING, Iterable, List, Optional, Pattern, Sequence, Union

from .errors import MalformedSelector

if TYPE_CHECKING:  # pragma: no cover
    from .config import CommenterRule, LicenseRule

ANY = "any"

PathLike = Union[str, "os.PathLike[str]"]


def compile_pattern(pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise MalformedSelector(pattern, str(exc)) from None


class Selector:
    """A compiled ``"any"`` / regex / regex-list file selector."""

    __slots__ = ("patterns", "_compiled")

    def __init__(self, patterns: Optional[Sequence[str]] = None) -> None:
        # ``None`` is the "any" sentinel
        self.patterns = None if patterns is None else tuple(patterns)
        self._compiled = None if patterns is None else [compile_pattern(p) for p in patterns]

    @classmethod
    def parse(cls, value: object) -> "Selector":
        if isinstance(value, Selector):
            return value
        if value == ANY:
            return cls(None)
        if isinstance(value, str):
            return cls([value])
        if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            return cls(list(value))
        raise ValueError(f"selector must be 'any', a regex or a list of regexes, not {value!r}")

    @property
    def is_any(self) -> bool:
        return self._compiled is None

    def matches(self, text: str) -> bool:
        if self._compiled is None:
            return True
        return any(rx.search(text) for rx in self._compiled)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selector):
            return NotImplemented
        return self.patterns == other.patterns

    def __hash__(self) -> int:
        return hash(self.patterns)

    def __repr__(self) -> str:
        if self.patterns is None:
            return "Selector('any')"
        return f"Selector({list(self.patterns)!r})"


def normalize_path(path: PathLike) -> str:
    return os.fspath(path).replace(os.sep, "/")


def file_extension(path: PathLike) -> str:
    """Return the text after the last dot of the file name, without the dot."""
    name = PurePath(normalize_path(path)).name
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def matches(path: PathLike, selector: Union[str, Selector]) -> bool:
    if isinstance(selector, Selector):
        return selector.matches(normalize_path(path))
    if selector == ANY:
        return True
    return compile_pattern(selector).search(normalize_path(path)) is not None


def is_excluded(path: PathLike, exclusions: Iterable[Pattern[str]]) -> bool:
    text = normalize_path(path)
    return any(rx.search(text) for rx in exclusions)


def select_license(path: PathLike, rules: Sequence["LicenseRule"]) -> Optional["LicenseRule"]:
    text = normalize_path(path)
    for rule in rules:
        if rule.files.matches(text):
            return rule
    return None


def select_commenter(path: PathLike, rules: Sequence["CommenterRule"]) -> Optional["CommenterRule"]:
    text = normalize_path(path)
    ext = file_extension(text)
    for rule in rules:
        if rule.extensions is not None and ext not in rule.extensions:
            continue
        if rule.files is not None and not rule.files.matches(text):
            continue
        return rule
    return None


def compile_exclusions(patterns: Iterable[str]) -> List[Pattern[str]]:
    return [compile_pattern(p) for p in patterns]


__all__ = [
    "ANY",
    "Selector",
    "compile_exclusions",
    "compile_pattern",
    "file_extension",
    "is_excluded",
    "matches",
    "normalize_path",
    "select_commenter",
    "select_license",
]
