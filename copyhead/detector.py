# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Locate generated headers in a file.

The head of the file (after an optional byte-order mark and shebang line, and
any leading blank lines) is compared line by line with the header:

* ``EXACT``: the lines equal the formatted header, ignoring trailing
  whitespace. Only this counts as already licensed.
* ``YEAR_ONLY``: the lines equal the header once every year or year range is
  normalized. The existing header is stale and gets rewritten in place.

Failing that, an exact copy of the header anywhere in the file still counts as
present, so a header placed below a coding line or swapped in by a
``replaces`` pattern is not added twice.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

BOM = "\ufeff"

_YEARS = re.compile(r"\b\d{4}(?:\s*[,-]\s*\d{4})?\b")


class MatchKind(str, Enum):
    EXACT = "exact"
    YEAR_ONLY = "year_only"
    NONE = "none"


@dataclass(frozen=True)
class HeaderMatch:
    kind: MatchKind
    # character span of the matched header lines, line terminator of the
    # last line excluded
    start: int = 0
    end: int = 0

    @property
    def found(self) -> bool:
        return self.kind is not MatchKind.NONE


def split_preamble(contents: str) -> Tuple[str, str]:
    """Split off a leading byte-order mark and ``#!`` line."""
    idx = 1 if contents.startswith(BOM) else 0
    if contents.startswith("#!", idx):
        newline = contents.find("\n", idx)
        idx = len(contents) if newline == -1 else newline + 1
    return contents[:idx], contents[idx:]


def _lines_with_ends(text: str) -> List[str]:
    lines: List[str] = []
    start = 0
    while start < len(text):
        newline = text.find("\n", start)
        if newline == -1:
            lines.append(text[start:])
            break
        lines.append(text[start : newline + 1])
        start = newline + 1
    return lines


def header_lines(header: str) -> List[str]:
    stripped = header.rstrip("\n")
    if not stripped.strip():
        return []
    return [line.rstrip() for line in stripped.split("\n")]


def normalize_years(line: str) -> str:
    return _YEARS.sub("YYYY", line)


def _span(lines: List[str], idx: int, count: int, pos: int) -> Tuple[int, int]:
    window = lines[idx : idx + count]
    end = pos + sum(len(line) for line in window[:-1]) + len(window[-1].rstrip("\r\n"))
    return pos, end


def _find_anywhere(lines: List[str], expected: List[str], pos: int) -> HeaderMatch:
    stripped = [line.rstrip() for line in lines]
    count = len(expected)
    for idx in range(len(lines) - count + 1):
        if stripped[idx : idx + count] == expected:
            start, end = _span(lines, idx, count, pos)
            return HeaderMatch(MatchKind.EXACT, start, end)
        pos += len(lines[idx])
    return HeaderMatch(MatchKind.NONE)


def find_header(contents: str, header: str) -> HeaderMatch:
    """Match *header* at the head of the file, else anywhere in it.

    Only the head is checked for a stale (year-only) header; further down
    the file an exact match is required.
    """
    preamble, body = split_preamble(contents)
    expected = header_lines(header)
    pos = len(preamble)
    if not expected:
        return HeaderMatch(MatchKind.EXACT, pos, pos)

    lines = _lines_with_ends(body)
    idx = 0
    head = pos
    while idx < len(lines) and not lines[idx].strip():
        head += len(lines[idx])
        idx += 1

    window = lines[idx : idx + len(expected)]
    if len(window) == len(expected):
        existing = [line.rstrip() for line in window]
        start, end = _span(lines, idx, len(expected), head)
        if existing == expected:
            return HeaderMatch(MatchKind.EXACT, start, end)
        if [normalize_years(line) for line in existing] == [
            normalize_years(line) for line in expected
        ]:
            return HeaderMatch(MatchKind.YEAR_ONLY, start, end)
    match = _find_anywhere(lines, expected, pos)
    if match.found:
        return match
    text = header.rstrip("\r\n")
    found = body.find(text)
    if found != -1:
        return HeaderMatch(MatchKind.EXACT, pos + found, pos + found + len(text))
    return match


def already_licensed(contents: str, header: str) -> bool:
    return find_header(contents, header).kind is MatchKind.EXACT


def replace_header(contents: str, match: HeaderMatch, header: str) -> str:
    """Swap the matched header lines for *header*, keeping what surrounds them."""
    return contents[: match.start] + header.rstrip("\n") + contents[match.end :]


__all__ = [
    "BOM",
    "HeaderMatch",
    "MatchKind",
    "already_licensed",
    "find_header",
    "header_lines",
    "normalize_years",
    "replace_header",
    "split_preamble",
]
