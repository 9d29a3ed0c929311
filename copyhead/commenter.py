# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Wrap rendered header text in line or block comment syntax."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from .config import BlockStyle, CommenterRule, LineStyle


def wrap_lines(text: str, width: Optional[int]) -> List[str]:
    """Word-wrap every line of *text* to *width*, keeping existing breaks.

    Words longer than *width* are kept whole.
    """
    lines: List[str] = []
    for line in text.split("\n"):
        if width is None or not line.strip():
            lines.append(line.rstrip())
            continue
        lines.extend(
            textwrap.wrap(
                line,
                width=width,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return lines


def _prefixed(lines: List[str], char: str) -> List[str]:
    return [f"{char} {line}" if line else char for line in lines]


def _effective_width(columns: Optional[int], prefix: Optional[str]) -> Optional[int]:
    if columns is None or prefix is None:
        return columns
    prefix_width = len(prefix) + 1
    return columns - prefix_width if columns > prefix_width else columns


def comment(text: str, style: Union["LineStyle", "BlockStyle"], columns: Optional[int] = None) -> str:
    text = text.rstrip("\n")
    trailing = "\n" * style.trailing_lines

    if style.type == "line":
        if not text.strip():
            return ""
        lines = wrap_lines(text, _effective_width(columns, style.comment_char))
        return "\n".join(_prefixed(lines, style.comment_char)) + trailing

    lines = wrap_lines(text, _effective_width(columns, style.per_line_char)) if text.strip() else []
    if style.per_line_char is not None:
        lines = _prefixed(lines, style.per_line_char)
    body = "".join(f"{line}\n" for line in lines)
    return f"{style.start_block_char}{body}{style.end_block_char}{trailing}"


def format_header(text: str, rule: "CommenterRule") -> str:
    """Return *text* wrapped to ``rule.columns`` in the rule's comment style."""
    return comment(text, rule.commenter, rule.columns)


__all__ = ["comment", "format_header", "wrap_lines"]
