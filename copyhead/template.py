# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Copyright template rendering.

Rendering is pure: the current date, per-file year ranges and fetched SPDX
templates are all passed in by the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable, Optional, Tuple, Union

from .errors import RenderError

if TYPE_CHECKING:  # pragma: no cover
    from .config import Author, LicenseRule

YEAR_TOKEN = "[year]"
AUTHOR_TOKEN = "[name of author]"
IDENT_TOKEN = "[ident]"

_COLUMN_WRAP = re.compile(r"(?P<char>.)\n")


@dataclass(frozen=True)
class YearRange:
    end: int
    start: Optional[int] = None


def format_authors(authors: Iterable["Author"]) -> str:
    return ", ".join(str(author) for author in authors)


def format_years(start: Optional[int], end: int) -> str:
    if start is None or start == end:
        return str(end)
    if start > end:
        raise RenderError(f"year range ends before it starts: {start} > {end}")
    return f"{start}, {end}"


def unwrap(text: str) -> str:
    """Join column-wrapped lines back into paragraphs.

    A newline directly after a character becomes a space; blank lines stay as
    paragraph breaks.
    """
    text = text.rstrip("\n")
    return _COLUMN_WRAP.sub(r"\g<char> ", text).replace(" \n", "\n\n")


def token_names(template: str, spdx: bool = False) -> Tuple[str, str, str]:
    """Return the (year, author, ident) tokens used by *template*."""
    if not spdx:
        return YEAR_TOKEN, AUTHOR_TOKEN, IDENT_TOKEN
    # Apache-2.0 ships its own bracketed placeholders
    if "[name of copyright owner]" in template:
        return "[yyyy]", "[name of copyright owner]", IDENT_TOKEN
    for author_token in ("<copyright holders>", "<owner>"):
        if author_token in template:
            return "<year>", author_token, "<ident>"
    return "<year>", "<name of author>", "<ident>"


def resolve_years(
    rule: "LicenseRule",
    now: Union[date, datetime, None] = None,
    years: Optional[YearRange] = None,
) -> Tuple[Optional[int], int]:
    if years is not None:
        return years.start, years.end
    end = rule.end_year
    if end is None:
        end = (now or datetime.now()).year
    return rule.start_year, end


def render(
    template: str,
    rule: "LicenseRule",
    now: Union[date, datetime, None] = None,
    *,
    years: Optional[YearRange] = None,
    spdx: bool = False,
) -> str:
    """Expand *template* for *rule*. Unknown tokens are left untouched."""
    year_token, author_token, ident_token = token_names(template, spdx)
    text = unwrap(template) if rule.unwrap_text else template
    start, end = resolve_years(rule, now, years)
    return (
        text.replace(year_token, format_years(start, end))
        .replace(author_token, format_authors(rule.authors))
        .replace(ident_token, rule.ident)
    )


__all__ = [
    "AUTHOR_TOKEN",
    "IDENT_TOKEN",
    "YEAR_TOKEN",
    "YearRange",
    "format_authors",
    "format_years",
    "render",
    "resolve_years",
    "token_names",
    "unwrap",
]
