from __future__ import annotations

from datetime import datetime

import pytest

from copyhead.config import LicenseRule
from copyhead.errors import RenderError
from copyhead.template import YearRange, format_years, render, token_names, unwrap

NOW = datetime(2024, 6, 1)

AUTHORS = [
    {"name": "Mathew Robinson", "email": "chasinglogic@gmail.com"},
    {"name": "Jane Doe"},
]


def _rule(**overrides) -> LicenseRule:
    data = {"files": "any", "ident": "MIT", "authors": AUTHORS, "template": "unused"}
    data.update(overrides)
    return LicenseRule.model_validate(data)


def test_authors_render_with_optional_email():
    assert (
        render("[name of author]", _rule(), NOW)
        == "Mathew Robinson <chasinglogic@gmail.com>, Jane Doe"
    )


def test_year_range_from_start_year():
    assert render("[year]", _rule(start_year=2019), NOW) == "2019, 2024"


def test_start_year_equal_to_current_year_collapses():
    assert render("[year]", _rule(start_year=2024), NOW) == "2024"


def test_year_alias_pins_end_year():
    rule = _rule(start_year=2010, year=2015)
    assert rule.end_year == 2015
    assert render("[year]", rule, NOW) == "2010, 2015"


def test_end_before_start_is_a_render_error():
    with pytest.raises(RenderError):
        format_years(2025, 2020)


def test_explicit_years_override_rule_years():
    rule = _rule(start_year=2000)
    assert render("[year]", rule, NOW, years=YearRange(start=2021, end=2023)) == "2021, 2023"


def test_ident_and_unknown_tokens():
    assert render("[ident] and [other]", _rule(), NOW) == "MIT and [other]"


def test_unwrap_joins_wrapped_lines_and_keeps_paragraphs():
    text = "Licensed under the\nApache License.\n\nSee the\nLICENSE file.\n"
    assert unwrap(text) == "Licensed under the Apache License.\n\nSee the LICENSE file."


def test_unwrap_can_be_disabled():
    rule = _rule(unwrap_text=False)
    assert render("a\nb", rule, NOW) == "a\nb"
    assert render("a\nb", _rule(), NOW) == "a b"


def test_spdx_token_sets():
    apache = "Copyright [yyyy] [name of copyright owner]"
    assert token_names(apache, spdx=True)[:2] == ("[yyyy]", "[name of copyright owner]")
    assert token_names("Copyright <year> <owner>", spdx=True)[:2] == ("<year>", "<owner>")
    assert token_names("Copyright <year> <name of author>", spdx=True)[1] == "<name of author>"


def test_render_spdx_template():
    template = "Copyright (C) <year> <copyright holders>"
    assert (
        render(template, _rule(), NOW, spdx=True)
        == "Copyright (C) 2024 Mathew Robinson <chasinglogic@gmail.com>, Jane Doe"
    )
