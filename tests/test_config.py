from __future__ import annotations

from pathlib import Path

import pytest

from copyhead.config import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    BlockStyle,
    LineStyle,
    find_config_file,
    load_config,
    parse_config,
)
from copyhead.defaults import DEFAULT_CONFIG
from copyhead.errors import ConfigError, ConfigNotFound


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


def test_default_config_parses():
    config = parse_config(DEFAULT_CONFIG)
    assert config.change_in_place is False
    assert config.licenses == ()
    assert any(rx.search("README.md") for rx in config.excludes)
    block = config.comments[1].commenter
    assert isinstance(block, BlockStyle)
    assert block.start_block_char == "/*\n"
    assert config.comments[-1].extensions is None
    assert isinstance(config.comments[-1].commenter, LineStyle)


def test_extensions_strip_leading_dots():
    config = parse_config(
        "comments:\n"
        "  - extensions: ['.py', pyi]\n"
        "    commenter: {type: line, comment_char: '#'}\n"
    )
    assert config.comments[0].extensions == frozenset({"py", "pyi"})


def test_bad_exclude_regex_is_rejected():
    with pytest.raises(ConfigError) as excinfo:
        parse_config("excludes: ['(broken']\n", source="cfg.yml")
    assert "cfg.yml" in excinfo.value.message


def test_bad_selector_regex_is_rejected():
    with pytest.raises(ConfigError):
        parse_config("licenses:\n  - files: '[a-'\n    ident: MIT\n    template: x\n")


def test_license_without_template_is_rejected():
    with pytest.raises(ConfigError) as excinfo:
        parse_config("licenses:\n  - files: any\n    ident: MIT\n")
    assert "auto_template" in excinfo.value.message


def test_unknown_commenter_type_is_rejected():
    with pytest.raises(ConfigError):
        parse_config("comments:\n  - extension: py\n    commenter: {type: wavy}\n")


def test_invalid_yaml_is_a_config_error():
    with pytest.raises(ConfigError):
        parse_config("licenses: [unclosed\n")


def test_scalar_document_is_rejected():
    with pytest.raises(ConfigError):
        parse_config("just a string\n")


def test_with_exclude_and_in_place_return_copies():
    config = parse_config("excludes: ['a']\n")
    updated = config.with_exclude("b").with_change_in_place()
    assert [rx.pattern for rx in updated.excludes] == ["b", "a"]
    assert updated.change_in_place
    assert not config.change_in_place


def test_find_config_walks_up(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{}\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == (tmp_path / CONFIG_FILE_NAME).resolve()


def test_env_var_overrides_discovery(tmp_path, monkeypatch):
    custom = tmp_path / "custom.yml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))
    assert find_config_file(tmp_path) == custom


def test_global_config_is_last_resort(tmp_path):
    global_file = tmp_path / "xdg" / "copyhead" / "config.yml"
    global_file.parent.mkdir(parents=True)
    global_file.write_text("change_in_place: true\n", encoding="utf-8")
    start = tmp_path / "project"
    start.mkdir()
    found = find_config_file(start)
    assert found == global_file
    assert load_config(found).change_in_place


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigNotFound):
        load_config(tmp_path / "nope.yml")


def test_load_config_reads_bom_prefixed_file(tmp_path):
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text("\ufeffchange_in_place: true\n", encoding="utf-8")
    assert load_config(path).change_in_place
