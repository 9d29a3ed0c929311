# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Config schema, discovery and loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Any, FrozenSet, Literal, Mapping, Optional, Pattern, Tuple, Union

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import ConfigError, ConfigNotFound
from .matcher import ANY, Selector, compile_pattern

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".copyhead.yml"
CONFIG_ENV_VAR = "COPYHEAD_CONFIG"


class Author(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: Optional[str] = None

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name


def _compile_all(value: Any) -> Any:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(compile_pattern(p) if isinstance(p, str) else p for p in value)


class LicenseRule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    files: Selector
    ident: str
    authors: Tuple[Author, ...] = ()
    template: Optional[str] = None
    auto_template: bool = False
    start_year: Optional[int] = None
    end_year: Optional[int] = Field(default=None, validation_alias=AliasChoices("end_year", "year"))
    use_dynamic_years: bool = Field(
        default=False,
        validation_alias=AliasChoices("use_dynamic_years", "use_dynamic_year_ranges"),
    )
    replaces: Tuple[Pattern[str], ...] = ()
    unwrap_text: bool = True

    @field_validator("files", mode="before")
    @classmethod
    def _parse_files(cls, value: Any) -> Selector:
        return Selector.parse(value)

    @field_validator("replaces", mode="before")
    @classmethod
    def _compile_replaces(cls, value: Any) -> Any:
        return _compile_all(value)

    @model_validator(mode="after")
    def _require_template(self) -> "LicenseRule":
        if self.template is None and not self.auto_template:
            raise ValueError(
                f"license {self.ident}: no template provided and auto_template is not enabled"
            )
        return self


class LineStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["line"] = "line"
    comment_char: str
    trailing_lines: int = Field(default=0, ge=0)


class BlockStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["block"] = "block"
    start_block_char: str
    end_block_char: str
    per_line_char: Optional[str] = None
    trailing_lines: int = Field(default=0, ge=0)


CommentStyle = Annotated[Union[LineStyle, BlockStyle], Field(discriminator="type")]


class CommenterRule(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    # None matches every extension
    extensions: Optional[FrozenSet[str]] = Field(
        validation_alias=AliasChoices("extensions", "extension"),
    )
    files: Optional[Selector] = None
    columns: Optional[int] = Field(default=None, gt=0)
    commenter: CommentStyle

    @field_validator("extensions", mode="before")
    @classmethod
    def _parse_extensions(cls, value: Any) -> Optional[FrozenSet[str]]:
        if value is None or value == ANY:
            return None
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)) or not all(
            isinstance(item, str) for item in value
        ):
            raise ValueError(f"extensions must be 'any', an extension or a list, not {value!r}")
        if ANY in value:
            return None
        return frozenset(item.lstrip(".") for item in value)

    @field_validator("files", mode="before")
    @classmethod
    def _parse_files(cls, value: Any) -> Optional[Selector]:
        if value is None:
            return None
        return Selector.parse(value)

    @field_validator("commenter", mode="before")
    @classmethod
    def _lowercase_type(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and isinstance(value.get("type"), str):
            return {**value, "type": value["type"].lower()}
        return value


class Config(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    change_in_place: bool = False
    excludes: Tuple[Pattern[str], ...] = ()
    licenses: Tuple[LicenseRule, ...] = ()
    comments: Tuple[CommenterRule, ...] = ()

    @field_validator("excludes", mode="before")
    @classmethod
    def _compile_excludes(cls, value: Any) -> Any:
        return _compile_all(value)

    @field_validator("licenses", "comments", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    def with_exclude(self, pattern: str) -> "Config":
        """Return a copy with *pattern* checked ahead of the configured excludes."""
        return self.model_copy(update={"excludes": (compile_pattern(pattern),) + self.excludes})

    def with_change_in_place(self, enabled: bool = True) -> "Config":
        return self.model_copy(update={"change_in_place": enabled})


def xdg_config_dir() -> Optional[Path]:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    home = os.environ.get("HOME")
    if home:
        return Path(home) / ".config"
    return None


def find_config_file(start: Optional[Path] = None) -> Optional[Path]:
    """Locate the config: env override, then the nearest ``.copyhead.yml``
    walking up from *start*, then the per-user config file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate

    global_dir = xdg_config_dir()
    if global_dir is not None:
        candidate = global_dir / "copyhead" / "config.yml"
        if candidate.is_file():
            return candidate
    return None


def parse_config(text: str, source: str = "<string>") -> Config:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {source}: {exc}", path=source) from None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: top level must be a mapping", path=source)
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid config in {source}: {exc}", path=source) from None


def load_config(path: Optional[Path] = None) -> Config:
    if path is None:
        path = find_config_file()
    if path is None:
        raise ConfigNotFound(
            "no config file found, generate one with copyhead --generate-config"
        )
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise ConfigNotFound(f"config file not found: {path}", path=str(path)) from None
    except OSError as exc:
        raise ConfigError(f"unable to read {path}: {exc}", path=str(path)) from None

    config = parse_config(text, source=str(path))
    logger.debug(
        "config.loaded",
        extra={
            "path": str(path),
            "licenses": len(config.licenses),
            "comments": len(config.comments),
        },
    )
    return config


__all__ = [
    "Author",
    "BlockStyle",
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "CommentStyle",
    "CommenterRule",
    "Config",
    "LicenseRule",
    "LineStyle",
    "find_config_file",
    "load_config",
    "parse_config",
    "xdg_config_dir",
]
