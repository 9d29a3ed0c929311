# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""copyhead command line entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import get_version, spdx, vcs
from .config import CONFIG_FILE_NAME, Config, load_config
from .defaults import DEFAULT_CONFIG
from .engine import LicenseEngine
from .errors import ConfigError, CopyheadError, MalformedSelector, VcsError
from .logging_setup import setup_logging
from .sinks import make_sink

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_FILES = 10


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def generate_config_cmd(args) -> int:
    target = Path(CONFIG_FILE_NAME)
    try:
        target.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as exc:
        _err(f"unable to create {target}: {exc}")
        return EXIT_FAILURE
    _err(f"wrote default config to {target}")
    return EXIT_OK


def _effective_config(args) -> Config:
    config = load_config(Path(args.config) if args.config else None)
    for pattern in args.exclude or []:
        config = config.with_exclude(pattern)
    if args.in_place:
        config = config.with_change_in_place()
    return config


def _target_files(args) -> List[str]:
    if args.project:
        return vcs.project_files()
    return list(args.files)


def license_cmd(args) -> int:
    if not args.files and not args.project:
        _err("no files given, pass FILES or use --project to license the whole git project")
        return EXIT_NO_FILES

    try:
        config = _effective_config(args)
    except (ConfigError, MalformedSelector) as exc:
        _err(f"error: {exc.message}")
        return EXIT_FAILURE

    try:
        files = _target_files(args)
    except VcsError as exc:
        _err(f"error: {exc.message}")
        return EXIT_FAILURE

    dynamic = any(rule.use_dynamic_years for rule in config.licenses)
    engine = LicenseEngine(
        config,
        template_source=spdx.default_client(),
        year_source=vcs.file_years if dynamic else None,
    )
    logger.info(
        "cli.run",
        extra={"files": len(files), "check": args.check, "in_place": config.change_in_place},
    )
    report = engine.run(
        files,
        sink=make_sink(config.change_in_place),
        jobs=max(1, args.jobs),
        check=args.check,
    )

    for line in report.status_lines():
        _err(line)
    _err(report.summary())
    return report.exit_code()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="copyhead",
        description="Insert and update license headers in source files",
    )
    parser.add_argument("files", nargs="*", metavar="FILES", help="files to license")
    parser.add_argument(
        "-p", "--project", action="store_true", help="license all files tracked by git in this project"
    )
    parser.add_argument(
        "-i", "--in-place", action="store_true", help="rewrite files instead of printing them to stdout"
    )
    parser.add_argument(
        "-c", "--check", action="store_true", help="report files that need a header and change nothing"
    )
    parser.add_argument(
        "-e", "--exclude", action="append", metavar="REGEX", help="exclude paths matching REGEX"
    )
    parser.add_argument(
        "-g", "--generate-config", action="store_true", help=f"write a default {CONFIG_FILE_NAME}"
    )
    parser.add_argument("--config", metavar="PATH", help="use this config file")
    parser.add_argument("-j", "--jobs", type=int, default=1, help="files to process in parallel")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging, repeatable")
    parser.add_argument("--log-file", metavar="PATH", help="also log to a rotating file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, Path(args.log_file) if args.log_file else None)

    if args.generate_config:
        return generate_config_cmd(args)
    try:
        return license_cmd(args)
    except KeyboardInterrupt:
        _err("interrupted")
        return 130
    except CopyheadError as exc:
        logger.error("cli.failed", extra={"error": exc.code})
        _err(f"error: {exc.message}")
        return EXIT_FAILURE


__all__ = ["build_parser", "generate_config_cmd", "license_cmd", "main"]
