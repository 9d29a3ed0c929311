# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Per-file header pipeline and the batch runner around it.

Each file goes pending -> excluded | unmatched | already_licensed | licensed |
failed. Files share nothing but the read-only config, so a batch can be
spread over a thread pool.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .commenter import format_header
from .config import CommenterRule, Config, LicenseRule
from .detector import BOM, MatchKind, find_header, replace_header, split_preamble
from .errors import (
    ConfigSelectionMiss,
    CopyheadError,
    FileIOError,
    RenderError,
    TemplateFetchError,
    VcsError,
)
from .matcher import PathLike, is_excluded, select_commenter, select_license
from .reporting import BatchReport, FileResult, FileStatus
from .sinks import Sink
from .template import YearRange, render

logger = logging.getLogger(__name__)

TemplateSource = Callable[[str], str]
YearSource = Callable[[str], YearRange]


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileIOError(f"failed to read {path}: {exc}", path=path) from None


def insert_header(contents: str, header: str, trailing_lines: int = 0, newline: str = "\n") -> str:
    """Put *header* at the top of *contents*, after any BOM or shebang.

    Leading blank lines of the file are dropped; one blank line
    separates the header from the code unless the header carries its own
    trailing blank lines.
    """
    preamble, body = split_preamble(contents)
    if preamble.lstrip(BOM) and not preamble.endswith("\n"):
        preamble += newline
    body = body.lstrip("\r\n")
    if not body:
        return preamble + header + newline
    separator = newline if trailing_lines else newline * 2
    return preamble + header + separator + body


class LicenseEngine:
    def __init__(
        self,
        config: Config,
        *,
        template_source: Optional[TemplateSource] = None,
        year_source: Optional[YearSource] = None,
        now: Union[date, datetime, None] = None,
    ) -> None:
        self.config = config
        self._template_source = template_source
        self._year_source = year_source
        self._now = now

    # ------------------------------------------------------------------
    # Classification and header construction

    def is_excluded(self, path: PathLike) -> bool:
        return is_excluded(path, self.config.excludes)

    def classify(self, path: PathLike) -> Tuple[LicenseRule, CommenterRule]:
        license_rule = select_license(path, self.config.licenses)
        if license_rule is None:
            raise ConfigSelectionMiss(os.fspath(path), "license")
        commenter_rule = select_commenter(path, self.config.comments)
        if commenter_rule is None:
            raise ConfigSelectionMiss(os.fspath(path), "commenter")
        return license_rule, commenter_rule

    def template_for(self, rule: LicenseRule) -> Tuple[str, bool]:
        """Return the template text and whether it came from SPDX."""
        if not rule.auto_template:
            return rule.template or "", False
        if self._template_source is None:
            raise TemplateFetchError(f"license {rule.ident}: auto_template needs a template source")
        return self._template_source(rule.ident), True

    def years_for(self, path: str, rule: LicenseRule) -> Optional[YearRange]:
        if not rule.use_dynamic_years or self._year_source is None:
            return None
        found = self._year_source(path)
        start = rule.start_year if rule.start_year is not None else found.start
        end = rule.end_year if rule.end_year is not None else found.end
        return YearRange(end=end, start=start)

    def header_for(self, path: str, license_rule: LicenseRule, commenter_rule: CommenterRule) -> str:
        template, spdx = self.template_for(license_rule)
        years = self.years_for(path, license_rule)
        text = render(template, license_rule, self._now, years=years, spdx=spdx)
        return format_header(text, commenter_rule)

    # ------------------------------------------------------------------
    # Per-file pipeline

    def process_file(self, path: PathLike) -> FileResult:
        return self._process(os.fspath(path), _read_text)

    def process_text(self, path: PathLike, contents: str) -> FileResult:
        return self._process(os.fspath(path), lambda _path: contents)

    def _process(self, path: str, read: Callable[[str], str]) -> FileResult:
        result = FileResult(path=path)
        if self.is_excluded(path):
            result.status = FileStatus.EXCLUDED
            logger.debug("engine.excluded", extra={"path": path})
            return result

        try:
            license_rule, commenter_rule = self.classify(path)
        except ConfigSelectionMiss as exc:
            result.status = FileStatus.UNMATCHED
            result.error = exc
            result.reason = exc.message
            logger.warning("engine.unmatched", extra={"path": path, "missing": exc.kind})
            return result

        try:
            contents = read(path)
            header = self.header_for(path, license_rule, commenter_rule)
        except (FileIOError, RenderError, TemplateFetchError, VcsError) as exc:
            logger.info("engine.failed", extra={"path": path, "error": exc.message})
            return result.fail(exc)

        return self._license(result, contents, header, license_rule, commenter_rule)

    def _license(
        self,
        result: FileResult,
        contents: str,
        header: str,
        license_rule: LicenseRule,
        commenter_rule: CommenterRule,
    ) -> FileResult:
        newline = "\r\n" if "\r\n" in contents else "\n"
        if newline != "\n":
            header = header.replace("\n", newline)

        match = find_header(contents, header)
        if match.kind is MatchKind.EXACT:
            result.status = FileStatus.ALREADY_LICENSED
            logger.debug("engine.already_licensed", extra={"path": result.path})
            return result

        if match.kind is MatchKind.YEAR_ONLY:
            result.content = replace_header(contents, match, header)
            result.action = "updated"
        else:
            replaced = self._apply_replaces(contents, header, license_rule, newline)
            if replaced is not None:
                result.content = replaced
                result.action = "replaced"
            else:
                result.content = insert_header(
                    contents, header, commenter_rule.commenter.trailing_lines, newline
                )
                result.action = "inserted"

        result.status = FileStatus.LICENSED
        logger.info("engine.licensed", extra={"path": result.path, "action": result.action})
        return result

    @staticmethod
    def _apply_replaces(contents: str, header: str, rule: LicenseRule, newline: str) -> Optional[str]:
        for pattern in rule.replaces:
            found = pattern.search(contents)
            if found is None:
                continue
            replacement = header
            if found.group(0).endswith("\n") and not header.endswith("\n"):
                replacement += newline
            return contents[: found.start()] + replacement + contents[found.end() :]
        return None

    # ------------------------------------------------------------------
    # Batch runner

    def run(
        self,
        paths: Iterable[PathLike],
        *,
        sink: Optional[Sink] = None,
        jobs: int = 1,
        check: bool = False,
    ) -> BatchReport:
        """License *paths* and hand new content to *sink* in input order.

        Nothing is emitted in check mode. An interrupt stops the batch after
        the file being processed and marks the report interrupted.
        """
        report = BatchReport(check_mode=check)
        targets: List[str] = [os.fspath(p) for p in paths]
        try:
            if jobs <= 1:
                for path in targets:
                    report.results.append(self._finish(self.process_file(path), sink, check))
            else:
                self._run_pool(targets, report, sink, jobs, check)
        except KeyboardInterrupt:
            report.interrupted = True
            logger.warning(
                "engine.interrupted",
                extra={"processed": len(report.results), "total": len(targets)},
            )
        return report

    def _run_pool(
        self,
        targets: List[str],
        report: BatchReport,
        sink: Optional[Sink],
        jobs: int,
        check: bool,
    ) -> None:
        pool = ThreadPoolExecutor(max_workers=jobs)
        try:
            futures = [pool.submit(self.process_file, path) for path in targets]
            for future in futures:
                report.results.append(self._finish(future.result(), sink, check))
        except KeyboardInterrupt:
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        finally:
            pool.shutdown(wait=True)

    @staticmethod
    def _finish(result: FileResult, sink: Optional[Sink], check: bool) -> FileResult:
        if result.status is not FileStatus.LICENSED or sink is None or check:
            return result
        try:
            sink.emit(result.path, result.content or "")
        except CopyheadError as exc:
            logger.info("engine.emit_failed", extra={"path": result.path, "error": exc.message})
            result.fail(exc)
        return result


__all__ = ["LicenseEngine", "TemplateSource", "YearSource", "insert_header"]
