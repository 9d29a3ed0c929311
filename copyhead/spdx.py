# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Fetch standard license header templates from the SPDX license list."""

from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Optional

from requests import RequestException, Session

from .errors import TemplateFetchError
from .util.http import get_json, http_client

logger = logging.getLogger(__name__)

SPDX_BASE_URL = "https://spdx.org/licenses"


class SpdxClient:
    """Looks up license templates by SPDX identifier, once per identifier."""

    def __init__(self, session: Optional[Session] = None, *, base_url: str = SPDX_BASE_URL) -> None:
        self._session = session
        self.base_url = base_url.rstrip("/")
        self._cache: Dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = http_client()
        return self._session

    def __call__(self, ident: str) -> str:
        return self.fetch_template(ident)

    def fetch_template(self, ident: str) -> str:
        with self._lock:
            cached = self._cache.get(ident)
            if cached is None:
                cached = self._cache[ident] = self._fetch(ident)
            return cached

    def _fetch(self, ident: str) -> str:
        url = f"{self.base_url}/{ident}.json"
        start = time.perf_counter()
        logger.debug("→ SPDX GET %s", url)
        try:
            status, payload = get_json(self.session, url)
        except RequestException as exc:
            raise TemplateFetchError(
                f"failed to fetch license template for {ident} from SPDX: {exc}"
            ) from None
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug("← SPDX %s [%s] in %.0f ms", ident, status, elapsed_ms)

        if status in (400, 404):
            raise TemplateFetchError(
                f"{ident} does not appear to be a valid SPDX identifier, "
                "see https://spdx.org/licenses/ for a list of valid identifiers"
            )
        if status != 200:
            raise TemplateFetchError(
                f"failed to fetch license template for {ident} from SPDX: HTTP {status}"
            )
        if not isinstance(payload, dict):
            raise TemplateFetchError(f"invalid SPDX JSON for {ident}")

        template = payload.get("standardLicenseHeader") or payload.get("licenseText")
        if not template:
            raise TemplateFetchError(f"SPDX entry for {ident} has no license text")
        return template


_default_client: Optional[SpdxClient] = None


def default_client() -> SpdxClient:
    global _default_client
    if _default_client is None:
        _default_client = SpdxClient()
    return _default_client


def fetch_template(ident: str) -> str:
    return default_client().fetch_template(ident)


__all__ = ["SPDX_BASE_URL", "SpdxClient", "default_client", "fetch_template"]
