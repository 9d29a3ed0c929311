# Copyright (C) 2026 copyhead Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
"""HTTP session used for license template lookups."""

from __future__ import annotations

from typing import Any, Optional, Tuple

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from copyhead import get_version

DEFAULT_TIMEOUT = 15
RETRY_STATUSES = (429, 500, 502, 503, 504)


def user_agent() -> str:
    return f"copyhead/{get_version()} (+https://spdx.org/licenses/)"


def http_client(timeout: int = DEFAULT_TIMEOUT, retries: int = 3) -> Session:
    """JSON session that retries rate limits and server errors.

    Every request gets *timeout* unless the caller passes one.
    """
    s = Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"Accept": "application/json", "User-Agent": user_agent()})
    orig = s.request

    def _request(method, url, **kwargs):
        kwargs.setdefault("timeout", timeout)
        return orig(method, url, **kwargs)

    s.request = _request
    return s


def get_json(session: Session, url: str) -> Tuple[int, Optional[Any]]:
    """GET *url* and return the status code with the decoded body.

    The body is ``None`` when the response is not JSON.
    """
    response = session.get(url)
    try:
        payload = response.json()
    except ValueError:
        payload = None
    return response.status_code, payload


__all__ = ["DEFAULT_TIMEOUT", "get_json", "http_client", "user_agent"]
