from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
import requests

from copyhead.errors import TemplateFetchError
from copyhead.spdx import SpdxClient
from copyhead.util.http import DEFAULT_TIMEOUT, get_json, http_client


class _Response:
    def __init__(self, status_code: int, payload: Optional[Dict[str, Any]] = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Dict[str, Any]:
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class _Session:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.urls: List[str] = []

    def get(self, url: str, **kwargs):
        self.urls.append(url)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def test_prefers_standard_license_header():
    session = _Session(
        _Response(200, {"standardLicenseHeader": "Copyright <year>", "licenseText": "long text"})
    )
    client = SpdxClient(session)
    assert client.fetch_template("GPL-2.0-or-later") == "Copyright <year>"
    assert session.urls == ["https://spdx.org/licenses/GPL-2.0-or-later.json"]


def test_falls_back_to_license_text():
    session = _Session(_Response(200, {"licenseText": "MIT License text"}))
    assert SpdxClient(session)("MIT") == "MIT License text"


def test_templates_are_cached_per_identifier():
    session = _Session(_Response(200, {"licenseText": "text"}))
    client = SpdxClient(session)
    client.fetch_template("MIT")
    client.fetch_template("MIT")
    assert len(session.urls) == 1


def test_unknown_identifier():
    client = SpdxClient(_Session(_Response(404)))
    with pytest.raises(TemplateFetchError) as excinfo:
        client.fetch_template("NOT-A-LICENSE")
    assert "valid SPDX identifier" in excinfo.value.message


def test_server_error_reports_status():
    client = SpdxClient(_Session(_Response(503)))
    with pytest.raises(TemplateFetchError) as excinfo:
        client.fetch_template("MIT")
    assert "503" in excinfo.value.message


def test_network_error_becomes_fetch_error():
    client = SpdxClient(_Session(requests.ConnectionError("offline")))
    with pytest.raises(TemplateFetchError):
        client.fetch_template("MIT")


def test_bad_json_becomes_fetch_error():
    client = SpdxClient(_Session(_Response(200)))
    with pytest.raises(TemplateFetchError):
        client.fetch_template("MIT")


def test_http_client_applies_default_timeout(monkeypatch):
    captured: Dict[str, Any] = {}

    def fake_request(self, method, url, **kwargs):
        captured.update(kwargs)
        return _Response(200, {})

    monkeypatch.setattr(requests.Session, "request", fake_request)
    session = http_client()
    session.get("https://spdx.org/licenses/MIT.json")
    assert captured["timeout"] == DEFAULT_TIMEOUT
    assert session.headers["Accept"] == "application/json"
    assert session.headers["User-Agent"].startswith("copyhead/")


def test_http_client_keeps_explicit_timeout(monkeypatch):
    captured: Dict[str, Any] = {}

    def fake_request(self, method, url, **kwargs):
        captured.update(kwargs)
        return _Response(200, {})

    monkeypatch.setattr(requests.Session, "request", fake_request)
    http_client(timeout=5).get("https://spdx.org/licenses/MIT.json", timeout=1)
    assert captured["timeout"] == 1


def test_http_client_retries_rate_limits():
    retry = http_client(retries=2).get_adapter("https://spdx.org").max_retries
    assert retry.total == 2
    assert 429 in retry.status_forcelist


def test_get_json_tolerates_non_json_bodies():
    assert get_json(_Session(_Response(200, {"a": 1})), "https://x") == (200, {"a": 1})
    assert get_json(_Session(_Response(502)), "https://x") == (502, None)
