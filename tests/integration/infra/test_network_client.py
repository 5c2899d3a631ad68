from __future__ import annotations

"""
Integration tests for the snapshot and code-table HTTP clients.

Validates request shape (user agent, timeout, type parameter), payload
unwrapping and the per-domain fallback to built-in tables.
"""

from unittest.mock import MagicMock, patch

import requests

from drivemap.core.registry import DEFAULT_REGISTRY, CodeDomain
from drivemap.infra.network import fetch_code_table, fetch_code_tables, fetch_snapshot


def _response(payload) -> MagicMock:
    mock_resp = MagicMock()
    mock_resp.status_code = 200
    mock_resp.json.return_value = payload
    mock_resp.content = b"fake-content"
    return mock_resp


def test_fetch_snapshot_success():
    """TC-01: Drive-style {"files": [...]} payloads are unwrapped."""
    payload = {"files": [{"id": "root", "name": "Campaign"}, "junk"]}
    with patch("requests.get", return_value=_response(payload)) as mock_get:
        records = fetch_snapshot("http://fake.url/snapshot.json")

    assert records == [{"id": "root", "name": "Campaign"}]
    _, kwargs = mock_get.call_args
    assert kwargs["timeout"] == 15
    assert kwargs["headers"]["User-Agent"].startswith("drivemap-client/")


def test_fetch_snapshot_timeout():
    with patch("requests.get", side_effect=requests.exceptions.Timeout):
        assert fetch_snapshot("http://slow.url") is None


def test_fetch_snapshot_http_error():
    mock_resp = MagicMock()
    mock_resp.raise_for_status.side_effect = requests.exceptions.HTTPError()
    with patch("requests.get", return_value=mock_resp):
        assert fetch_snapshot("http://missing.url") is None


def test_fetch_snapshot_malformed_payload():
    with patch("requests.get", return_value=_response({"unexpected": True})):
        assert fetch_snapshot("http://broken.url") is None


def test_fetch_snapshot_invalid_json():
    mock_resp = MagicMock()
    mock_resp.json.side_effect = ValueError("Expecting value")
    with patch("requests.get", return_value=mock_resp):
        assert fetch_snapshot("http://html.url") is None


def test_fetch_code_table_shapes():
    """TC-02: Both {code: label} and record lists are accepted."""
    with patch("requests.get", return_value=_response({"10": "NL"})) as mock_get:
        assert fetch_code_table("http://codes", CodeDomain.LANGUAGE) == {"10": "NL"}
    _, kwargs = mock_get.call_args
    assert kwargs["params"] == {"type": "lang"}
    assert kwargs["timeout"] == 5

    records = [{"code": "0300", "name": "Roll-up"}, {"code": "0400"}, "junk"]
    with patch("requests.get", return_value=_response(records)):
        assert fetch_code_table("http://codes", CodeDomain.CONTENT_TYPE) == {"0300": "Roll-up"}


def test_fetch_code_tables_falls_back_per_domain():
    """TC-03: A failing domain keeps its built-in table."""
    def fake_get(url, params=None, headers=None, timeout=None):
        if params["type"] == "lang":
            raise requests.exceptions.ConnectionError()
        if params["type"] == "file":
            return _response({"data": {"0300": "Roll-up"}})
        return _response([])

    with patch("requests.get", side_effect=fake_get) as mock_get:
        registry = fetch_code_tables("http://codes")

    assert mock_get.call_count == 4
    assert registry.resolve(CodeDomain.CONTENT_TYPE, "0300") == "Roll-up"
    assert registry.resolve(CodeDomain.CONTENT_TYPE, "0080") == "Alup80"
    assert dict(registry.table(CodeDomain.LANGUAGE)) == dict(DEFAULT_REGISTRY.table(CodeDomain.LANGUAGE))
    assert dict(registry.table(CodeDomain.CLIENT)) == dict(DEFAULT_REGISTRY.table(CodeDomain.CLIENT))
