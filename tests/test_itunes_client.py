from __future__ import annotations

import pytest
import requests

from core.errors import DecodeError, NetworkError, SearchError
from core.itunes_client import ItunesClient


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, json_error: Exception | None = None):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


def test_search_sends_fixed_parameters(monkeypatch) -> None:
    client = ItunesClient()
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen["url"] = url
        seen["params"] = params
        return FakeResponse(payload={"resultCount": 0, "results": []})

    monkeypatch.setattr(client.session, "get", fake_get)

    assert client.search("daft punk") == []
    assert seen["url"] == "https://itunes.apple.com/search"
    assert seen["params"] == {"term": "daft punk", "media": "music", "entity": "song", "limit": 50}


def test_search_filters_results(monkeypatch) -> None:
    client = ItunesClient()
    payload = {
        "resultCount": 3,
        "results": [
            {"kind": "song", "wrapperType": "track", "artistName": "A", "trackName": "No id"},
            {"kind": "podcast", "wrapperType": "track", "trackId": 2, "artistName": "B", "trackName": "Pod"},
            {"kind": "song", "wrapperType": "track", "trackId": 3, "artistName": "C", "trackName": "Tune"},
        ],
    }
    monkeypatch.setattr(client.session, "get", lambda *a, **k: FakeResponse(payload=payload))

    tracks = client.search("tune")

    assert [t.track_id for t in tracks] == [3]


def test_http_error_status_raises_network_error(monkeypatch) -> None:
    client = ItunesClient()
    monkeypatch.setattr(client.session, "get", lambda *a, **k: FakeResponse(status_code=500))

    with pytest.raises(NetworkError, match="500"):
        client.search("anything")


def test_transport_failure_raises_network_error(monkeypatch) -> None:
    client = ItunesClient()

    def boom(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(client.session, "get", boom)

    with pytest.raises(NetworkError):
        client.search("anything")


def test_malformed_json_raises_decode_error(monkeypatch) -> None:
    client = ItunesClient()
    monkeypatch.setattr(
        client.session, "get", lambda *a, **k: FakeResponse(json_error=ValueError("Expecting value"))
    )

    with pytest.raises(DecodeError):
        client.search("anything")


def test_missing_results_list_is_a_decode_error(monkeypatch) -> None:
    client = ItunesClient()
    monkeypatch.setattr(client.session, "get", lambda *a, **k: FakeResponse(payload={"resultCount": 0}))

    with pytest.raises(SearchError):
        client.search("anything")


def test_custom_base_url_and_limit(monkeypatch) -> None:
    client = ItunesClient(base_url="http://localhost:8080/", limit=10)
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen["url"] = url
        seen["limit"] = params["limit"]
        return FakeResponse(payload={"results": []})

    monkeypatch.setattr(client.session, "get", fake_get)
    client.search("x")

    assert seen == {"url": "http://localhost:8080/search", "limit": 10}
