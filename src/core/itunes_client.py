from __future__ import annotations

import logging

import requests

from core.errors import DecodeError, NetworkError
from core.models import Track, filter_songs

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://itunes.apple.com"
DEFAULT_LIMIT = 50


class ItunesClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = "itunes-search-py/0.1",
        limit: int = DEFAULT_LIMIT,
        timeout_s: float = 15,
    ):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.limit = int(limit)
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    def search_params(self, term: str) -> dict:
        # GET /search?term=...&media=music&entity=song&limit=50
        return {
            "term": term,
            "media": "music",
            "entity": "song",
            "limit": self.limit,
        }

    def search(self, term: str) -> list[Track]:
        url = f"{self.base_url}/search"
        logger.debug("Searching catalog for %r", term)
        try:
            r = self.session.get(url, params=self.search_params(term), timeout=self.timeout_s)
        except requests.RequestException as e:
            raise NetworkError(f"Network error: {e}") from e

        if not r.ok:
            raise NetworkError(f"HTTP error! status: {r.status_code}")

        try:
            data = r.json()
        except ValueError as e:
            raise DecodeError(f"Invalid response from search service: {e}") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise DecodeError("Invalid response from search service: missing results")

        tracks = filter_songs(results)
        logger.debug("Catalog returned %d item(s), %d song(s) kept", len(results), len(tracks))
        return tracks
