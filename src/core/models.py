# core/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

SONG_KIND = "song"
TRACK_WRAPPER = "track"


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _float(value: Any) -> float:
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


def _str(value: Any) -> str:
    return str(value) if value is not None else ""


@dataclass(frozen=True)
class Track:
    track_id: int
    artist_name: str
    track_name: str
    collection_name: str = ""
    artwork_url: str = ""
    preview_url: Optional[str] = None
    price: float = 0.0          # 0 = free
    currency: str = ""
    duration_ms: int = 0
    release_date: str = ""
    genre: str = ""
    kind: str = SONG_KIND
    wrapper_type: str = TRACK_WRAPPER

    @staticmethod
    def from_api(item: dict) -> "Track":
        return Track(
            track_id=_int(item.get("trackId")),
            artist_name=_str(item.get("artistName")),
            track_name=_str(item.get("trackName")),
            collection_name=_str(item.get("collectionName")),
            artwork_url=_str(item.get("artworkUrl100")),
            preview_url=item.get("previewUrl") or None,
            price=_float(item.get("trackPrice")),
            currency=_str(item.get("currency")),
            duration_ms=_int(item.get("trackTimeMillis")),
            release_date=_str(item.get("releaseDate")),
            genre=_str(item.get("primaryGenreName")),
            kind=_str(item.get("kind")),
            wrapper_type=_str(item.get("wrapperType")),
        )

    def to_api(self) -> dict:
        # same camelCase shape the catalog returns; used for persisted favorites
        return {
            "trackId": self.track_id,
            "artistName": self.artist_name,
            "trackName": self.track_name,
            "collectionName": self.collection_name,
            "artworkUrl100": self.artwork_url,
            "previewUrl": self.preview_url,
            "trackPrice": self.price,
            "currency": self.currency,
            "trackTimeMillis": self.duration_ms,
            "releaseDate": self.release_date,
            "primaryGenreName": self.genre,
            "kind": self.kind,
            "wrapperType": self.wrapper_type,
        }


def is_song_result(item: Any) -> bool:
    """
    True only for purchasable songs: podcasts, audiobooks, music videos and
    entries missing an id/title/artist are rejected.
    """
    if not isinstance(item, dict):
        return False
    return (
        item.get("kind") == SONG_KIND
        and item.get("wrapperType") == TRACK_WRAPPER
        and _int(item.get("trackId")) != 0
        and bool(item.get("trackName"))
        and bool(item.get("artistName"))
    )


def filter_songs(results: Iterable[Any]) -> list[Track]:
    return [Track.from_api(item) for item in results if is_song_result(item)]
