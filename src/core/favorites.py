from __future__ import annotations

import json
import logging
import sqlite3
from typing import Callable, Iterable, Optional

from PySide6.QtCore import QObject, Signal, Slot

from core.models import Track

logger = logging.getLogger(__name__)


def encode_favorites(tracks: Iterable[Track]) -> str:
    return json.dumps([t.to_api() for t in tracks])


def decode_favorites(raw: str | None) -> list[Track]:
    """
    Parse the persisted favorites array. Anything unreadable is logged and
    dropped; a broken value never prevents startup.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning("Stored favorites are not valid JSON, starting empty: %s", e)
        return []
    if not isinstance(data, list):
        logger.warning("Stored favorites are not a list, starting empty")
        return []

    tracks: list[Track] = []
    for item in data:
        if not isinstance(item, dict):
            logger.warning("Skipping malformed favorite entry: %r", item)
            continue
        track = Track.from_api(item)
        if not track.track_id:
            logger.warning("Skipping favorite without trackId: %r", item)
            continue
        tracks.append(track)
    return tracks


class FavoriteSet(QObject):
    changed = Signal()
    persistFailed = Signal(str)

    def __init__(self, persist: Optional[Callable[[list[Track]], None]] = None, parent=None):
        super().__init__(parent)
        self._persist_fn = persist
        self._items: dict[int, Track] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    @Slot(list)
    def load(self, tracks: Iterable[Track]) -> None:
        items: dict[int, Track] = {}
        for t in tracks:
            items.setdefault(int(t.track_id), t)
        self._items = items
        self._loaded = True
        logger.info("Loaded %d favorite(s)", len(items))
        self.changed.emit()

    def toggle(self, track: Track) -> bool:
        track_id = int(track.track_id)
        if track_id in self._items:
            del self._items[track_id]
            now_favorite = False
        else:
            self._items[track_id] = track
            now_favorite = True

        self.changed.emit()
        self._persist()
        return now_favorite

    def contains(self, track_id: int) -> bool:
        return int(track_id) in self._items

    def tracks(self) -> list[Track]:
        return list(self._items.values())

    def ids(self) -> set[int]:
        return set(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def _persist(self) -> None:
        # nothing is written until the stored set has been read once
        if not self._loaded:
            logger.debug("Favorites not loaded yet; skipping write")
            return
        if self._persist_fn is None:
            return
        try:
            self._persist_fn(self.tracks())
        except sqlite3.Error as e:
            logger.exception("Failed to save favorites")
            self.persistFailed.emit(f"Failed to save favorites: {e}")
