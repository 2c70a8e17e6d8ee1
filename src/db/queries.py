from __future__ import annotations

import sqlite3
from typing import Iterable, Optional

from core.favorites import decode_favorites, encode_favorites
from core.models import Track

FAVORITES_KEY = "itunes-favorites"
LOCATION_KEY = "last-location"

# -------------------------------
# KEY / VALUE
# -------------------------------
def get_item(db: sqlite3.Connection, key: str) -> Optional[str]:
    row = db.execute("SELECT value FROM local_storage WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None


def set_item(db: sqlite3.Connection, key: str, value: str) -> None:
    db.execute(
        """
        INSERT INTO local_storage (key, value) VALUES (?, ?)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """,
        (key, value),
    )
    db.commit()


def remove_item(db: sqlite3.Connection, key: str) -> None:
    db.execute("DELETE FROM local_storage WHERE key = ?", (key,))
    db.commit()


# -------------------------------
# FAVORITES
# -------------------------------
def get_favorites(db: sqlite3.Connection) -> list[Track]:
    return decode_favorites(get_item(db, FAVORITES_KEY))


def set_favorites(db: sqlite3.Connection, tracks: Iterable[Track]) -> None:
    set_item(db, FAVORITES_KEY, encode_favorites(tracks))


# -------------------------------
# LOCATION
# -------------------------------
def get_last_location(db: sqlite3.Connection) -> Optional[str]:
    return get_item(db, LOCATION_KEY)


def set_last_location(db: sqlite3.Connection, location: str) -> None:
    set_item(db, LOCATION_KEY, location)
