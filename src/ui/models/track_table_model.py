# ui/models/track_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from core.models import Track

FAVORITE_COLUMN = 0
HEADERS = ["", "Track", "Album", "Genre", "Duration", "Price"]

def fmt_duration(ms: int | None) -> str:
    if not ms:
        return ""
    seconds = int(ms) // 1000
    m = seconds // 60
    s = seconds % 60
    return f"{m}:{s:02d}"

def fmt_price(price: float | None, currency: str | None) -> str:
    if not price:
        return "Free"
    return f"{price:.2f} {currency or ''}".strip()

class TrackTableModel(QAbstractTableModel):
    def __init__(self, rows=(), favorite_ids=()):
        super().__init__()
        self._rows: list[Track] = list(rows)
        self._favorite_ids: set[int] = set(favorite_ids)

    def set_rows(self, rows):
        self.beginResetModel()
        self._rows = list(rows)
        self.endResetModel()

    def set_favorite_ids(self, ids):
        self._favorite_ids = set(ids)
        if self._rows:
            top = self.index(0, FAVORITE_COLUMN)
            bottom = self.index(len(self._rows) - 1, FAVORITE_COLUMN)
            self.dataChanged.emit(top, bottom)

    def is_favorite(self, track_id: int) -> bool:
        return int(track_id) in self._favorite_ids

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return HEADERS[section]

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        row = self._rows[index.row()]
        col = index.column()

        if role == Qt.DisplayRole:
            if col == FAVORITE_COLUMN:
                return ""
            if col == 1:
                return f"{row.artist_name} — {row.track_name}"
            if col == 2:
                return row.collection_name
            if col == 3:
                return row.genre
            if col == 4:
                return fmt_duration(row.duration_ms)
            if col == 5:
                return fmt_price(row.price, row.currency)
        if role == Qt.ToolTipRole and col == FAVORITE_COLUMN:
            return "Remove from favorites" if self.is_favorite(row.track_id) else "Add to favorites"
        if role == Qt.UserRole:
            return row
        return None

    def track_at(self, row: int) -> Track | None:
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]

    def track_id_at(self, row: int) -> int | None:
        track = self.track_at(row)
        return int(track.track_id) if track else None

    def row_for_track_id(self, track_id: int) -> int:
        for i, r in enumerate(self._rows):
            if int(r.track_id) == int(track_id):
                return i
        return -1
