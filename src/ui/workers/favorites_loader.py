# ui/workers/favorites_loader.py
import sqlite3
from PySide6.QtCore import QThread, Signal

from db.database import connect
from db.queries import get_favorites

class FavoritesLoader(QThread):
    loaded = Signal(list)   # list[Track]
    failed = Signal(str)

    def __init__(self, db_path: str, parent=None):
        super().__init__(parent)
        self.db_path = db_path

    def run(self):
        try:
            # IMPORTANT: open db connection inside this thread
            db = connect(self.db_path)
            try:
                tracks = get_favorites(db)
            finally:
                db.close()
        except sqlite3.Error as e:
            self.failed.emit(f"Failed to load favorites: {e}")
            return

        self.loaded.emit(tracks)
