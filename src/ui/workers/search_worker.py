# ui/workers/search_worker.py
from __future__ import annotations

import logging

from PySide6.QtCore import QThread, Signal

from core.errors import SearchError

logger = logging.getLogger(__name__)

class SearchWorker(QThread):
    resultReady = Signal(int, object, object)  # generation, tracks, error message | None

    def __init__(self, client, term: str, generation: int, parent=None):
        super().__init__(parent)
        self.client = client
        self.term = term
        self.generation = generation

    def run(self):
        try:
            tracks = self.client.search(self.term)
        except SearchError as e:
            logger.warning("Search for %r failed: %s", self.term, e)
            self.resultReady.emit(self.generation, [], str(e) or "An error occurred while searching")
            return
        except Exception as e:
            logger.exception("Unexpected error while searching for %r", self.term)
            self.resultReady.emit(self.generation, [], str(e) or "An error occurred while searching")
            return

        self.resultReady.emit(self.generation, tracks, None)
