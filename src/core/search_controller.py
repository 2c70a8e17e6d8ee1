# core/search_controller.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from core.config import DEFAULT_DEBOUNCE_MS
from core.models import Track

logger = logging.getLogger(__name__)


class SearchController(QObject):
    """
    Debounced catalog search.

    Every ``set_query`` restarts a single-shot timer, so only the last edit of
    a burst reaches the network. Each fired search gets a generation number;
    replies from older generations are dropped, which keeps a slow earlier
    request from overwriting a newer result set.
    """

    tracksChanged = Signal(list)
    loadingChanged = Signal(bool)
    errorChanged = Signal(object)   # str | None
    searchStarted = Signal(str)

    def __init__(self, client, debounce_ms: int = DEFAULT_DEBOUNCE_MS,
                 worker_factory: Optional[Callable] = None, parent=None):
        super().__init__(parent)
        self.client = client
        self._worker_factory = worker_factory or _default_worker_factory

        self._query = ""
        self._tracks: list[Track] = []
        self._loading = False
        self._error: str | None = None
        self._generation = 0
        self._workers: set = set()

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(debounce_ms))
        self._timer.timeout.connect(self._fire)

    # -------------------------
    # State
    # -------------------------
    @property
    def query(self) -> str:
        return self._query

    @property
    def tracks(self) -> list[Track]:
        return list(self._tracks)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str | None:
        return self._error

    def is_pending(self) -> bool:
        return self._timer.isActive()

    # -------------------------
    # External API
    # -------------------------
    def set_query(self, text: str):
        text = text or ""
        if text == self._query:
            return
        self._query = text
        # start() on an active single-shot timer reschedules it
        self._timer.start()

    def search_now(self):
        self._timer.stop()
        self._fire()

    def shutdown(self):
        self._timer.stop()
        self._generation += 1
        for worker in list(self._workers):
            worker.wait()
        self._workers.clear()

    # -------------------------
    # Internals
    # -------------------------
    @Slot()
    def _fire(self):
        term = self._query
        self._generation += 1

        if not term.strip():
            self._set_tracks([])
            self._set_loading(False)
            return

        self._set_loading(True)
        self._set_error(None)
        self.searchStarted.emit(term)

        worker = self._worker_factory(self.client, term, self._generation, self)
        worker.resultReady.connect(self._on_result)
        worker.finished.connect(self._on_worker_done)
        self._workers.add(worker)
        worker.start()

    @Slot(int, object, object)
    def _on_result(self, generation: int, tracks, error):
        if generation != self._generation:
            logger.debug("Dropping stale search reply (generation %d, latest %d)", generation, self._generation)
            return

        if error:
            self._set_tracks([])
            self._set_error(str(error))
        else:
            self._set_tracks(list(tracks or []))
        self._set_loading(False)

    @Slot()
    def _on_worker_done(self):
        worker = self.sender()
        if worker is None:
            return
        self._workers.discard(worker)
        worker.deleteLater()

    def _set_tracks(self, tracks: list[Track]):
        if tracks == self._tracks:
            return
        self._tracks = tracks
        self.tracksChanged.emit(list(tracks))

    def _set_loading(self, loading: bool):
        if loading == self._loading:
            return
        self._loading = loading
        self.loadingChanged.emit(loading)

    def _set_error(self, error: str | None):
        if error == self._error:
            return
        self._error = error
        self.errorChanged.emit(error)


def _default_worker_factory(client, term: str, generation: int, parent):
    from ui.workers.search_worker import SearchWorker
    return SearchWorker(client, term, generation, parent=parent)
