import os
import threading
import time

import pytest
from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from core.errors import NetworkError
from core.models import Track

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def wait_until(predicate, timeout_s: float = 3.0) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        if predicate():
            return True
        time.sleep(0.005)
    QCoreApplication.processEvents()
    return predicate()


def pump(duration_s: float) -> None:
    deadline = time.monotonic() + duration_s
    while time.monotonic() < deadline:
        QCoreApplication.processEvents()
        time.sleep(0.005)


def make_track(track_id: int, name: str = "Song", artist: str = "Artist") -> Track:
    return Track(track_id=track_id, artist_name=artist, track_name=name)


class RecordingClient:
    """Returns one track per search and records every term it was asked for."""

    def __init__(self):
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def search(self, term: str):
        with self._lock:
            self.calls.append(term)
            n = len(self.calls)
        return [make_track(n, name=term)]


class FailingClient:
    def __init__(self, message: str = "HTTP error! status: 500"):
        self.calls: list[str] = []
        self.message = message

    def search(self, term: str):
        self.calls.append(term)
        raise NetworkError(self.message)


class GatedClient:
    """Blocks searches for terms listed in ``gated`` until ``release`` is set."""

    def __init__(self, gated=()):
        self.gated = set(gated)
        self.release = threading.Event()
        self.calls: list[str] = []

    def search(self, term: str):
        self.calls.append(term)
        if term in self.gated:
            self.release.wait(5)
        return [make_track(len(term), name=term)]
