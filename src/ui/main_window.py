from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QStackedWidget,
    QProgressBar, QLineEdit, QHBoxLayout, QToolButton, QStyle
)
from PySide6.QtGui import QGuiApplication, QShortcut, QKeySequence
import logging
import sqlite3

from core.itunes_client import ItunesClient
from core.location import location_for_query
from core.search_controller import SearchController
from db.queries import set_last_location
from ui.widgets.track_list_widget import TrackListWidget
from ui.workers.favorites_loader import FavoritesLoader

logger = logging.getLogger(__name__)

APP_TITLE = "iTunes Search"


class MainWindow(QMainWindow):
    def __init__(self, app_state, initial_query: str = "", client=None):
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(1000, 640)
        self.app_state = app_state
        self.favorites = app_state.favorites

        settings = app_state.settings
        if client is None:
            client = ItunesClient(
                base_url=settings.api_base_url,
                limit=settings.result_limit,
                timeout_s=settings.request_timeout_s,
            )
        self.controller = SearchController(client, debounce_ms=settings.debounce_ms, parent=self)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Ctrl+L"), self, activated=self._focus_search)
        QShortcut(QKeySequence("Ctrl+Shift+C"), self, activated=self.copy_location)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.app_state.notification.connect(self._on_notify)

        # --- Top controls (search + share location) ---
        top_bar = QHBoxLayout()

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search songs, artists, albums...")
        self.search_box.setClearButtonEnabled(True)
        top_bar.addWidget(self.search_box, stretch=3)

        self.location_field = QLineEdit()
        self.location_field.setReadOnly(True)
        self.location_field.setObjectName("LocationField")
        self.location_field.setToolTip("Share this link to reproduce the search")
        self.location_field.setText(self.app_state.location)
        top_bar.addWidget(self.location_field, stretch=2)

        self.btn_copy = QToolButton()
        self.btn_copy.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_FileLinkIcon))
        self.btn_copy.setToolTip("Copy link")
        self.btn_copy.clicked.connect(self.copy_location)
        top_bar.addWidget(self.btn_copy)

        self.layout.addLayout(top_bar)

        # --- Loading strip (hidden when idle) ---
        self.loading_row = QWidget()
        loading_layout = QHBoxLayout(self.loading_row)
        loading_layout.setContentsMargins(8, 6, 8, 6)
        loading_layout.setSpacing(10)

        self.loading_label = QLabel("Searching…")
        self.loading_label.setObjectName("LoadingLabel")

        self.progress_bar = QProgressBar()
        self.progress_bar.setObjectName("LoadingProgress")
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setRange(0, 0)  # indeterminate

        loading_layout.addWidget(self.loading_label)
        loading_layout.addWidget(self.progress_bar, 1)
        self.loading_row.setObjectName("LoadingRow")
        self.loading_row.setVisible(False)
        self.layout.addWidget(self.loading_row)

        # --- Error banner ---
        self.error_banner = QLabel()
        self.error_banner.setObjectName("ErrorBanner")
        self.error_banner.setWordWrap(True)
        self.error_banner.setVisible(False)
        self.layout.addWidget(self.error_banner)

        # --- Results / favorites ---
        self.section_label = QLabel()
        self.section_label.setObjectName("SectionLabel")
        self.layout.addWidget(self.section_label)

        self.results_list = TrackListWidget("No songs found")
        self.favorites_list = TrackListWidget("No favorites yet. Search for a song and star it.")

        self.stack = QStackedWidget()
        self.stack.addWidget(self.favorites_list)
        self.stack.addWidget(self.results_list)
        self.layout.addWidget(self.stack, 1)

        # --- Wiring ---
        self.search_box.textChanged.connect(self._on_query_edited)
        self.search_box.returnPressed.connect(self.controller.search_now)

        self.controller.tracksChanged.connect(self._on_tracks_changed)
        self.controller.loadingChanged.connect(self._on_loading_changed)
        self.controller.errorChanged.connect(self._on_error_changed)
        self.controller.searchStarted.connect(lambda term: self.statusBar().showMessage(f"Searching for “{term}”…"))

        self.results_list.toggleFavorite.connect(self._on_toggle_favorite)
        self.favorites_list.toggleFavorite.connect(self._on_toggle_favorite)

        self.favorites.changed.connect(self._on_favorites_changed)
        self.favorites.persistFailed.connect(lambda msg: self.app_state.notify(msg, "error"))

        self.app_state.location_changed.connect(self.location_field.setText)

        # initial state
        self._on_favorites_changed()
        self._update_view_mode()
        self.search_box.setText(initial_query or "")
        self._load_favorites()
        self.show_queued_notifications()

        self.setStyleSheet(self.styleSheet() + """
            QWidget#LoadingRow {
                background: #020617;
                border-top: 1px solid #111827;
            }

            QLabel#LoadingLabel {
                color: #9ca3af;
                font-size: 11px;
            }

            QProgressBar#LoadingProgress {
                background: #0b1222;
                border: 1px solid #1f2937;
                border-radius: 999px;
                height: 10px;
            }

            QProgressBar#LoadingProgress::chunk {
                border-radius: 999px;
                background: qlineargradient(
                    x1:0, y1:0, x2:1, y2:0,
                    stop:0 #38bdf8, stop:1 #22c55e
                );
            }

            QLabel#ErrorBanner {
                background: #2a0a0a;
                border: 1px solid #ef4444;
                border-radius: 8px;
                color: #fecaca;
                padding: 8px 10px;
            }

            QLabel#SectionLabel {
                color: #9ca3af;
                font-size: 12px;
                font-weight: 600;
                padding: 4px 2px;
            }

            QLineEdit#LocationField {
                color: #9ca3af;
            }

            QToolButton {
                border: 1px solid transparent;
                background: transparent;
                padding: 6px;
                border-radius: 10px;
            }

            QToolButton:hover {
                background: #0b1222;
                border-color: #1f2937;
            }
            """)

    # ------------------ query ------------------
    def _on_query_edited(self, text: str):
        self.controller.set_query(text)
        self.app_state.set_location(location_for_query(text))
        self._update_view_mode()

    def _update_view_mode(self):
        query = self.search_box.text()
        if query.strip():
            self.stack.setCurrentWidget(self.results_list)
            self.setWindowTitle(f"{APP_TITLE} — {query.strip()}")
        else:
            self.stack.setCurrentWidget(self.favorites_list)
            self.setWindowTitle(APP_TITLE)
        self._update_section_label()
        self._update_error_banner()

    def _update_section_label(self):
        if self.stack.currentWidget() is self.results_list:
            count = len(self.controller.tracks)
            self.section_label.setText(f"Results ({count})")
        else:
            self.section_label.setText(f"Favorites ({len(self.favorites)})")

    def _focus_search(self):
        self.search_box.setFocus()
        self.search_box.selectAll()

    def copy_location(self):
        QGuiApplication.clipboard().setText(self.app_state.location)
        self.app_state.notify("Link copied to clipboard.", "success")

    # ------------------ search results ------------------
    def _on_tracks_changed(self, tracks):
        self.results_list.set_tracks(tracks)
        self._update_section_label()

    def _on_loading_changed(self, loading: bool):
        self.loading_row.setVisible(loading)
        if not loading and self.statusBar().currentMessage().startswith("Searching"):
            self.statusBar().clearMessage()

    def _on_error_changed(self, error):
        self._update_error_banner()

    def _update_error_banner(self):
        # the last error stays on the controller; it is only shown over results
        error = self.controller.error if self.search_box.text().strip() else None
        self.error_banner.setText(f"Search failed: {error}" if error else "")
        self.error_banner.setVisible(bool(error))

    # ------------------ favorites ------------------
    def _load_favorites(self):
        if not self.app_state.db_path:
            self.favorites.load([])
            return

        self._favorites_loader = FavoritesLoader(self.app_state.db_path, parent=self)
        self._favorites_loader.loaded.connect(self.favorites.load)
        self._favorites_loader.failed.connect(self._on_favorites_load_failed)
        self._favorites_loader.start()

    def _on_favorites_load_failed(self, msg: str):
        logger.error(msg)
        self.favorites.load([])
        self.app_state.notify(msg, "error")

    def _on_toggle_favorite(self, track):
        if not self.favorites.loaded:
            self.statusBar().showMessage("Favorites are still loading; try again in a moment.", 3000)
            return
        added = self.favorites.toggle(track)
        verb = "Added to" if added else "Removed from"
        self.statusBar().showMessage(f"{verb} favorites: {track.artist_name} — {track.track_name}", 3000)

    def _on_favorites_changed(self):
        ids = self.favorites.ids()
        self.favorites_list.set_tracks(self.favorites.tracks())
        self.favorites_list.set_favorite_ids(ids)
        self.results_list.set_favorite_ids(ids)
        self._update_section_label()

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        # n is core.state.Notify
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        timeout = 0 if kind == "error" else 4000
        self.statusBar().showMessage(msg, timeout)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    # ------------------ shutdown ------------------
    def closeEvent(self, event):
        self.controller.shutdown()
        loader = getattr(self, "_favorites_loader", None)
        if loader is not None:
            loader.wait()

        if self.app_state.db is not None:
            try:
                set_last_location(self.app_state.db, self.app_state.location)
            except sqlite3.Error:
                logger.exception("Failed to save last location")

        super().closeEvent(event)
