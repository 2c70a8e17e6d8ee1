# ui/widgets/track_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Signal, Qt, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableView, QMenu, QLabel

from core.models import Track
from ui.models.track_table_model import TrackTableModel, FAVORITE_COLUMN
from ui.delegates.favorite_delegate import FavoriteDelegate


class TrackListWidget(QWidget):
    toggleFavorite = Signal(object)   # Track

    def __init__(self, empty_text: str = "No tracks"):
        super().__init__()

        self.table = QTableView()
        self.model = TrackTableModel([])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)

        self.table.setColumnWidth(0, 36)
        self.table.setColumnWidth(1, 380)
        self.table.setColumnWidth(2, 220)
        self.table.setColumnWidth(3, 110)
        self.table.setColumnWidth(4, 80)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setObjectName("TrackTable")

        self.table.verticalHeader().setDefaultSectionSize(26)

        self._apply_styles()

        # Star in the first column
        self.favorites_delegate = FavoriteDelegate(self.table)
        self.favorites_delegate.favoriteClicked.connect(self._on_star_clicked)
        self.table.setItemDelegateForColumn(FAVORITE_COLUMN, self.favorites_delegate)

        # Double click -> toggle favorite
        self.table.doubleClicked.connect(self._on_double_click)

        # Right-click context menu
        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)

        self.empty_label = QLabel(empty_text)
        self.empty_label.setObjectName("EmptyLabel")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.table)
        layout.addWidget(self.empty_label)
        self._update_empty_state()

    # -------------------------
    # External API
    # -------------------------
    def set_tracks(self, tracks: list[Track]):
        self.model.set_rows(tracks)
        self._update_empty_state()

    def set_favorite_ids(self, ids):
        self.model.set_favorite_ids(ids)

    # -------------------------
    # UI Events
    # -------------------------
    def _update_empty_state(self):
        empty = self.model.rowCount() == 0
        self.table.setVisible(not empty)
        self.empty_label.setVisible(empty)

    def _on_star_clicked(self, track_id: int):
        row = self.model.row_for_track_id(track_id)
        track = self.model.track_at(row)
        if track is not None:
            self.toggleFavorite.emit(track)

    def _on_double_click(self, index):
        if not index.isValid() or index.column() == FAVORITE_COLUMN:
            return
        track = self.model.track_at(index.row())
        if track is not None:
            self.toggleFavorite.emit(track)

    def _on_context_menu(self, pos):
        idx = self.table.indexAt(pos)
        if not idx.isValid():
            return

        track = self.model.track_at(idx.row())
        if track is None:
            return

        menu = QMenu(self)
        fav_text = "Remove from favorites" if self.model.is_favorite(track.track_id) else "Add to favorites"
        act_fav = menu.addAction(fav_text)
        act_preview = menu.addAction("Open preview")
        act_preview.setEnabled(bool(track.preview_url))

        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen == act_fav:
            self.toggleFavorite.emit(track)
        elif chosen == act_preview:
            QDesktopServices.openUrl(QUrl(track.preview_url))

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#TrackTable {
            background-color: #020617;
            alternate-background-color: #030712;
            border: none;
            color: #e5e7eb;
            gridline-color: #020617;
            selection-background-color: rgba(56, 189, 248, 0.2);
            selection-color: #e5e7eb;
        }

        QHeaderView::section {
            background-color: #020617;
            color: #9ca3af;
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #111827;
            font-size: 11px;
            text-transform: uppercase;
        }

        QTableView::item {
            padding: 4px 6px;
        }

        QLabel#EmptyLabel {
            color: #6b7280;
            font-size: 13px;
        }
        """)
