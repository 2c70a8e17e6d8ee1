# ui/delegates/favorite_delegate.py
from __future__ import annotations
from PySide6.QtCore import Qt, QEvent, QRect, Signal
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import QStyledItemDelegate

from ui.models.track_table_model import FAVORITE_COLUMN

STAR_ON = "★"
STAR_OFF = "☆"

class FavoriteDelegate(QStyledItemDelegate):
    favoriteClicked = Signal(int)  # track_id

    def _star_rect(self, rect: QRect) -> QRect:
        size = min(rect.height(), 22)
        return QRect(rect.center().x() - size // 2, rect.center().y() - size // 2, size, size)

    def paint(self, painter: QPainter, option, index):
        super().paint(painter, option, index)

        track = index.data(Qt.UserRole)
        if not track:
            return
        model = index.model()
        favorite = model.is_favorite(track.track_id)

        painter.save()
        font = QFont(option.font)
        font.setPointSizeF(font.pointSizeF() * 1.3)
        painter.setFont(font)
        painter.setPen(QColor("#facc15") if favorite else QColor("#6b7280"))
        painter.drawText(self._star_rect(option.rect), Qt.AlignCenter, STAR_ON if favorite else STAR_OFF)
        painter.restore()

    def editorEvent(self, event, model, option, index):
        if index.column() != FAVORITE_COLUMN:
            return False
        if event.type() == QEvent.Type.MouseButtonRelease and event.button() == Qt.LeftButton:
            track = index.data(Qt.UserRole)
            if not track:
                return False
            if self._star_rect(option.rect).contains(event.position().toPoint()):
                self.favoriteClicked.emit(int(track.track_id))
                return True
        return False
