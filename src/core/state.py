from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

from core.config import Settings
from core.location import BASE_LOCATION

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify
    location_changed = Signal(str)

    def __init__(self, settings: Settings | None = None):
        super().__init__()
        self.settings = settings or Settings()
        self.app_data_dir: str | None = None
        self.db_path: str | None = None
        self.db = None
        self.favorites = None
        self.location = BASE_LOCATION
        self.queued_notifications: list[Notify] = []

    def set_location(self, location: str):
        if location == self.location:
            return
        self.location = location
        self.location_changed.emit(location)

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))
