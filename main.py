import logging
import os
import sqlite3
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import Settings, load_settings
from core.favorites import FavoriteSet
from core.location import location_from_argv, query_from_location
from core.state import AppState, Notify
from db.database import database_path, initialize_database
from db.queries import get_last_location, set_favorites
from ui.main_window import MainWindow

logger = logging.getLogger("itunes_search")

def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # keep connection-pool chatter out of debug output
    logging.getLogger("urllib3").setLevel(logging.WARNING)

def get_app_data_dir(settings: Settings) -> str:
    base = settings.data_dir or QStandardPaths.writableLocation(QStandardPaths.AppDataLocation)
    os.makedirs(base, exist_ok=True)
    return base

def init_app_state(settings: Settings) -> AppState:
    app_state = AppState(settings)

    app_data_dir = get_app_data_dir(settings)
    app_state.app_data_dir = app_data_dir
    app_state.db_path = database_path(app_data_dir)

    try:
        app_state.db = initialize_database(app_data_dir)
    except sqlite3.Error as e:
        logger.exception("Failed to open local storage")
        app_state.db = None
        app_state.db_path = None
        app_state.queued_notifications.append(
            Notify(message=f"Favorites will not be saved: {e}", notify_type="error")
        )

    db = app_state.db
    app_state.favorites = FavoriteSet(
        persist=(lambda tracks: set_favorites(db, tracks)) if db is not None else None
    )

    return app_state

def resolve_initial_location(app_state: AppState, argv: list[str]) -> str | None:
    # a location passed on the command line wins over the one from last session
    location = location_from_argv(argv)
    if location is None and app_state.db is not None:
        try:
            location = get_last_location(app_state.db)
        except sqlite3.Error:
            logger.exception("Failed to read last location")
    return location

def main() -> int:
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("itunes-search")

    settings = load_settings()
    configure_logging(settings.debug)

    app_state = init_app_state(settings)
    initial_query = query_from_location(resolve_initial_location(app_state, sys.argv[1:]))

    main_window = MainWindow(app_state, initial_query=initial_query)
    main_window.show()

    return qt_app.exec()

if __name__ == "__main__":
    raise SystemExit(main())
