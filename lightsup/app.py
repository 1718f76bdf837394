"""Application entry point and setup for LightsUp."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from lightsup.core.config import load_config
from lightsup.core.preferences import PreferencesStore
from lightsup.core.records import BestRecordStore
from lightsup.core.session import GameSession
from lightsup.core.storage import JsonFileStorage
from lightsup.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_session() -> GameSession:
    """Wire the engine to on-disk storage and the bundled config."""
    storage = JsonFileStorage()
    logging.info(f"Using storage file: {storage.file_path}")
    return GameSession(
        records=BestRecordStore(storage),
        preferences_store=PreferencesStore(storage),
        config=load_config(),
    )


def run() -> None:
    """Initialize the application and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("LightsUp")
    app.setApplicationDisplayName("LightsUp")

    window = MainWindow(build_session())
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1100, geometry.width()), min(800, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
