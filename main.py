# main.py

import logging
import sys

from PySide6.QtWidgets import QApplication

from core.logging_setup import configure_logging
from core.settings import SettingsStore
from gui.main_window import MainWindow
from gui.theme import QtThemeApplier
from services.persistence import ConfigManager, StorageError

log = logging.getLogger(__name__)


def build_store(app: QApplication) -> SettingsStore:
    try:
        storage = ConfigManager()
    except StorageError as e:
        log.warning("Settings will not persist: %s", e)
        storage = None
    store = SettingsStore(storage, apply_settings=QtThemeApplier(app))
    store.apply()
    return store


if __name__ == "__main__":
    configure_logging()
    app = QApplication(sys.argv)
    store = build_store(app)
    window = MainWindow(store)
    window.resize(900, 600)
    window.show()
    sys.exit(app.exec())
