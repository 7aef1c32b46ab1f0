# gui/theme.py
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QApplication

DARK_THEME = "dark"
DARK_PROPERTY = "darkTheme"

DARK_STYLESHEET = """
QWidget { background-color: #1e232b; color: #e6e9ef; }
QGroupBox { border: 1px solid #3a4250; margin-top: 8px; }
QComboBox, QPushButton { background-color: #2a313c; border: 1px solid #3a4250; padding: 3px 6px; }
QLabel[role="value"] { color: #7fd1ff; }
"""


class QtThemeApplier:
    """
    Applies the ``theme`` setting to the running QApplication.
    Called with the settings store after every change; only "dark" turns the dark theme on.
    """

    def __init__(self, app: Optional[QApplication] = None):
        self._app = app

    @property
    def app(self) -> Optional[QApplication]:
        return self._app or QApplication.instance()

    def __call__(self, store) -> None:
        self.apply(store.get("theme"))

    def apply(self, theme: Optional[str]) -> None:
        app = self.app
        if app is None:
            return
        dark = theme == DARK_THEME
        app.setStyleSheet(DARK_STYLESHEET if dark else "")
        app.setProperty(DARK_PROPERTY, dark)

    def is_dark(self) -> bool:
        app = self.app
        return bool(app is not None and app.property(DARK_PROPERTY))
