# gui/dialogs/settings_dialog.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox, QDialog, QFormLayout, QHBoxLayout, QPushButton, QVBoxLayout
)

from core.settings import SettingsStore
from gui.unit_system import SettingsAwareMixin

log = logging.getLogger(__name__)

# (setting name, row label, [(choice value, choice text), ...])
SETTING_CHOICES: List[Tuple[str, str, List[Tuple[str, str]]]] = [
    ("speedUnit", "Speed", [("knots", "Knots"), ("km/h", "km/h"), ("m/s", "m/s")]),
    ("distanceUnit", "Distance", [("nm", "Nautical miles"), ("km", "Kilometers"), ("m", "Meters")]),
    ("depthUnit", "Depth", [("feet", "Feet"), ("meters", "Meters")]),
    ("theme", "Theme", [("light", "Light"), ("dark", "Dark")]),
]


class SettingsDialog(QDialog, SettingsAwareMixin):
    """Settings modal; every change is written to the store straight away."""

    def __init__(self, store: SettingsStore, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
        self.setModal(True)

        self.store = store
        self.combos: Dict[str, QComboBox] = {}

        form = QFormLayout()
        for name, label, choices in SETTING_CHOICES:
            combo = QComboBox()
            for value, text in choices:
                combo.addItem(text, value)
            form.addRow(label, combo)
            self.combos[name] = combo

        self.btn_defaults = QPushButton("Restore Defaults")
        self.btn_close = QPushButton("Close")

        btns = QHBoxLayout()
        btns.addWidget(self.btn_defaults); btns.addStretch()
        btns.addWidget(self.btn_close)

        root = QVBoxLayout(self)
        root.addLayout(form); root.addLayout(btns)

        # wire events
        self.btn_defaults.clicked.connect(lambda: self.store.reset())
        self.btn_close.clicked.connect(self.accept)
        self.finished.connect(lambda *_: self.unbind_settings())

        # keep combos in sync with changes made elsewhere
        self.bind_settings(store, list(self.combos))

        # connect only after the initial sync so populating does not write back
        for name, combo in self.combos.items():
            combo.currentIndexChanged.connect(lambda _i, _name=name: self._on_combo_changed(_name))

    # ---------- SettingsAwareMixin hook ----------
    def update_setting(self, name: str, value: Any) -> None:
        combo = self.combos.get(name)
        if combo is None:
            return
        idx = combo.findData(value)
        if idx < 0:
            # values are not restricted to the known choices; show them anyway
            combo.blockSignals(True)
            combo.addItem(str(value), value)
            combo.blockSignals(False)
            idx = combo.count() - 1
        if idx != combo.currentIndex():
            combo.blockSignals(True)
            combo.setCurrentIndex(idx)
            combo.blockSignals(False)

    # ---------- events ----------
    def _on_combo_changed(self, name: str) -> None:
        value = self.combos[name].currentData()
        log.debug("Settings dialog: %s -> %s", name, value)
        self.store.set(name, value)
