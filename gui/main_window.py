# gui/main_window.py

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QAbstractItemView,
    QGridLayout,
    QGroupBox,
    QHeaderView,
    QMainWindow,
    QTableWidget,
    QTableWidgetItem,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from core.settings import SettingsStore
from core.unit_converter import Metric
from gui.dialogs.settings_dialog import SettingsDialog
from gui.unit_system import SettingsAwareMixin
from gui.widgets.telemetry_label import TelemetryLabel
from utils.telemetry_table import format_telemetry_frame


class MainWindow(QMainWindow, SettingsAwareMixin):

    def __init__(self, store: SettingsStore) -> None:

        super().__init__()

        self.setWindowTitle("Killick")

        # ---- Core systems ----
        self.store = store
        self.settings_dialog: Optional[SettingsDialog] = None
        self._log: Optional[pd.DataFrame] = None

        # ---- Central UI ----
        central_widget = QWidget()
        main_layout = QVBoxLayout(central_widget)
        self.setCentralWidget(central_widget)

        # Live instruments, two per row
        grid = QGridLayout()
        self.instruments: Dict[Metric, TelemetryLabel] = {}
        for i, metric in enumerate(Metric):
            label = TelemetryLabel(metric, store, self)
            grid.addWidget(label, i // 2, i % 2)
            self.instruments[metric] = label
        main_layout.addLayout(grid)

        # Recent samples
        log_group = QGroupBox("Recent Samples")
        log_box = QVBoxLayout(log_group)
        self.table = QTableWidget(0, 0)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        log_box.addWidget(self.table)
        main_layout.addWidget(log_group)

        # ---- Toolbar ----
        toolbar = QToolBar("Main")
        self.addToolBar(toolbar)
        self.act_settings = QAction("Settings…", self)
        self.act_settings.triggered.connect(self.open_settings)
        toolbar.addAction(self.act_settings)

        # table follows every unit setting
        self.bind_settings(store, ["speedUnit", "distanceUnit", "depthUnit"])

    # ---- public API ----
    def update_sample(self, key: str, value: Any) -> None:
        label = self.instruments.get(Metric.lookup(key))
        if label is not None:
            label.set_sample(value)

    def show_log(self, df: pd.DataFrame) -> None:
        self._log = df
        self._refresh_table()

    def open_settings(self) -> SettingsDialog:
        if self.settings_dialog is None:
            self.settings_dialog = SettingsDialog(self.store, self)
            self.settings_dialog.finished.connect(self._on_settings_closed)
        self.settings_dialog.show()
        return self.settings_dialog

    # ---- SettingsAwareMixin hook ----
    def update_setting(self, name: str, value: Any) -> None:
        self._refresh_table()

    # ---- internals ----
    def _on_settings_closed(self, *_):
        self.settings_dialog = None

    def _refresh_table(self) -> None:
        if self._log is None:
            return
        shown = format_telemetry_frame(self._log, self.store)
        self.table.setColumnCount(len(shown.columns))
        self.table.setHorizontalHeaderLabels([str(c) for c in shown.columns])
        self.table.setRowCount(len(shown))
        for r, (_, row) in enumerate(shown.iterrows()):
            for c, v in enumerate(row):
                self.table.setItem(r, c, QTableWidgetItem(str(v)))
