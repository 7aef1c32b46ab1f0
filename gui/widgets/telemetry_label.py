# gui/widgets/telemetry_label.py
from __future__ import annotations

from typing import Any, Optional

from PySide6.QtWidgets import QGroupBox, QLabel, QVBoxLayout, QWidget

from core.settings import METRIC_UNIT_SETTINGS, SettingsStore
from core.unit_converter import ConversionResult, Metric, convert_value
from gui.unit_system import SettingsAwareMixin

_TITLES = {
    Metric.DEPTH: "Depth",
    Metric.AWA: "Apparent Wind Angle",
    Metric.AWS: "Apparent Wind Speed",
    Metric.SOG: "Speed Over Ground",
    Metric.COG: "Course Over Ground",
    Metric.DISTANCE: "Distance",
}


class TelemetryLabel(QWidget, SettingsAwareMixin):
    """Shows the latest sample of one metric in the user's unit; re-renders when that unit changes."""

    def __init__(self, metric: Metric | str, store: SettingsStore, parent=None):
        super().__init__(parent)
        self.metric = Metric.lookup(metric)
        self.key = self.metric.value if self.metric is not None else str(metric)
        self.unit_setting: Optional[str] = METRIC_UNIT_SETTINGS.get(self.metric) if self.metric else None
        self._unit: Optional[str] = None
        self._sample: Any = None
        self.result: Optional[ConversionResult] = None

        self.group = QGroupBox(_TITLES.get(self.metric, self.key))
        vbox = QVBoxLayout(self.group)
        self.value_label = QLabel("--")
        self.value_label.setProperty("role", "value")
        vbox.addWidget(self.value_label)

        lay = QVBoxLayout(self)
        lay.addWidget(self.group)

        if self.unit_setting:
            self.bind_settings(store, [self.unit_setting])
        self.destroyed.connect(lambda *_: self.unbind_settings())

    # ---- SettingsAwareMixin hook ----
    def update_setting(self, name: str, value: Any) -> None:
        self._unit = value
        self.refresh()

    # ---- public API ----
    def set_sample(self, value: Any) -> None:
        self._sample = value
        self.refresh()

    def refresh(self) -> None:
        if self._sample is None and self.result is None:
            return
        self.result = convert_value(self.key, self._sample, self._unit)
        self.value_label.setText(self.result.text)

    def text(self) -> str:
        return self.value_label.text()
