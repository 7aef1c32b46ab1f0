# tests/test_gui.py

import pandas as pd
import pytest

from core.app_bus import AppBus, bind_settings, unbind_settings
from core.settings import SettingsStore
from core.unit_converter import Metric
from gui.dialogs.settings_dialog import SettingsDialog
from gui.main_window import MainWindow
from gui.theme import QtThemeApplier
from gui.widgets.telemetry_label import TelemetryLabel
from services.persistence import MemoryStorage


@pytest.fixture
def store():
    return SettingsStore(MemoryStorage())


# ---- bus ----

def test_bus_forwards_setting_changes(qapp, store):
    bus = AppBus()
    received = []
    bus.settingChanged.connect(lambda name, value: received.append((name, value)))

    handles = bind_settings(store, bus)
    store.set("theme", "dark")
    store.set("speedUnit", "km/h")
    unbind_settings(store, handles)
    store.set("theme", "light")

    assert received == [("theme", "dark"), ("speedUnit", "km/h")]
    assert store.listener_count("theme") == 0


# ---- theme ----

def test_theme_applier_toggles_dark(clean_theme):
    applier = QtThemeApplier(clean_theme)
    store = SettingsStore(MemoryStorage(), apply_settings=applier)

    store.set("theme", "dark")
    assert applier.is_dark()
    assert "background-color" in clean_theme.styleSheet()

    store.set("speedUnit", "m/s")  # unrelated change re-applies, still dark
    assert applier.is_dark()

    store.set("theme", "light")
    assert not applier.is_dark()
    assert clean_theme.styleSheet() == ""


# ---- telemetry label ----

def test_label_renders_and_follows_unit(qapp, store):
    label = TelemetryLabel("SOG", store)
    assert label.text() == "--"

    label.set_sample(5)
    assert label.text() == "9.7 knots"

    store.set("speedUnit", "km/h")
    assert label.text() == "18 km/h"

    label.unbind_settings()
    assert store.listener_count("speedUnit") == 0


def test_label_for_fixed_unit_metric(qapp, store):
    label = TelemetryLabel(Metric.AWA, store)
    label.set_sample(-0.5)
    assert label.text() == "29° port"
    assert label.unit_setting is None


# ---- settings dialog ----

def test_dialog_reflects_and_writes_settings(qapp, store):
    store.set("depthUnit", "meters")
    dlg = SettingsDialog(store)
    try:
        assert dlg.combos["depthUnit"].currentData() == "meters"
        assert dlg.combos["theme"].currentData() == "light"

        theme = dlg.combos["theme"]
        theme.setCurrentIndex(theme.findData("dark"))
        assert store.get("theme") == "dark"

        store.set("distanceUnit", "km")
        assert dlg.combos["distanceUnit"].currentData() == "km"

        store.set("speedUnit", "furlongs")
        assert dlg.combos["speedUnit"].currentData() == "furlongs"

        dlg.btn_defaults.click()
        assert store.get("theme") == "light"
        assert store.get("speedUnit") == "knots"
        assert dlg.combos["speedUnit"].currentData() == "knots"
    finally:
        dlg.unbind_settings()


def test_opening_dialog_does_not_write(qapp):
    storage = MemoryStorage()
    store = SettingsStore(storage)
    dlg = SettingsDialog(store)
    dlg.unbind_settings()
    assert storage.get("killick-settings") is None


# ---- main window ----

def test_main_window_samples_and_table(qapp, store):
    w = MainWindow(store)

    w.update_sample("SOG", 5)
    w.update_sample("Foo", 1)  # not an instrument
    assert w.instruments[Metric.SOG].text() == "9.7 knots"

    w.show_log(pd.DataFrame({"SOG": [5.0], "Depth": [10.0]}))
    assert w.table.columnCount() == 2
    assert w.table.item(0, 0).text() == "9.7 knots"
    assert w.table.item(0, 1).text() == "33 ft"

    store.set("speedUnit", "m/s")
    assert w.table.item(0, 0).text() == "5.0 m/s"
    assert w.instruments[Metric.SOG].text() == "5.0 m/s"


def test_main_window_settings_action(qapp, store):
    w = MainWindow(store)
    dlg = w.open_settings()
    assert isinstance(dlg, SettingsDialog)
    assert w.open_settings() is dlg
    dlg.reject()
    assert w.settings_dialog is None


# ---- composition root ----

def test_build_store_persists_under_home(clean_theme, tmp_path, monkeypatch):
    from main import build_store

    monkeypatch.setenv("KILLICK_HOME", str(tmp_path))
    store = build_store(clean_theme)
    store.set("theme", "dark")

    assert clean_theme.property("darkTheme")
    assert (tmp_path / "killick-settings.json").exists()
