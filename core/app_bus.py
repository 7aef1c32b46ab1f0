# core/app_bus.py
from __future__ import annotations

from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from core.settings import SettingsStore


class AppBus(QObject):
    """
    Signal hub for Qt widgets that would rather connect than register callbacks.
    """

    # ---- Settings ----
    settingChanged = Signal(str, object)  # (name, value)


def bind_settings(store: SettingsStore, bus: AppBus, names: Optional[Iterable[str]] = None) -> list:
    """Forward store changes for ``names`` (default: every default setting) onto ``bus``.

    Returns the registered listener handles so callers can unbind.
    """
    handles = []
    for name in (names if names is not None else store.defaults):
        def _forward(value, _name=name):
            bus.settingChanged.emit(_name, value)
        handles.append((name, store.add_listener(name, _forward)))
    return handles


def unbind_settings(store: SettingsStore, handles: list) -> None:
    for name, handle in handles:
        store.remove_listener(name, handle)
