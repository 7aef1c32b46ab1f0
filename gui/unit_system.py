# gui/unit_system.py
from __future__ import annotations

from typing import Any, Iterable, Optional

from core.settings import SettingsStore


# ======================================================================
# Helper mixin for auto-updating widgets when settings change
# ======================================================================

class SettingsAwareMixin:
    """
    Bind once; react in update_setting.
    Listeners are removed again in unbind_settings (call it before the widget goes away).
    """
    _store: Optional[SettingsStore] = None
    _setting_handles: list

    def bind_settings(self, store: Optional[SettingsStore], names: Iterable[str]) -> None:
        self.unbind_settings()
        self._store = store
        if store is None:
            return
        for name in names:
            # initial sync
            self.update_setting(name, store.get(name))
            # subscribe
            handle = store.add_listener(name, lambda value, _name=name: self.update_setting(_name, value))
            self._setting_handles.append((name, handle))

    def unbind_settings(self) -> None:
        handles = getattr(self, "_setting_handles", None)
        if handles and self._store is not None:
            for name, handle in handles:
                self._store.remove_listener(name, handle)
        self._setting_handles = []

    def update_setting(self, name: str, value: Any) -> None:
        pass
