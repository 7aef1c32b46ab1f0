# core/settings.py
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

import jsonschema

from core.unit_converter import Metric
from services.persistence import KeyValueStorage

log = logging.getLogger(__name__)

SETTINGS_KEY = "killick-settings"

DEFAULT_SETTINGS: Dict[str, str] = {
    "speedUnit": "knots",
    "distanceUnit": "nm",
    "depthUnit": "feet",
    "theme": "light",
}

# Which setting holds the target unit for a metric (metrics absent here have a fixed unit)
METRIC_UNIT_SETTINGS: Dict[Metric, str] = {
    Metric.DEPTH: "depthUnit",
    Metric.AWS: "speedUnit",
    Metric.SOG: "speedUnit",
    Metric.DISTANCE: "distanceUnit",
}

# Persisted blob is a JSON object; only its string-valued entries are loaded
SETTINGS_BLOB_SCHEMA: Dict[str, Any] = {"type": "object"}
SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

Listener = Callable[[Any], None]


class SettingsStore:
    """
    Display settings with persistence and per-name change listeners.

    ``set`` persists the whole map, notifies listeners of that name
    synchronously and then runs ``apply_settings(store)``. Storage and listener
    failures are logged and never reach the caller.

    Listeners are keyed by the callback itself, so callbacks must be hashable
    (functions, bound methods and lambdas are); ``add_listener`` raises
    TypeError for anything else.

    Not thread-safe; use it from the UI thread only.
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        *,
        apply_settings: Optional[Callable[["SettingsStore"], None]] = None,
        defaults: Optional[Mapping[str, str]] = None,
        key: str = SETTINGS_KEY,
    ) -> None:
        self._storage = storage
        self._apply_settings = apply_settings
        self._defaults: Dict[str, str] = dict(DEFAULT_SETTINGS if defaults is None else defaults)
        self._key = key
        self._listeners: Dict[str, Dict[Listener, None]] = {}
        self._settings: Dict[str, Any] = self.load()

    # ---- persistence ----
    def load(self) -> Dict[str, Any]:
        """Defaults overlaid with whatever valid blob storage holds."""
        settings: Dict[str, Any] = dict(self._defaults)
        if self._storage is None:
            log.warning("Settings storage unavailable; using defaults")
            return settings
        try:
            raw = self._storage.get(self._key)
            if raw is None:
                log.warning("No stored settings under %r; using defaults", self._key)
                return settings
            parsed = json.loads(raw)
            jsonschema.validate(instance=parsed, schema=SETTINGS_BLOB_SCHEMA)
            bad = {e.path[0] for e in jsonschema.Draft7Validator(SETTINGS_SCHEMA).iter_errors(parsed) if e.path}
            for name in sorted(bad):
                log.warning("Ignoring stored setting %r: %r is not a string", name, parsed[name])
            settings.update({k: v for k, v in parsed.items() if k not in bad})
        except Exception as e:
            log.warning("Failed to load settings from storage: %s", e)
            return dict(self._defaults)
        return settings

    def save(self) -> None:
        if self._storage is None:
            log.error("Failed to save settings: storage unavailable")
            return
        try:
            self._storage.set(self._key, json.dumps(self._settings))
        except Exception as e:
            log.error("Failed to save settings to storage: %s", e)

    # ---- access ----
    def get(self, name: str, default: Any = None) -> Any:
        return self._settings.get(name, default)

    def all(self) -> Dict[str, Any]:
        return dict(self._settings)

    @property
    def defaults(self) -> Dict[str, str]:
        return dict(self._defaults)

    def set(self, name: str, value: Any) -> None:
        if name in self._settings and self._settings[name] == value:
            return
        self._settings[name] = value
        self.save()
        self._notify(name, value)
        self.apply()

    def reset(self) -> None:
        """Put every default setting back; custom names are left alone."""
        for name, value in self._defaults.items():
            self.set(name, value)

    def apply(self) -> None:
        if self._apply_settings is None:
            return
        try:
            self._apply_settings(self)
        except Exception:
            log.exception("Failed to apply settings")

    # ---- listeners ----
    def add_listener(self, name: str, callback: Listener) -> Listener:
        self._listeners.setdefault(name, {})[callback] = None
        return callback

    def remove_listener(self, name: str, callback: Listener) -> None:
        callbacks = self._listeners.get(name)
        if callbacks is not None:
            callbacks.pop(callback, None)

    def listener_count(self, name: str) -> int:
        return len(self._listeners.get(name, ()))

    def _notify(self, name: str, value: Any) -> None:
        for callback in list(self._listeners.get(name, ())):
            try:
                callback(value)
            except Exception:
                log.exception("Error in settings listener for %s", name)
