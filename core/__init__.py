# core/__init__.py

from .unit_converter import ConversionResult, Metric, UnitConverter, convert_value, convert_wind_angle
from .units import to_degrees, to_radians
from .settings import DEFAULT_SETTINGS, SETTINGS_KEY, SettingsStore

__all__ = [
    "ConversionResult",
    "Metric",
    "UnitConverter",
    "convert_value",
    "convert_wind_angle",
    "to_degrees",
    "to_radians",
    "DEFAULT_SETTINGS",
    "SETTINGS_KEY",
    "SettingsStore",
]
