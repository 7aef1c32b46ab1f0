# core/unit_converter.py
"""
Telemetry value -> display string conversion.

Every telemetry sample arrives in SI units (meters, meters/second, radians).
``convert_value`` maps a metric key, a raw sample and the user's target unit
to a ``ConversionResult`` the UI can render as ``value + unit_space + unit``.

Nothing here reads settings: callers pass the target unit explicitly.
Invalid samples never raise; they render as the ``--`` sentinel (or, for the
apparent wind angle, whatever the arithmetic produces).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Any, Callable, Dict, Optional

from core.units import DEPTH, DISTANCE, SPEED, to_degrees, to_radians

SENTINEL = "--"

# Upstream depth transducers report this (or more) when they have no bottom lock
DEPTH_INVALID = 42_000_000

# Speeds at or above this are shown without a decimal digit
SPEED_PRECISION_THRESHOLD = 9.999


class Metric(str, Enum):
    DEPTH = "Depth"
    AWA = "AWA"
    AWS = "AWS"
    SOG = "SOG"
    COG = "COG"
    DISTANCE = "Distance"

    @classmethod
    def lookup(cls, key: Any) -> Optional["Metric"]:
        try:
            return cls(key)
        except (ValueError, TypeError):
            return None


@dataclass(frozen=True)
class ConversionResult:
    value: Any
    unit: str
    unit_space: str

    @property
    def text(self) -> str:
        return f"{self.value}{self.unit_space}{self.unit}"

    def as_dict(self) -> dict[str, Any]:
        return {"value": self.value, "unit": self.unit, "unitSpace": self.unit_space}

    def __str__(self) -> str:
        return self.text


# ---- formatting ----

def to_fixed(x: float, digits: int) -> str:
    """
    Fixed-decimal rendering with half-up rounding of the exact binary value,
    so 2.5 -> "3" and 0.05 -> "0.1" only when the double really is >= .05.
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if abs(x) >= 1e21:
        return repr(x)
    if x == 0:
        x = 0.0  # drop the sign of -0.0
    with localcontext() as ctx:
        ctx.prec = 64
        q = Decimal(x).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return str(q)


def _as_float(value: Any) -> float:
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


# ---- per-metric conversions ----

def _depth(value: Any, unit: Optional[str]) -> ConversionResult:
    target = DEPTH.normalize(unit)
    x = _as_float(value)
    if math.isnan(x) or x >= DEPTH_INVALID:
        return ConversionResult(SENTINEL, unit or target.label, " ")
    shown = target.from_si(x)
    return ConversionResult(to_fixed(shown, 0 if shown > 3 else 1), target.label, " ")


def _apparent_wind_angle(value: Any, unit: Optional[str]) -> ConversionResult:
    # No invalid-input guard here: NaN flows through and renders as "NaN".
    x = _as_float(value)
    side = "port" if x < 0 else "starboard"
    return ConversionResult(to_fixed(to_degrees(abs(x)), 0), f"° {side}", "")


def _speed(value: Any, unit: Optional[str]) -> ConversionResult:
    target = SPEED.normalize(unit)
    x = _as_float(value)
    if math.isnan(x):
        return ConversionResult(SENTINEL, target.label, " ")
    shown = target.from_si(x)
    digits = 0 if shown == 0 or abs(shown) >= SPEED_PRECISION_THRESHOLD else 1
    return ConversionResult(to_fixed(shown, digits), target.label, " ")


def _course_over_ground(value: Any, unit: Optional[str]) -> ConversionResult:
    x = _as_float(value)
    if math.isnan(x):
        return ConversionResult(SENTINEL, "° T", "")
    return ConversionResult(to_fixed(to_degrees(x), 0), "° T", "")


def _distance(value: Any, unit: Optional[str]) -> ConversionResult:
    target = DISTANCE.normalize(unit)
    x = _as_float(value)
    if math.isnan(x):
        return ConversionResult(SENTINEL, target.label, " ")
    shown = target.from_si(x)
    if target is DISTANCE.default:
        digits = 0 if x > 100 else 1
    else:
        digits = 1
    return ConversionResult(to_fixed(shown, digits), target.label, " ")


_CONVERTERS: Dict[Metric, Callable[[Any, Optional[str]], ConversionResult]] = {
    Metric.DEPTH: _depth,
    Metric.AWA: _apparent_wind_angle,
    Metric.AWS: _speed,
    Metric.SOG: _speed,
    Metric.COG: _course_over_ground,
    Metric.DISTANCE: _distance,
}

_missing = set(Metric) - set(_CONVERTERS)
if _missing:
    raise RuntimeError(f"No converter registered for: {sorted(m.value for m in _missing)}")


def convert_value(key: Any, value: Any, unit: Optional[str] = None) -> ConversionResult:
    """Convert a raw SI sample of metric ``key`` for display in ``unit``.

    Unknown keys pass the raw value through with no unit.
    """
    metric = Metric.lookup(key)
    if metric is None:
        return ConversionResult(value, "", "")
    return _CONVERTERS[metric](value, unit)


def convert_wind_angle(angle_radians: Any) -> ConversionResult:
    """Signed, unrounded degrees; invalid input reads as 0°."""
    x = _as_float(angle_radians)
    if math.isnan(x):
        return ConversionResult(0, "°", "")
    return ConversionResult(to_degrees(x), "°", "")


class UnitConverter:
    """Static facade over the module-level conversions."""

    convert_value = staticmethod(convert_value)
    convert_wind_angle = staticmethod(convert_wind_angle)
    to_radians = staticmethod(to_radians)
    to_degrees = staticmethod(to_degrees)
