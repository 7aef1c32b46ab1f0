# core/units.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class Unit:
    symbol: str
    label: str
    from_base: float
    aliases: Tuple[str, ...] = ()
    inverse: bool = False  # from_base is a divisor (km = m / 1000)

    def from_si(self, value: float) -> float:
        if self.inverse:
            return value / self.from_base
        return value * self.from_base


class UnitRegistry:
    """
    Display units of one telemetry category, keyed by symbol and aliases.
    Lookups are case-insensitive; anything unknown resolves to the default unit.
    """

    def __init__(self, units: Iterable[Unit], *, default_symbol: str):
        self._units: Dict[str, Unit] = {}
        self._default: str = default_symbol.upper()
        for u in units:
            for key in (u.symbol, *u.aliases):
                k = key.upper()
                if k in self._units:
                    raise ValueError(f"Duplicate unit key: {key}")
                self._units[k] = u
        if self._default not in self._units:
            raise ValueError(f"Default unit '{default_symbol}' not present.")

    @property
    def default(self) -> Unit:
        return self._units[self._default]

    def get(self, u: Optional[str]) -> Optional[Unit]:
        if not isinstance(u, str):
            return None
        return self._units.get(u.strip().upper())

    def normalize(self, u: Optional[str]) -> Unit:
        return self.get(u) or self.default


# Depth (base: meters)
DEPTH = UnitRegistry(
    units=(
        Unit("meters", "m", 1.0, aliases=("M", "METER", "METRES")),
        Unit("feet", "ft", 3.28084, aliases=("FT", "FOOT")),
    ),
    default_symbol="meters",
)

# Speed (base: m/s)
SPEED = UnitRegistry(
    units=(
        Unit("m/s", "m/s", 1.0, aliases=("MPS",)),
        Unit("knots", "knots", 1.94384, aliases=("KN", "KT", "KTS")),
        Unit("km/h", "km/h", 3.6, aliases=("KMH", "KPH")),
    ),
    default_symbol="m/s",
)

# Distance (base: meters)
DISTANCE = UnitRegistry(
    units=(
        Unit("m", "m", 1.0, aliases=("METERS", "METER", "METRES")),
        Unit("nm", "nm", 0.000539957, aliases=("NMI",)),
        Unit("km", "km", 1000.0, inverse=True),
    ),
    default_symbol="m",
)


def to_radians(degrees: float) -> float:
    return degrees * (math.pi / 180)


def to_degrees(radians: float) -> float:
    return radians * (180 / math.pi)
