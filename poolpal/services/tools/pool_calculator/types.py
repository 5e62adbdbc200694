"""Data contracts for the pool derived-values calculator.

Synopsis:
Typed geometry/reading inputs and the derived-values result used by the pool
calculator service package.

Glossary:
- Geometry: Pool length, width and average depth, in metres.
- Derived values: Surface area, volume and salt figures computed from geometry.
- Salt system: Electrolytic chlorination needing a maintained salt concentration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

def _to_float(value: Any) -> float | None:
    """Coerce a loose payload value to a finite float, or None when unusable."""
    try:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, str):
            cleaned = value.replace(",", ".").strip()
            if cleaned == "":
                return None
            value = cleaned
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None

def _is_positive(value: float | None) -> bool:
    return value is not None and value > 0

def _round2(value: float | None) -> float | None:
    if value is None:
        return None
    return round(value, 2)

def _pick(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload.get(key)
    return None

@dataclass(frozen=True)
class PoolGeometry:
    length: float | None = None
    width: float | None = None
    average_depth: float | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PoolGeometry":
        return cls(
            length=_to_float(_pick(payload, "pool_length", "poolLength", "length")),
            width=_to_float(_pick(payload, "pool_width", "poolWidth", "width")),
            average_depth=_to_float(
                _pick(payload, "pool_average_depth", "poolAverageDepth", "average_depth")
            ),
        )

@dataclass(frozen=True)
class WaterReading:
    """Latest water test. Chlorine (mg/l) and pH gate advice; the rest is optional."""

    chlorine: float | None = None
    ph: float | None = None
    redox: float | None = None
    salt: float | None = None
    water_temperature: float | None = None

@dataclass(frozen=True)
class PoolCalculationRequest:
    geometry: PoolGeometry
    current_salt: float | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PoolCalculationRequest":
        return cls(
            geometry=PoolGeometry.from_payload(payload),
            current_salt=_to_float(_pick(payload, "current_salt", "currentSalt", "salt")),
        )

@dataclass(frozen=True)
class DerivedValues:
    surface_area: float | None = None
    volume_m3: float | None = None
    volume_liters: float | None = None
    required_salt_total: float | None = None
    salt_to_add: float | None = None
    assumed_zero_salt: bool = False

    @property
    def has_volume(self) -> bool:
        return self.volume_m3 is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "surface_area": self.surface_area,
            "volume_m3": self.volume_m3,
            "volume_liters": self.volume_liters,
            "required_salt_total": self.required_salt_total,
            "salt_to_add": self.salt_to_add,
            "assumed_zero_salt": self.assumed_zero_salt,
        }

__all__ = [
    "PoolGeometry",
    "WaterReading",
    "PoolCalculationRequest",
    "DerivedValues",
    "_is_positive",
    "_round2",
    "_to_float",
]
