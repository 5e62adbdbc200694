"""Derived-values engine for the pool calculator.

Synopsis:
Deterministic recomputation of surface area, volume and salt requirement from
pool geometry and the current salt reading. Insufficient input yields absent
fields, never an error.

Glossary:
- Required salt: Total salt for the pool at the salt-system target concentration.
- Salt to add: Required salt minus the salt already dissolved, floored at zero.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from .types import (
    DerivedValues,
    PoolCalculationRequest,
    PoolGeometry,
    _is_positive,
    _round2,
)


class PoolCalculatorService:
    """Recomputes every derived value wholesale on each call."""

    SALT_KG_PER_M3 = 4.0
    LITERS_PER_M3 = 1000.0

    @classmethod
    def calculate(cls, payload: Mapping[str, Any] | None) -> DerivedValues:
        """Calculate derived values from loose form/JSON payload data."""
        request = PoolCalculationRequest.from_payload(payload or {})
        return cls.calculate_from_request(request)

    @classmethod
    def calculate_from_request(cls, request: PoolCalculationRequest) -> DerivedValues:
        geometry = request.geometry
        if not (_is_positive(geometry.length) and _is_positive(geometry.width)):
            return DerivedValues()

        # Overflowing products count as insufficient input, like non-positive ones.
        surface = geometry.length * geometry.width
        if not math.isfinite(surface):
            return DerivedValues()
        if not _is_positive(geometry.average_depth):
            return DerivedValues(surface_area=_round2(surface))

        # Each field is rounded on its own; the chain below stays unrounded.
        volume = surface * geometry.average_depth
        volume_liters = volume * cls.LITERS_PER_M3
        required_salt = volume * cls.SALT_KG_PER_M3
        if not all(math.isfinite(value) for value in (volume, volume_liters, required_salt)):
            return DerivedValues(surface_area=_round2(surface))

        current_salt = request.current_salt
        assumed_zero_salt = current_salt is None or current_salt < 0
        if assumed_zero_salt:
            salt_to_add = required_salt
        else:
            salt_to_add = max(0.0, required_salt - current_salt)

        return DerivedValues(
            surface_area=_round2(surface),
            volume_m3=_round2(volume),
            volume_liters=_round2(volume_liters),
            required_salt_total=_round2(required_salt),
            salt_to_add=_round2(salt_to_add),
            assumed_zero_salt=assumed_zero_salt,
        )


def compute(geometry: PoolGeometry, current_salt: float | None = None) -> DerivedValues:
    """Recompute derived values; call after every geometry or salt change."""
    return PoolCalculatorService.calculate_from_request(
        PoolCalculationRequest(geometry=geometry, current_salt=current_salt)
    )
