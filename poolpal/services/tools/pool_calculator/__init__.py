"""Pool calculator package.

Synopsis:
Exports typed geometry/reading contracts and the derived-values service used by
the pool page and the public recompute API.

Glossary:
- Derived values: Surface area, volumes and salt requirement for one geometry.
"""

from ._reference import IDEAL_RANGES, IdealRange
from .service import PoolCalculatorService, compute
from .types import DerivedValues, PoolCalculationRequest, PoolGeometry, WaterReading

__all__ = [
    "PoolCalculatorService",
    "compute",
    "PoolGeometry",
    "WaterReading",
    "PoolCalculationRequest",
    "DerivedValues",
    "IdealRange",
    "IDEAL_RANGES",
]
