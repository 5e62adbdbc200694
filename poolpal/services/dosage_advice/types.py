"""Data contracts for the dosage-advice client.

Synopsis:
Immutable request/response values exchanged with the advisory backend, the
fixed water targets, and the client's error types.

Glossary:
- Target chlorine / pH: Fixed levels every suggestion aims for.
- pH-minus: Product category that lowers water pH.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from poolpal.services.tools.pool_calculator import PoolGeometry, WaterReading

TARGET_CHLORINE = 1.25  # mg/l
TARGET_PH = 7.3


class AdvisoryFailure(RuntimeError):
    """Raised when a dosage-advice round trip fails for any reason."""


class AdvisoryBusy(RuntimeError):
    """Raised when a submission arrives while a request is still in flight."""


@dataclass(frozen=True)
class DosageRequest:
    pool_length: float
    pool_width: float
    pool_average_depth: float
    current_chlorine: float
    current_ph: float
    target_chlorine: float = TARGET_CHLORINE
    target_ph: float = TARGET_PH

    @classmethod
    def build(cls, geometry: PoolGeometry, reading: WaterReading) -> "DosageRequest":
        """Build the request from validated geometry and readings."""
        return cls(
            pool_length=float(geometry.length),
            pool_width=float(geometry.width),
            pool_average_depth=float(geometry.average_depth),
            current_chlorine=float(reading.chlorine),
            current_ph=float(reading.ph),
        )

    def to_payload(self) -> dict[str, float]:
        return {
            "poolLength": self.pool_length,
            "poolWidth": self.pool_width,
            "poolAverageDepth": self.pool_average_depth,
            "currentChlorine": self.current_chlorine,
            "currentPH": self.current_ph,
            "targetChlorine": self.target_chlorine,
            "targetPH": self.target_ph,
        }


@dataclass(frozen=True)
class DosageResponse:
    chlorine_dosage_suggestion: str
    ph_minus_dosage_suggestion: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DosageResponse":
        """Parse the backend's JSON object; anything short of both fields fails."""
        chlorine = payload.get("chlorineDosageSuggestion")
        ph_minus = payload.get("phMinusDosageSuggestion")
        if not isinstance(chlorine, str) or not chlorine.strip():
            raise AdvisoryFailure("Response is missing chlorineDosageSuggestion.")
        if not isinstance(ph_minus, str) or not ph_minus.strip():
            raise AdvisoryFailure("Response is missing phMinusDosageSuggestion.")
        return cls(
            chlorine_dosage_suggestion=chlorine.strip(),
            ph_minus_dosage_suggestion=ph_minus.strip(),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "chlorineDosageSuggestion": self.chlorine_dosage_suggestion,
            "phMinusDosageSuggestion": self.ph_minus_dosage_suggestion,
        }


__all__ = [
    "TARGET_CHLORINE",
    "TARGET_PH",
    "AdvisoryFailure",
    "AdvisoryBusy",
    "DosageRequest",
    "DosageResponse",
]
