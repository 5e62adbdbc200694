"""Reference water parameters shown beside the calculator results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdealRange:
    key: str
    minimum: float
    maximum: float
    unit: str

    def display_value(self) -> str:
        if self.minimum == self.maximum:
            return f"{self.minimum:g} {self.unit}".strip()
        return f"{self.minimum:g} – {self.maximum:g} {self.unit}".strip()

    def to_dict(self) -> dict[str, object]:
        return {
            "key": self.key,
            "min": self.minimum,
            "max": self.maximum,
            "unit": self.unit,
            "display": self.display_value(),
        }


IDEAL_RANGES: tuple[IdealRange, ...] = (
    IdealRange("chlorine", 1.0, 1.5, "mg/l"),
    IdealRange("ph", 7.2, 7.4, ""),
    IdealRange("redox", 750.0, 800.0, "mV"),
    IdealRange("salt", 4.0, 4.0, "kg/m³"),
)
