"""Dosage-advice client package.

Synopsis:
Exports the request/response contracts, the Gemini-backed advice service and
the per-session in-flight guard used by the pool page and the public API.

Glossary:
- Advisory failure: The single failure signal of a dosage-advice round trip.
"""

from .prompt import PH_MINUS_GRANULAR, PH_MINUS_LIQUID, PH_MINUS_PRODUCTS, build_prompt
from .service import DosageAdviceService, has_disclaimer
from .session import AdvisorySession, AdvisorySessionRegistry, AdvisoryState
from .types import (
    TARGET_CHLORINE,
    TARGET_PH,
    AdvisoryBusy,
    AdvisoryFailure,
    DosageRequest,
    DosageResponse,
)

__all__ = [
    "DosageAdviceService",
    "DosageRequest",
    "DosageResponse",
    "AdvisoryFailure",
    "AdvisoryBusy",
    "AdvisorySession",
    "AdvisorySessionRegistry",
    "AdvisoryState",
    "TARGET_CHLORINE",
    "TARGET_PH",
    "PH_MINUS_GRANULAR",
    "PH_MINUS_LIQUID",
    "PH_MINUS_PRODUCTS",
    "build_prompt",
    "has_disclaimer",
]
