"""Canonical advisory prompt and the knowledge constants handed to the backend.

Synopsis:
One prompt template for every dosage request. The pH-minus product form is the
only variable part of the knowledge base and is chosen by configuration.

Glossary:
- Dichlor: Granular chlorine-releasing compound.
- pH-minus product: Granular (default) or liquid pH reducer.
"""

from __future__ import annotations

from .types import DosageRequest

PH_MINUS_GRANULAR = "granular"
PH_MINUS_LIQUID = "liquid"
PH_MINUS_PRODUCTS = (PH_MINUS_GRANULAR, PH_MINUS_LIQUID)

CHLORINE_KNOWLEDGE = (
    "Approximately 150g of granular dichlor or 100ml of liquid chlorine increases "
    "chlorine by 1 mg/l per 10 cubic meters."
)
PH_MINUS_KNOWLEDGE = {
    PH_MINUS_GRANULAR: (
        "Approximately 200g of granular pH-reducer (or equivalent powder) decreases pH "
        "by 0.1 units per 10 cubic meters."
    ),
    PH_MINUS_LIQUID: (
        "Approximately 250ml of liquid pH-reducer decreases pH by 0.1 units per 10 cubic meters."
    ),
}
PH_MINUS_PRODUCT_LABEL = {
    PH_MINUS_GRANULAR: "granular pH-reducer",
    PH_MINUS_LIQUID: "liquid pH-reducer",
}

LANGUAGE_NAMES = {"it": "Italian", "en": "English"}

SYSTEM_INSTRUCTION = (
    "You are a swimming-pool water chemistry assistant. Base every dosage only on the "
    "supplied knowledge base, never invent product constants, and answer with a single "
    "JSON object and nothing else."
)

_TEMPLATE = """Given the pool dimensions and current water parameters, provide suggestions for adjusting chlorine and pH levels.

Pool Dimensions:
- Length: {poolLength:g} meters
- Width: {poolWidth:g} meters
- Average Depth: {poolAverageDepth:g} meters

Current Water Parameters:
- Chlorine: {currentChlorine:g} mg/l
- pH: {currentPH:g}

Target Water Parameters:
- Target Chlorine: {targetChlorine:g} mg/l
- Target pH: {targetPH:g}

Instructions:
1. Calculate the pool volume in cubic meters (length * width * average depth).
2. Provide a chlorine dosage suggestion to reach the target chlorine level ({targetChlorine:g} mg/l) from the current level ({currentChlorine:g} mg/l).
   - Include the approximate amount of granular dichlor or liquid chlorine needed, using the knowledge base.
3. Provide a pH- dosage suggestion to reach the target pH level ({targetPH:g}) from the current level ({currentPH:g}).
   - Include the approximate amount of {ph_minus_label} needed, using the knowledge base.
   - If the current pH is already at or below the target, say that no pH- is needed.
4. In each suggestion, include a disclaimer stating that all dosages need to be calibrated according to the specific products used.
5. Write both suggestions in {language}.

Output Format (JSON only):
{{
  "chlorineDosageSuggestion": "Suggestion for chlorine dosage, including the disclaimer.",
  "phMinusDosageSuggestion": "Suggestion for pH- dosage, including the disclaimer."
}}

Knowledge Base:
- {chlorine_knowledge}
- {ph_minus_knowledge}
"""


def build_prompt(request: DosageRequest, *, locale: str, ph_minus_product: str) -> str:
    if ph_minus_product not in PH_MINUS_KNOWLEDGE:
        raise ValueError(f"Unknown pH-minus product {ph_minus_product!r}.")
    return _TEMPLATE.format(
        **request.to_payload(),
        ph_minus_label=PH_MINUS_PRODUCT_LABEL[ph_minus_product],
        language=LANGUAGE_NAMES.get(locale, LANGUAGE_NAMES["it"]),
        chlorine_knowledge=CHLORINE_KNOWLEDGE,
        ph_minus_knowledge=PH_MINUS_KNOWLEDGE[ph_minus_product],
    )
