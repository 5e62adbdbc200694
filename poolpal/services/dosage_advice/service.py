from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Optional

from flask import current_app

from poolpal.services.ai import GoogleAIClient, GoogleAIClientError
from poolpal.utils.messages import DEFAULT_LOCALE, SUPPORTED_LOCALES, message

from .prompt import PH_MINUS_GRANULAR, SYSTEM_INSTRUCTION, build_prompt
from .types import AdvisoryFailure, DosageRequest, DosageResponse

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)
# A disclaimer ties calibration to the product used, in either supported language.
_DISCLAIMER_PATTERNS = (
    re.compile(r"\bcalibrat\w*\b.{0,80}?\bproducts?\b", re.IGNORECASE | re.DOTALL),
    re.compile(r"\bcalibra\w*\b.{0,80}?\bprodott[oi]\b", re.IGNORECASE | re.DOTALL),
)


class DosageAdviceService:
    """Sends one dosage request to Gemini and returns both suggestions or fails whole."""

    def __init__(
        self,
        client: Optional[GoogleAIClient] = None,
        *,
        model_name: Optional[str] = None,
        locale: str = DEFAULT_LOCALE,
        ph_minus_product: str = PH_MINUS_GRANULAR,
        temperature: float = 0.2,
    ) -> None:
        self._client = client
        self.model_name = model_name
        self.locale = locale if locale in SUPPORTED_LOCALES else DEFAULT_LOCALE
        self.ph_minus_product = ph_minus_product
        self.temperature = temperature

    @classmethod
    def from_app(cls) -> "DosageAdviceService":
        cfg = current_app.config
        return cls(
            model_name=cfg.get("GOOGLE_AI_DEFAULT_MODEL"),
            locale=cfg.get("POOLPAL_LOCALE") or DEFAULT_LOCALE,
            ph_minus_product=cfg.get("POOLPAL_PH_MINUS_PRODUCT") or PH_MINUS_GRANULAR,
            temperature=float(cfg.get("POOLPAL_ADVICE_TEMPERATURE", 0.2)),
        )

    def _get_client(self) -> GoogleAIClient:
        if self._client is None:
            self._client = GoogleAIClient.from_app()
        return self._client

    def request_dosage_advice(self, request: DosageRequest) -> DosageResponse:
        """Single round trip; every failure surfaces as AdvisoryFailure."""
        started = time.monotonic()
        try:
            prompt = build_prompt(
                request, locale=self.locale, ph_minus_product=self.ph_minus_product
            )
            result = self._get_client().generate(
                prompt,
                model=self.model_name,
                system_instruction=SYSTEM_INSTRUCTION,
                generation_config={
                    "temperature": self.temperature,
                    "response_mime_type": "application/json",
                    "max_output_tokens": 1024,
                },
            )
            response = DosageResponse.from_payload(_parse_json_object(result.text))
        except (GoogleAIClientError, AdvisoryFailure, ValueError) as exc:
            logger.warning(
                "Dosage advice request failed after %.2fs: %s",
                time.monotonic() - started,
                exc,
                exc_info=True,
            )
            raise AdvisoryFailure(message("advice_failed", self.locale)) from exc
        except Exception as exc:
            logger.exception(
                "Unexpected dosage advice error after %.2fs", time.monotonic() - started
            )
            raise AdvisoryFailure(message("advice_failed", self.locale)) from exc

        logger.info(
            "Dosage advice received in %.2fs (model=%s, finish_reason=%s)",
            time.monotonic() - started,
            self.model_name or self._get_client().default_model,
            result.finish_reason,
        )
        return self.ensure_disclaimers(response)

    def ensure_disclaimers(self, response: DosageResponse) -> DosageResponse:
        """Append the fallback disclaimer to any suggestion the backend left without one."""
        fallback = message("fallback_disclaimer", self.locale)
        return DosageResponse(
            chlorine_dosage_suggestion=_with_disclaimer(response.chlorine_dosage_suggestion, fallback),
            ph_minus_dosage_suggestion=_with_disclaimer(response.ph_minus_dosage_suggestion, fallback),
        )


def has_disclaimer(text: str) -> bool:
    return any(pattern.search(text) for pattern in _DISCLAIMER_PATTERNS)


def _with_disclaimer(text: str, fallback: str) -> str:
    if has_disclaimer(text):
        return text
    return f"{text}\n\n{fallback}"


def _parse_json_object(text: str) -> dict[str, Any]:
    cleaned = (text or "").strip()
    if not cleaned:
        raise AdvisoryFailure("Empty response from advisory backend.")

    fenced = _CODE_FENCE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AdvisoryFailure(f"Advisory backend returned malformed JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise AdvisoryFailure("Advisory backend returned a non-object JSON payload.")
    return payload
