"""Gemini access for Pool Pal: one configured SDK, one prompt per call."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import google.generativeai as genai
from flask import current_app

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-1.5-flash"


class GoogleAIClientError(RuntimeError):
    """Any failure talking to Gemini: configuration, transport, blocked prompt."""


@dataclass(slots=True)
class GoogleAIResult:
    text: str
    raw: Any = None
    finish_reason: str | None = None
    usage_metadata: Mapping[str, Any] | None = None


class GoogleAIClient:
    """Gemini client bound to one API key, default model and request timeout."""

    # genai.configure is process-global
    _configure_lock = threading.Lock()
    _configured_key: str | None = None

    def __init__(
        self,
        api_key: str,
        *,
        default_model: str = DEFAULT_MODEL,
        request_timeout: float = 30,
    ) -> None:
        if not api_key:
            raise GoogleAIClientError("GOOGLE_AI_API_KEY is not configured.")
        self._api_key = api_key
        self._default_model = default_model or DEFAULT_MODEL
        self._request_timeout = request_timeout
        self._models: Dict[tuple[str, str], genai.GenerativeModel] = {}
        self._configure_sdk()

    @classmethod
    def from_app(cls) -> "GoogleAIClient":
        config = current_app.config
        return cls(
            config.get("GOOGLE_AI_API_KEY"),
            default_model=config.get("GOOGLE_AI_DEFAULT_MODEL") or DEFAULT_MODEL,
            request_timeout=float(config.get("POOLPAL_ADVICE_TIMEOUT_SECONDS", 30)),
        )

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def request_timeout(self) -> float:
        return self._request_timeout

    def _configure_sdk(self) -> None:
        with GoogleAIClient._configure_lock:
            if GoogleAIClient._configured_key != self._api_key:
                genai.configure(api_key=self._api_key)
                GoogleAIClient._configured_key = self._api_key
                logger.debug("google-generativeai configured for default model %s", self._default_model)

    def model(self, name: Optional[str] = None, system_instruction: Optional[str] = None):
        """Cached GenerativeModel for a (model, system instruction) pair."""
        key = (name or self._default_model, system_instruction or "")
        if key not in self._models:
            kwargs: Dict[str, Any] = {"model_name": key[0]}
            if system_instruction:
                kwargs["system_instruction"] = system_instruction
            self._models[key] = genai.GenerativeModel(**kwargs)
        return self._models[key]

    def generate(
        self,
        prompt: str,
        *,
        model: Optional[str] = None,
        system_instruction: Optional[str] = None,
        generation_config: Optional[Mapping[str, Any]] = None,
    ) -> GoogleAIResult:
        """Send one user prompt and return the first text part of the reply.

        Raises GoogleAIClientError on any SDK exception, including the
        request timeout, and when Gemini blocks the prompt.
        """
        if not prompt or not prompt.strip():
            raise GoogleAIClientError("Gemini requests need a non-empty prompt.")

        kwargs: Dict[str, Any] = {"request_options": {"timeout": self._request_timeout}}
        if generation_config:
            kwargs["generation_config"] = dict(generation_config)

        try:
            response = self.model(model, system_instruction).generate_content(
                [{"role": "user", "parts": [{"text": prompt}]}], **kwargs
            )
        except Exception as exc:
            raise GoogleAIClientError(f"Gemini request failed: {exc}") from exc

        feedback = getattr(response, "prompt_feedback", None)
        blocked = getattr(feedback, "block_reason", None)
        if blocked:
            raise GoogleAIClientError(f"Gemini blocked the prompt: {_name(blocked)}")

        candidate = next(iter(getattr(response, "candidates", None) or []), None)
        return GoogleAIResult(
            text=_candidate_text(candidate),
            raw=response,
            finish_reason=_name(getattr(candidate, "finish_reason", None)),
            usage_metadata=_usage(getattr(response, "usage_metadata", None)),
        )


def _name(value: Any) -> str | None:
    if value is None:
        return None
    return str(getattr(value, "name", value))


def _candidate_text(candidate: Any) -> str:
    parts = getattr(getattr(candidate, "content", None), "parts", None) or []
    return next((part.text for part in parts if getattr(part, "text", None)), "")


def _usage(usage: Any) -> Mapping[str, Any] | None:
    if usage is None:
        return None
    keys = ("prompt_token_count", "candidates_token_count", "total_token_count")
    return {key: getattr(usage, key, None) for key in keys}
