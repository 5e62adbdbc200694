"""Environment-driven settings for Pool Pal.

Every key is read once at import through ``EnvReader``; malformed values fall
back to their default and are reported through ``ENV_DIAGNOSTICS`` so the app
factory can log them at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from poolpal.services.dosage_advice.prompt import PH_MINUS_GRANULAR, PH_MINUS_PRODUCTS
from poolpal.utils.messages import DEFAULT_LOCALE, SUPPORTED_LOCALES

ENVIRONMENTS = ("development", "testing", "production")
_ENV_KEY = "FLASK_ENV"
_BOOLEANS = {"1": True, "true": True, "yes": True, "on": True,
             "0": False, "false": False, "no": False, "off": False}
_DEV_SECRET_KEY = "devkey-please-change-in-production"


@dataclass(frozen=True)
class EnvironmentInfo:
    name: str
    source: str
    raw_value: str


class EnvReader:
    """Typed access to environment variables with collected warnings."""

    def __init__(self, data: Mapping[str, str] | None = None):
        self._data = dict(os.environ if data is None else data)
        self.warnings: list[str] = []

    def _raw(self, key: str) -> str | None:
        value = (self._data.get(key) or "").strip()
        return value or None

    def _parse(self, key: str, default: Any, kind: str, parser: Callable[[str], Any]) -> Any:
        raw = self._raw(key)
        if raw is None:
            return default
        try:
            return parser(raw)
        except ValueError:
            self.warnings.append(f"{key} expected {kind} but received {raw!r}; falling back to {default}.")
            return default

    def str(self, key: str, default: str | None = None) -> str | None:
        raw = self._raw(key)
        return default if raw is None else raw

    def int(self, key: str, default: int = 0) -> int:
        return self._parse(key, default, "integer", int)

    def float(self, key: str, default: float = 0.0) -> float:
        return self._parse(key, default, "float", float)

    def bool(self, key: str, default: bool = False) -> bool:
        def _to_bool(raw: str) -> bool:
            try:
                return _BOOLEANS[raw.lower()]
            except KeyError:
                raise ValueError(raw) from None

        return self._parse(key, default, "boolean", _to_bool)

    def choice(self, key: str, options: Iterable[str], default: str) -> str:
        allowed = tuple(options)

        def _to_choice(raw: str) -> str:
            if raw.lower() not in allowed:
                raise ValueError(raw)
            return raw.lower()

        return self._parse(key, default, f"one of {list(allowed)}", _to_choice)


def _resolve_environment(reader: EnvReader) -> EnvironmentInfo:
    raw_value = reader.str(_ENV_KEY, ENVIRONMENTS[0])
    name = raw_value.lower()
    if name not in ENVIRONMENTS:
        raise RuntimeError(f"Invalid {_ENV_KEY}={raw_value!r}. Expected one of {list(ENVIRONMENTS)}.")
    return EnvironmentInfo(name=name, source=_ENV_KEY, raw_value=raw_value)


env = EnvReader()
ENV_INFO = _resolve_environment(env)


class BaseConfig:
    FLASK_ENV = ENV_INFO.name
    SECRET_KEY = env.str('FLASK_SECRET_KEY', _DEV_SECRET_KEY)

    # Session cookie only carries the advisory token.
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    WTF_CSRF_ENABLED = True
    MAX_CONTENT_LENGTH = 64 * 1024

    RATELIMIT_ENABLED = env.bool('RATELIMIT_ENABLED', True)
    RATELIMIT_STORAGE_URI = env.str('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = env.str('RATELIMIT_DEFAULT', '600 per hour;120 per minute')
    POOLPAL_ADVICE_RATE_LIMIT = env.str('POOLPAL_ADVICE_RATE_LIMIT', '30 per minute')

    LOG_LEVEL = env.str('LOG_LEVEL', 'WARNING')
    LOG_REDACT_SECRETS = env.bool('LOG_REDACT_SECRETS', True)

    GOOGLE_AI_API_KEY = env.str('GOOGLE_AI_API_KEY') or env.str('GOOGLE_GENERATIVE_AI_API_KEY')
    GOOGLE_AI_DEFAULT_MODEL = env.str('GOOGLE_AI_DEFAULT_MODEL', 'gemini-1.5-flash')

    POOLPAL_ADVICE_TIMEOUT_SECONDS = env.float('POOLPAL_ADVICE_TIMEOUT_SECONDS', 30.0)
    POOLPAL_ADVICE_TEMPERATURE = env.float('POOLPAL_ADVICE_TEMPERATURE', 0.2)
    POOLPAL_LOCALE = env.choice('POOLPAL_LOCALE', SUPPORTED_LOCALES, DEFAULT_LOCALE)
    POOLPAL_PH_MINUS_PRODUCT = env.choice('POOLPAL_PH_MINUS_PRODUCT', PH_MINUS_PRODUCTS, PH_MINUS_GRANULAR)
    POOLPAL_MAX_ADVISORY_SESSIONS = env.int('POOLPAL_MAX_ADVISORY_SESSIONS', 1024)


class DevelopmentConfig(BaseConfig):
    ENV = 'development'
    DEBUG = True
    SESSION_COOKIE_SECURE = False


class TestingConfig(BaseConfig):
    ENV = 'testing'
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    SESSION_COOKIE_SECURE = False


class ProductionConfig(BaseConfig):
    ENV = 'production'
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    PREFERRED_URL_SCHEME = 'https'
    LOG_LEVEL = env.str('LOG_LEVEL', 'INFO')


config_map = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}


def is_default_secret(value: str | None) -> bool:
    return not value or value == _DEV_SECRET_KEY


Config = config_map[ENV_INFO.name]
ENV_DIAGNOSTICS = {
    'active': ENV_INFO.name,
    'source': ENV_INFO.source,
    'warnings': tuple(env.warnings),
}
