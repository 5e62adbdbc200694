from __future__ import annotations

from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect

__all__ = [
    "csrf",
    "limiter",
    "advice_rate_limit",
]

csrf = CSRFProtect()

# Default limits come from RATELIMIT_DEFAULT in the app config.
limiter = Limiter(key_func=get_remote_address)


def advice_rate_limit() -> str:
    """Limit applied to every route that calls the advisory backend."""
    return current_app.config.get("POOLPAL_ADVICE_RATE_LIMIT") or "30 per minute"
