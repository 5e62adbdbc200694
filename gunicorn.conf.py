"""Gunicorn settings for Pool Pal.

Advisory sessions (the one-request-in-flight guard) live in process memory,
so the default is one worker process serving requests on threads.
"""
from __future__ import annotations

import os


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.environ.get(key, default))
    except (TypeError, ValueError):
        return default

bind = f"0.0.0.0:{os.environ.get('PORT', 5000)}"
worker_class = "gthread"
workers = max(1, _env_int("GUNICORN_WORKERS", 1))
threads = max(1, _env_int("GUNICORN_THREADS", 8))

# Must exceed POOLPAL_ADVICE_TIMEOUT_SECONDS so a slow advice call is not killed mid-request.
timeout = _env_int("GUNICORN_TIMEOUT", 60)
graceful_timeout = _env_int("GUNICORN_GRACEFUL_TIMEOUT", 30)
keepalive = _env_int("GUNICORN_KEEPALIVE", 5)

max_requests = _env_int("GUNICORN_MAX_REQUESTS", 2000)
max_requests_jitter = _env_int("GUNICORN_MAX_REQUESTS_JITTER", 100)

accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("GUNICORN_LOG_LEVEL", "info")
proc_name = "poolpal"

limit_request_line = 4096
limit_request_fields = 50

def when_ready(server) -> None:
    summary = f"Pool Pal on {bind}: workers={workers} threads={threads} timeout={timeout}s"
    if workers > 1:
        summary += " (advisory sessions are not shared between workers)"
    server.log.info(summary)
