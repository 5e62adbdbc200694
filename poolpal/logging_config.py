from __future__ import annotations

import logging
import re
from typing import Iterable

from flask import Flask

DEV_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
PROD_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
SECRET_PATTERNS = {
    "google_key": re.compile(r"AIza[0-9A-Za-z\-_]{35}"),
    "token": re.compile(r"(token|api[_-]?key|secret|password|authorization)\s*[:=]\s*([^\s,;]+)", re.IGNORECASE),
    "bearer": re.compile(r"Bearer\s+[A-Za-z0-9\-_.=:+/]+", re.IGNORECASE),
}
NOISY_LOGGERS = ("werkzeug", "flask_limiter", "google", "urllib3", "grpc")


class SecretRedactionFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except (TypeError, ValueError):
            return True
        msg = SECRET_PATTERNS["google_key"].sub("[REDACTED_KEY]", msg)
        msg = SECRET_PATTERNS["token"].sub(lambda m: f"{m.group(1)}=[REDACTED]", msg)
        msg = SECRET_PATTERNS["bearer"].sub("Bearer [REDACTED]", msg)
        record.msg = msg
        record.args = ()
        return True


def configure_logging(app: Flask) -> None:
    level = _coerce_level(app.config.get("LOG_LEVEL", "DEBUG" if app.debug else "INFO"))
    root = logging.getLogger()
    if not root.handlers:
        root.addHandler(logging.StreamHandler())
    root.setLevel(level)
    app.logger.setLevel(level)
    logging.getLogger("poolpal").setLevel(level)

    if level > logging.DEBUG:
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    is_production = app.config.get("ENV") == "production" and not app.debug
    formatter = logging.Formatter(PROD_FORMAT if is_production else DEV_FORMAT)
    redact = app.config.get("LOG_REDACT_SECRETS", True)
    _apply_formatter(root.handlers, formatter, redact)
    _apply_formatter(app.logger.handlers, formatter, redact)


def _apply_formatter(handlers: Iterable[logging.Handler], formatter: logging.Formatter, redact: bool) -> None:
    for handler in handlers:
        handler.setFormatter(formatter)
        if redact and not any(isinstance(f, SecretRedactionFilter) for f in handler.filters):
            handler.addFilter(SecretRedactionFilter())


def _coerce_level(raw_level) -> int:
    if isinstance(raw_level, int):
        return raw_level
    if isinstance(raw_level, str):
        candidate = raw_level.strip().upper()
        level = getattr(logging, candidate, logging.INFO)
        return level if isinstance(level, int) else logging.INFO
    return logging.INFO
