"""Global error-handler registration.

Synopsis:
Registers handlers for CSRF failures, rate limiting, missing pages and
unexpected errors so API callers always get JSON and page visitors get a short
localized page.

Glossary:
- CSRF failure: Cross-site request forgery token/session validation error.
"""

from __future__ import annotations

from flask import render_template, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import HTTPException, NotFound, TooManyRequests

from .utils.api_responses import APIResponse
from .utils.http import wants_json
from .utils.messages import message


def _error_response(message_key: str, status_code: int, error_code: str):
    text = message(message_key)
    if wants_json(request):
        return APIResponse.error(text, errors={"code": error_code}, status_code=status_code)
    return (
        render_template("errors/error.html", status_code=status_code, error_message=text),
        status_code,
    )


def register_resilience_handlers(app) -> None:
    """Install the CSRF, 404, 429 and 500 handlers."""

    @app.errorhandler(CSRFError)
    def _csrf_error_handler(err: CSRFError):
        """Log diagnostics and tell the visitor to reload."""
        details = {
            "path": request.path,
            "endpoint": request.endpoint,
            "remote_addr": request.headers.get("X-Forwarded-For", request.remote_addr),
            "reason": err.description,
        }
        app.logger.warning("CSRF validation failed: %s", details)
        return _error_response("csrf_failed", 400, "csrf_validation_failed")

    @app.errorhandler(TooManyRequests)
    def _rate_limit_handler(err: TooManyRequests):
        app.logger.info("Rate limit hit on %s: %s", request.path, err.description)
        return _error_response("rate_limited", 429, "rate_limited")

    @app.errorhandler(NotFound)
    def _not_found_handler(_err: NotFound):
        return _error_response("not_found", 404, "not_found")

    @app.errorhandler(Exception)
    def _unexpected_error_handler(err: Exception):
        if isinstance(err, HTTPException):
            return err
        app.logger.exception("Unhandled error on %s", request.path)
        return _error_response("server_error", 500, "server_error")
