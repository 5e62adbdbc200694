from __future__ import annotations

import secrets

from flask import Flask, current_app, session

from poolpal.services.dosage_advice import (
    AdvisorySession,
    AdvisorySessionRegistry,
    DosageAdviceService,
    DosageRequest,
    DosageResponse,
)

REGISTRY_KEY = "poolpal.advisory_sessions"
SESSION_TOKEN_KEY = "advisory_token"


def init_advisory_sessions(app: Flask) -> None:
    app.extensions[REGISTRY_KEY] = AdvisorySessionRegistry(
        max_sessions=int(app.config.get("POOLPAL_MAX_ADVISORY_SESSIONS", 1024))
    )


def current_advisory_session() -> AdvisorySession:
    """Advisory session of the browser behind the current request."""
    token = session.get(SESSION_TOKEN_KEY)
    if not token:
        token = secrets.token_urlsafe(16)
        session[SESSION_TOKEN_KEY] = token
    return current_app.extensions[REGISTRY_KEY].get(token)


def submit_dosage_request(request: DosageRequest) -> DosageResponse:
    """Raises AdvisoryBusy while this session has a request in flight, AdvisoryFailure on failure."""
    service = DosageAdviceService.from_app()
    return current_advisory_session().submit(request, service.request_dosage_advice)
