from __future__ import annotations

from typing import Optional

from flask import Request, has_request_context, request

__all__ = ["wants_json"]

_JSON = "application/json"
_HTML = "text/html"


def wants_json(req: Optional[Request] = None) -> bool:
    """True when the response to ``req`` should be JSON rather than a page.

    API paths and JSON bodies always get JSON; other requests follow their
    Accept header. Outside a request context the answer is False.
    """
    if req is None:
        if not has_request_context():
            return False
        req = request

    if req.path.startswith("/api/") or req.is_json:
        return True
    return req.accept_mimetypes.best_match([_HTML, _JSON]) == _JSON
