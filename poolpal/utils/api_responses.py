from typing import Any, Dict, List, Optional

from flask import jsonify, request


class APIResponse:
    """JSON envelope shared by the public pool endpoints.

    Success: ``{"success": true, "message": ..., "data": ...}``.
    Failure: ``{"success": false, "message": ..., "errors": {...}}`` where
    ``errors`` is a per-field map (422) or ``{"code": ...}``.
    """

    @staticmethod
    def _envelope(success: bool, message: str, status_code: int, **body: Any):
        return jsonify({'success': success, 'message': message, **body}), status_code

    @staticmethod
    def success(data: Any = None, message: str = "OK", status_code: int = 200):
        return APIResponse._envelope(True, message, status_code, data=data)

    @staticmethod
    def error(message: str, errors: Optional[Dict] = None, status_code: int = 400):
        return APIResponse._envelope(False, message, status_code, errors=errors or {})

    @staticmethod
    def validation_error(errors: Dict[str, List[str]], message: str = "Validation failed"):
        return APIResponse.error(message, errors=errors, status_code=422)

    @staticmethod
    def handle_request_content() -> Dict[str, Any]:
        """Loose field mapping from a JSON object body or form fields."""
        if request.is_json:
            payload = request.get_json(silent=True)
            return payload if isinstance(payload, dict) else {}
        return request.form.to_dict()


__all__ = ['APIResponse']
