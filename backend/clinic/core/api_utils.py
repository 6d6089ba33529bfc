"""
Common API utilities for consistent response formatting across all controllers.
"""

from typing import Any, Dict, Optional

from flask import g, jsonify, request

from clinic.core.exceptions import ValidationError


def api_response(
    success: bool,
    message: str,
    data: Optional[Any] = None,
    status_code: int = 200,
    error: Optional[str] = None,
) -> tuple:
    """
    Standardized API response format for all endpoints.

    Args:
        success: Whether the operation was successful
        message: Human-readable message about the operation
        data: Optional data payload
        status_code: HTTP status code
        error: Machine-readable error code for failed operations

    Returns:
        Tuple of (json_response, status_code)
    """
    response: Dict[str, Any] = {"success": success, "message": message}

    if error is not None:
        response["error"] = error

    if data is not None:
        response["data"] = data

    return jsonify(response), status_code


def get_json_body() -> Dict[str, Any]:
    """Return the JSON object sent with the request, or raise ValidationError."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def request_db():
    """Return the database session bound to the current request.

    The session is opened lazily and closed by the app teardown hook.
    """
    if "db" not in g:
        from clinic.db.session import SessionLocal

        g.db = SessionLocal()
    return g.db


def close_request_db(exc=None) -> None:
    db = g.pop("db", None)
    if db is not None:
        db.close()
