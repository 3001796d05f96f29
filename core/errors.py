"""
Centralized error handling for the task API.

Error Hierarchy:
- APIError (4xx): Expected errors with messages safe to expose to clients
- InternalError (5xx): Unexpected errors - never expose internal details

Every error body has the same shape:
    {"error": "<HTTP reason>", "message": "...", "status_code": n, "timestamp": "..."}

Validation errors add an "errors" field map; 5xx responses add "error_id"
so operators can find the matching log line.

Usage:
    from core.errors import safe_error_response, NotFoundError, ValidationError

    # For expected errors (4xx) - raise with safe message
    raise NotFoundError("Task not found")

    # For unexpected errors (5xx) - use safe_error_response
    except Exception as e:
        return safe_error_response(e, "create task")
"""

import logging
import uuid
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Optional, Tuple

from flask import jsonify

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Classes (4xx - Expected Errors)
# =============================================================================

class APIError(Exception):
    """
    Base class for expected API errors (4xx status codes).
    Messages are safe to expose to clients.
    """
    status_code = 400

    def __init__(self, message: str, status_code: int = None, errors: Optional[dict] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors


class NotFoundError(APIError):
    """Resource not found (404)."""
    status_code = 404


class ValidationError(APIError):
    """Request validation failed (400)."""
    status_code = 400


class AuthenticationError(APIError):
    """Authentication failed (401)."""
    status_code = 401


class ConflictError(APIError):
    """Resource conflict (409)."""
    status_code = 409


# =============================================================================
# Internal Error (5xx - Never Expose)
# =============================================================================

class InternalError(Exception):
    """
    Unexpected internal errors (5xx status codes).
    Message should NEVER be exposed to clients.
    """
    pass


# =============================================================================
# Response Helpers
# =============================================================================

def error_body(status_code: int, message: str, **extra) -> dict:
    """Build the standard error envelope."""
    body = {
        "error": HTTPStatus(status_code).phrase,
        "message": message,
        "status_code": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    body.update(extra)
    return body


def success_response(data: Any, status_code: int = 200) -> Tuple[Any, int]:
    """Wrap a payload in the standard success envelope."""
    return jsonify({"success": True, "data": data}), status_code


def api_error_response(e: APIError) -> Tuple[Any, int]:
    """Render an APIError; the message is safe to expose."""
    extra = {"errors": e.errors} if e.errors else {}
    return jsonify(error_body(e.status_code, str(e), **extra)), e.status_code


def safe_error_response(e: Exception, operation: str) -> Tuple[Any, int]:
    """
    Create a safe error response for API endpoints.

    For APIError subclasses (expected errors):
        - Returns the error message (safe to expose)
        - Uses the exception's status_code
        - Logs at WARNING level

    For all other exceptions (unexpected errors):
        - Returns generic message (never exposes internal details)
        - Returns 500 status code
        - Logs full exception at ERROR level with an error_id

    Args:
        e: The exception that was caught
        operation: Human-readable description of what failed (e.g., "create task")

    Returns:
        Tuple of (json_response, status_code)
    """
    if isinstance(e, APIError):
        logger.warning(f"{operation}: {e}")
        return api_error_response(e)

    error_id = str(uuid.uuid4())[:8]
    logger.exception(f"{operation} failed", extra={"error_id": error_id})
    return jsonify(error_body(500, f"Failed to {operation}", error_id=error_id)), 500


def register_error_handlers(app):
    """
    Register Flask error handlers for APIError exceptions and HTTP errors.

    Call this in your Flask app factory:
        from core.errors import register_error_handlers
        register_error_handlers(app)
    """
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(APIError)
    def handle_api_error(e):
        """Handle all APIError subclasses."""
        logger.warning(f"API error: {e}")
        return api_error_response(e)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Render routing errors (404, 405, 429...) with the same envelope."""
        return jsonify(error_body(e.code, e.description or HTTPStatus(e.code).phrase)), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        """Handle anything a route did not catch."""
        error_id = str(uuid.uuid4())[:8]
        logger.exception(f"Unhandled exception: {e}", extra={"error_id": error_id})
        return jsonify(error_body(500, "Internal server error", error_id=error_id)), 500
