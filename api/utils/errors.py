# api/utils/errors.py
"""
Standardized API error responses.

Every endpoint reports failures in the same envelope as its successes:
    {"ok": false, "error": "<human-readable message>"}

Messages are shown to end users as-is, so keep them short and actionable.
"""

from flask import jsonify


# -----------------------------------------------------------------------------
# Standard HTTP Error Responses
# -----------------------------------------------------------------------------

def error_response(message: str, status: int = 400, **extra):
    """
    Create a standardized error response.

    Args:
        message: Human-readable explanation
        status: HTTP status code
        **extra: Additional fields to include in response

    Returns:
        Tuple of (jsonify response, status code)
    """
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status


def ok_response(data, status: int = 200):
    """Wrap a successful payload in the standard envelope."""
    return jsonify({"ok": True, "data": data}), status


# Validation (400)
def bad_request(message: str):
    """Request parameters are missing or malformed."""
    return error_response(message, 400)


# Authorization (403)
def forbidden(message: str = "Forbidden"):
    """Caller is not allowed to use this endpoint."""
    return error_response(message, 403)


# Server Error (500)
def server_error(message: str = "Internal server error"):
    """Internal server error."""
    return error_response(message, 500)


# -----------------------------------------------------------------------------
# Domain-Specific Errors
# -----------------------------------------------------------------------------

UPSTREAM_TIMEOUT_MESSAGE = "Upstream timeout. Please try again."


def upstream_timeout(message: str = UPSTREAM_TIMEOUT_MESSAGE):
    """
    Every retrieval attempt against the scripture provider failed.

    Clients are expected to retry on 504.
    """
    return error_response(message, 504)
