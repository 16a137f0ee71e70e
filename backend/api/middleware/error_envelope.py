"""
Error envelope middleware - Standardize all error responses.

Every error response has the same flat shape:
{
    "error": "Please provide a valid month (1-12)",
    "details": "month: received '13'",      # optional
    "code": "INVALID_PARAMETER",
    "requestId": "uuid"
}

Taxonomy:
- InvalidParameter      -> 400
- UpstreamFetchFailure  -> 500 (seeding aborted, data untouched)
- StoreFailure          -> 500 (generic message, no partial results)
- HTTPException         -> its own status (404, 405, ...)
- anything else         -> 500 INTERNAL_ERROR
"""

import logging
from flask import Flask, jsonify, g
from werkzeug.exceptions import HTTPException

from services.errors import ServiceError
from utils.normalize import InvalidParameter


logger = logging.getLogger('api.middleware.error')


# Error codes reference
ERROR_CODES = {
    "BAD_REQUEST": 400,
    "INVALID_PARAMETER": 400,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,

    "UPSTREAM_FETCH_FAILED": 500,
    "STORE_FAILURE": 500,
    "INTERNAL_ERROR": 500,
}


def make_error_response(
    code: str,
    message: str,
    status_code: int = None,
    details: str = None,
):
    """
    Create a standardized error response.

    Args:
        code: Error code (e.g., "INVALID_PARAMETER")
        message: Human-readable error message
        status_code: HTTP status code (defaults based on error code)
        details: Optional detail string

    Returns:
        Tuple of (response, status_code)
    """
    request_id = getattr(g, 'request_id', None)

    if status_code is None:
        status_code = ERROR_CODES.get(code, 500)

    body = {"error": message}
    if details:
        body["details"] = details
    body["code"] = code
    body["requestId"] = request_id

    response = jsonify(body)
    if request_id:
        response.headers['X-Request-ID'] = request_id

    return response, status_code


def setup_error_handlers(app: Flask) -> None:
    """
    Set up standardized error handlers on Flask app.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(InvalidParameter)
    def handle_invalid_parameter(error):
        return make_error_response("INVALID_PARAMETER", str(error), details=error.details)

    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        # Already logged where it was raised
        return make_error_response(
            error.code,
            error.public_message,
            status_code=error.status_code,
            details=error.details,
        )

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        """Handle Flask/Werkzeug HTTP exceptions - preserve their status codes."""
        # "Not Found" -> "NOT_FOUND"
        code = error.name.upper().replace(' ', '_')
        return make_error_response(code, error.description, status_code=error.code)

    @app.errorhandler(Exception)
    def handle_generic_error(error):
        """Handle unhandled Python exceptions."""
        logger.exception(
            "Unhandled error: %s", error,
            extra={
                "event": "unhandled_error",
                "request_id": getattr(g, 'request_id', None),
                "error_type": type(error).__name__,
            }
        )
        return make_error_response("INTERNAL_ERROR", "An unexpected error occurred")
