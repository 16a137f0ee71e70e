"""
Request ID middleware - Inject X-Request-ID for request correlation.

The id is taken from the incoming X-Request-ID header when present,
otherwise generated. It is stored on g.request_id, echoed in the
response header, and copied into every error envelope.
"""

import uuid
from flask import Flask, request, g

REQUEST_ID_HEADER = 'X-Request-ID'


def setup_request_id_middleware(app: Flask) -> None:
    """Register before/after hooks that carry the request id."""

    @app.before_request
    def inject_request_id():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    @app.after_request
    def add_request_id_header(response):
        if hasattr(g, 'request_id'):
            response.headers[REQUEST_ID_HEADER] = g.request_id
        return response
