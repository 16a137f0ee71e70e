"""
API package - HTTP boundary layer.

This package provides:
- Pydantic param/response contracts for the transaction endpoints
- Global middleware (request_id, request_logging, error_envelope)
"""
