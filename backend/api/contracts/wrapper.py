"""
@api_contract decorator - applies response contract enforcement to route handlers.

Usage:
    @transactions_bp.route("/statistics", methods=["GET"])
    @api_contract("statistics", SaleStats)
    def statistics():
        return get_sale_statistics(window)   # plain dict / list

The decorator:
1. Times the handler and logs route_success / route_error
2. Validates the returned data against the response model
3. Serializes with camelCase aliases and wraps it in a JSON response

Handler exceptions are not converted here; they propagate to the
app-level error handlers (api/middleware/error_envelope.py).
"""

import functools
import time
from typing import Any, Callable

from flask import jsonify
from pydantic import TypeAdapter

from api.route_utils import route_logger, log_success, log_error
from services.errors import ServiceError
from utils.normalize import InvalidParameter


@functools.lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def serialize(response_type: Any, data: Any) -> Any:
    """Validate data against response_type and dump it with wire aliases."""
    adapter = _adapter(response_type)
    return adapter.dump_python(adapter.validate_python(data), by_alias=True, mode='json')


def api_contract(endpoint_name: str, response_type: Any):
    """
    Decorator that enforces the response contract of a route handler.

    Args:
        endpoint_name: Route name used in logs (e.g., "combined-stats")
        response_type: Pydantic model or typing construct (List[Model])
    """
    logger = route_logger(endpoint_name)

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except InvalidParameter as e:
                logger.info("route_rejected route=%s field=%s err=%s", endpoint_name, e.field, e)
                raise
            except ServiceError as e:
                log_error(logger, endpoint_name, start, e, {"details": e.details})
                raise

            payload = serialize(response_type, result)
            log_success(logger, endpoint_name, start)
            return jsonify(payload)

        return wrapper

    return decorator
