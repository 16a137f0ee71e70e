"""
Request logging middleware - dashboard usage and failure trail.

Which requests get a log line:
- every 4xx/5xx on an /api path (bad month, failed reseed, ...)
- paths under a watch-listed prefix
- a random sample of everything else

5xx lines go out at WARNING so they surface with the default LOG_LEVEL
even when the sample rate is zero.
"""

import logging
import os
import random
import time
from dataclasses import dataclass
from typing import Tuple

from flask import Flask, g, request


logger = logging.getLogger("api.request")


@dataclass(frozen=True)
class RequestLogSettings:
    enabled: bool = True
    sample_rate: float = 0.0
    watchlist: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "RequestLogSettings":
        """
        Env vars:
          - REQUEST_LOG_ENABLED (default: true)
          - REQUEST_LOG_SAMPLE_RATE (default: 0.0, clamped to 0..1)
          - REQUEST_LOG_ENDPOINTS (comma-separated path prefixes to always log)
        """
        try:
            sample_rate = float(os.environ.get("REQUEST_LOG_SAMPLE_RATE", "0.0"))
        except ValueError:
            sample_rate = 0.0
        raw_watchlist = os.environ.get("REQUEST_LOG_ENDPOINTS", "")
        return cls(
            enabled=os.environ.get("REQUEST_LOG_ENABLED", "true").lower() == "true",
            sample_rate=min(max(sample_rate, 0.0), 1.0),
            watchlist=tuple(p.strip() for p in raw_watchlist.split(",") if p.strip()),
        )

    def wants(self, path: str, status: int) -> bool:
        if status >= 400:
            return True
        if any(path.startswith(prefix) for prefix in self.watchlist):
            return True
        if self.sample_rate == 0.0:
            return False
        return self.sample_rate == 1.0 or random.random() <= self.sample_rate


def setup_request_logging_middleware(app: Flask) -> None:
    """Register timing hooks on app; no-op when REQUEST_LOG_ENABLED is false."""
    settings = RequestLogSettings.from_env()
    if not settings.enabled:
        return

    @app.before_request
    def _start_timer():
        g.request_start = time.perf_counter()

    @app.after_request
    def _log_request(response):
        path = request.path
        if not path.startswith("/api") or not settings.wants(path, response.status_code):
            return response

        duration_ms = None
        if hasattr(g, "request_start"):
            duration_ms = round((time.perf_counter() - g.request_start) * 1000, 2)

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "api_request path=%s method=%s status=%s duration_ms=%s params=%s request_id=%s",
            path,
            request.method,
            response.status_code,
            duration_ms,
            request.args.to_dict(),
            getattr(g, "request_id", None),
        )
        return response
