"""
Store lifecycle helpers.

The app factory binds the Flask-SQLAlchemy handle to the app, then calls
warmup() on its engine. A store that never answers is fatal: warmup()
re-raises after its last attempt and create_app() aborts startup.
dispose() releases pooled connections at shutdown.

Warmup with retry:
    - Handles cold starts of hosted PostgreSQL
    - Exponential backoff (0.75s, 1.5s, 3s, 6s)
    - Fails after 4 attempts with the last OperationalError
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

log = logging.getLogger(__name__)


def warmup(engine: Engine, attempts: int = 4, base_sleep: float = 0.75) -> None:
    """
    Verify the store is reachable, with exponential backoff retry.

    Args:
        engine: SQLAlchemy engine to warm up
        attempts: Number of attempts (default 4)
        base_sleep: Base sleep time in seconds (doubles each attempt)

    Raises:
        OperationalError: If all attempts fail
    """
    last_error: Optional[Exception] = None

    for i in range(attempts):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.info("db_warmup_success attempt=%d", i + 1)
            return
        except OperationalError as e:
            last_error = e
            if i == attempts - 1:
                break
            sleep_s = base_sleep * (2 ** i)
            log.warning(
                "db_warmup_retry attempt=%d/%d sleep_s=%.2f err=%s",
                i + 1, attempts, sleep_s, str(e)[:100]
            )
            time.sleep(sleep_s)

    log.error("db_warmup_failed after %d attempts", attempts)
    raise last_error  # type: ignore[misc]


def dispose(engine: Engine) -> None:
    """Release all pooled connections held by the engine."""
    engine.dispose()
    log.info("db_engine_disposed")
