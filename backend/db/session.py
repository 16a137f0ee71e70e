"""
Query guard for service functions.

Every service that touches the store runs its queries inside
store_operation(). Any SQLAlchemyError rolls the session back and is
re-raised as StoreFailure, so callers never see partial results.

Usage:
    from db.session import store_operation

    with store_operation("sale_statistics"):
        row = db.session.query(...).one()
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from models.database import db
from services.errors import StoreFailure

log = logging.getLogger(__name__)


@contextmanager
def store_operation(operation: str):
    try:
        yield db.session
    except SQLAlchemyError as e:
        db.session.rollback()
        log.exception("store_failure operation=%s", operation)
        raise StoreFailure(details=f"{operation}: {type(e).__name__}") from e
