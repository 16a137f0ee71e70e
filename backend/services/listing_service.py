"""
Transaction Listing - search + pagination

Builds the filtered, ordered, paginated fetch behind GET /transactions.

Search rules:
- Empty search: no filter
- Otherwise: case-insensitive substring match on title, description, category
  (LIKE wildcards in the input are matched literally)
- If the search text parses as a number, price == that number is OR'ed in

Ordering: dateOfSale descending, surrogate key ascending as tie-breaker so
pages are stable.
"""

import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy import or_

from db.session import store_operation
from models.transaction import Transaction
from utils.normalize import InvalidParameter, to_float

logger = logging.getLogger(__name__)


def build_search_condition(search: Optional[str]):
    """
    Return the OR'ed search condition, or None when search is empty.

    Example:
        build_search_condition("jacket")  -> title/description/category ILIKE %jacket%
        build_search_condition("329.85") -> ... OR price = 329.85
    """
    if search is None:
        return None
    term = search.strip()
    if not term:
        return None

    conditions = [
        Transaction.title.icontains(term, autoescape=True),
        Transaction.description.icontains(term, autoescape=True),
        Transaction.category.icontains(term, autoescape=True),
    ]

    numeric = to_float(term)
    if numeric is not None:
        conditions.append(Transaction.price == numeric)

    return or_(*conditions)


def total_pages(total_count: int, per_page: int) -> int:
    """ceil(total_count / per_page); per_page must be positive."""
    if per_page < 1:
        raise InvalidParameter("perPage must be >= 1", field="perPage", received_value=per_page)
    return math.ceil(total_count / per_page)


def list_transactions(page: int = 1, per_page: int = 10, search: str = "") -> Dict[str, Any]:
    """
    Fetch one page of transactions matching search.

    Args:
        page: 1-based page number
        per_page: Page size (>= 1)
        search: Free-text search, may be empty

    Returns:
        {'data': [...], 'pagination': {currentPage, totalPages, totalCount, perPage}}
    """
    if page < 1:
        raise InvalidParameter("page must be >= 1", field="page", received_value=page)
    if per_page < 1:
        raise InvalidParameter("perPage must be >= 1", field="perPage", received_value=per_page)

    condition = build_search_condition(search)

    with store_operation("list_transactions") as session:
        query = session.query(Transaction)
        if condition is not None:
            query = query.filter(condition)

        total_count = query.count()

        rows = query.order_by(
            Transaction.date_of_sale.desc(),
            Transaction.pk.asc(),
        ).offset((page - 1) * per_page).limit(per_page).all()

        data = [row.to_dict() for row in rows]

    logger.debug(
        "list_transactions page=%d per_page=%d search=%r total=%d",
        page, per_page, search, total_count
    )

    return {
        'data': data,
        'pagination': {
            'currentPage': page,
            'totalPages': total_pages(total_count, per_page),
            'totalCount': total_count,
            'perPage': per_page,
        },
    }
