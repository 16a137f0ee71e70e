"""
Statistics Service - SQL aggregation over one month window

All three views run as single GROUP BY / aggregate queries; nothing is
loaded into memory row by row.

Views:
- get_sale_statistics: total sale amount (sold items only) + sold/unsold counts
- get_price_range_chart: fixed 10-bucket price histogram, zero-filled
- get_category_pie_chart: count per distinct category
- get_combined_stats: all three merged into one response
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import case, func

from constants import PRICE_BUCKETS, PRICE_BUCKET_LABELS
from db.session import store_operation
from models.transaction import Transaction
from services.month_window import MonthWindow
from services.price_range_compute import build_price_range_chart, histogram_total

logger = logging.getLogger(__name__)


def price_bucket_expression(column):
    """
    CASE expression mapping a price column to its bucket label.

    Mirrors bucket_label_for_price(): the first bucket whose upper bound
    is >= price wins; the last bucket catches everything above.
    """
    whens = [
        (column <= upper, label)
        for label, _, upper in PRICE_BUCKETS
        if upper is not None
    ]
    return case(*whens, else_=PRICE_BUCKET_LABELS[-1])


def get_sale_statistics(window: MonthWindow) -> Dict[str, Any]:
    """
    Sale totals for the window.

    totalSaleAmount sums price over sold items only; unsold stock is not a sale.
    An empty window returns zeros.
    """
    sold_price = case((Transaction.is_sold == True, Transaction.price), else_=0)  # noqa: E712

    with store_operation("sale_statistics") as session:
        row = session.query(
            func.coalesce(func.sum(sold_price), 0).label("total_amount"),
            func.count(case((Transaction.is_sold == True, 1))).label("sold_count"),  # noqa: E712
            func.count(case((Transaction.is_sold == False, 1))).label("not_sold_count"),  # noqa: E712
        ).filter(window.condition(Transaction.date_of_sale)).one()

    return {
        'totalSaleAmount': round(float(row.total_amount or 0), 2),
        'totalSoldItems': int(row.sold_count or 0),
        'totalNotSoldItems': int(row.not_sold_count or 0),
    }


def get_price_range_chart(window: MonthWindow) -> List[Dict[str, Any]]:
    """All 10 price buckets in ascending order; empty buckets have count 0."""
    with store_operation("price_range_chart") as session:
        # Bucket in a subquery so GROUP BY targets a plain column on every dialect
        bucketed = session.query(
            price_bucket_expression(Transaction.price).label("price_range"),
        ).filter(
            window.condition(Transaction.date_of_sale)
        ).subquery()

        rows = session.query(
            bucketed.c.price_range,
            func.count().label("count"),
        ).group_by(bucketed.c.price_range).all()

    return build_price_range_chart((row.price_range, row.count) for row in rows)


def get_category_pie_chart(window: MonthWindow) -> List[Dict[str, Any]]:
    """
    One entry per category present in the window.

    Sorted by count desc, then category asc. Only categories that occur appear.
    """
    count_col = func.count(Transaction.pk).label("count")

    with store_operation("category_pie_chart") as session:
        rows = session.query(
            Transaction.category,
            count_col,
        ).filter(
            window.condition(Transaction.date_of_sale)
        ).group_by(Transaction.category).order_by(
            count_col.desc(), Transaction.category.asc()
        ).all()

    return [{'category': row.category, 'count': int(row.count)} for row in rows]


def get_combined_stats(window: MonthWindow) -> Dict[str, Any]:
    """saleStats, priceRangeChart and categoryPieChart for the same window."""
    sale_stats = get_sale_statistics(window)
    price_range_chart = get_price_range_chart(window)
    category_pie_chart = get_category_pie_chart(window)

    logger.debug(
        "combined_stats window=%s records=%d categories=%d",
        window.to_dict(), histogram_total(price_range_chart), len(category_pie_chart)
    )

    return {
        'saleStats': sale_stats,
        'priceRangeChart': price_range_chart,
        'categoryPieChart': category_pie_chart,
    }
