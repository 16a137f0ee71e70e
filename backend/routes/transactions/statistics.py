"""
Month-Windowed Statistics Endpoints

Every endpoint here requires month (1-12) and accepts an optional year.
Without year, the window is that month in every year.

Endpoints:
- /statistics - Total sale amount, sold and unsold counts
- /price-range-chart - 10 fixed price buckets, zero-filled
- /category-pie-chart - Count per category
- /combined-stats - All three in one response
"""

from typing import List

from flask import request

from api.contracts import api_contract
from api.contracts.pydantic_models import (
    SaleStats, PriceRangeBucket, CategoryCount, CombinedStats
)
from routes.transactions import transactions_bp
from services.month_window import MonthWindow
from services.statistics_service import (
    get_sale_statistics,
    get_price_range_chart,
    get_category_pie_chart,
    get_combined_stats,
)


def _window_from_request() -> MonthWindow:
    return MonthWindow.from_params(request.args.get("month"), request.args.get("year"))


@transactions_bp.route("/statistics", methods=["GET"])
@api_contract("statistics", SaleStats)
def statistics():
    """
    Sale totals for the selected month.

    Example:
        GET /api/transactions/statistics?month=3
    """
    return get_sale_statistics(_window_from_request())


@transactions_bp.route("/price-range-chart", methods=["GET"])
@api_contract("price-range-chart", List[PriceRangeBucket])
def price_range_chart():
    """
    Item count per price bucket: 0-100, 101-200, ..., 801-900, 901-above.

    Example:
        GET /api/transactions/price-range-chart?month=11
    """
    return get_price_range_chart(_window_from_request())


@transactions_bp.route("/category-pie-chart", methods=["GET"])
@api_contract("category-pie-chart", List[CategoryCount])
def category_pie_chart():
    """Item count per category present in the selected month."""
    return get_category_pie_chart(_window_from_request())


@transactions_bp.route("/combined-stats", methods=["GET"])
@api_contract("combined-stats", CombinedStats)
def combined_stats():
    """
    saleStats + priceRangeChart + categoryPieChart for one month.

    Example:
        GET /api/transactions/combined-stats?month=3&year=2022
    """
    return get_combined_stats(_window_from_request())
