"""
Pydantic models for the month-parameterized statistics endpoints.

Covers:
- /statistics
- /price-range-chart
- /category-pie-chart
- /combined-stats
"""

from typing import List

from pydantic import Field, field_validator

from constants import PRICE_BUCKET_LABELS
from .base import ResponseModel


class SaleStats(ResponseModel):
    total_sale_amount: float = Field(ge=0)
    total_sold_items: int = Field(ge=0)
    total_not_sold_items: int = Field(ge=0)


class PriceRangeBucket(ResponseModel):
    price_range: str
    count: int = Field(ge=0)


class CategoryCount(ResponseModel):
    category: str
    count: int = Field(ge=1)


class CombinedStats(ResponseModel):
    sale_stats: SaleStats
    price_range_chart: List[PriceRangeBucket]
    category_pie_chart: List[CategoryCount]

    @field_validator('price_range_chart')
    @classmethod
    def all_buckets_in_order(cls, v):
        """Invariant: all 10 buckets present, ascending."""
        labels = [bucket.price_range for bucket in v]
        if labels != PRICE_BUCKET_LABELS:
            raise ValueError(f"price_range_chart must list buckets {PRICE_BUCKET_LABELS}, got {labels}")
        return v
