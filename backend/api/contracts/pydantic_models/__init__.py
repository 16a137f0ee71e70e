"""
Pydantic models for API responses.

Usage:
    from api.contracts.pydantic_models import CombinedStats

    payload = CombinedStats.model_validate(result).model_dump(by_alias=True)
"""

from .base import ResponseModel
from .transactions import TransactionItem, Pagination, TransactionPage, SeedResult, HealthStatus
from .charts import SaleStats, PriceRangeBucket, CategoryCount, CombinedStats

__all__ = [
    'ResponseModel',
    'TransactionItem',
    'Pagination',
    'TransactionPage',
    'SeedResult',
    'HealthStatus',
    'SaleStats',
    'PriceRangeBucket',
    'CategoryCount',
    'CombinedStats',
]
