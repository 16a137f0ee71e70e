"""
Pydantic models for the listing and administrative endpoints.

Covers:
- /transactions
- /initialize-database
- /health
"""

from typing import List, Optional

from pydantic import Field

from .base import ResponseModel


class TransactionItem(ResponseModel):
    """One transaction as served to the table view."""

    id: str
    title: str
    description: str
    price: float = Field(ge=0)
    date_of_sale: str
    category: str
    is_sold: bool
    image: Optional[str] = None


class Pagination(ResponseModel):
    current_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    total_count: int = Field(ge=0)
    per_page: int = Field(ge=1)


class TransactionPage(ResponseModel):
    data: List[TransactionItem]
    pagination: Pagination


class SeedResult(ResponseModel):
    message: str
    mode: str
    seeded: bool
    inserted: int = Field(ge=0)
    skipped: int = Field(ge=0)


class HealthStatus(ResponseModel):
    status: str
    row_count: int = Field(ge=0)
    data_loaded: bool
