"""
Month Window - which records a month-parameterized endpoint aggregates.

Policy: a month selects records whose sale month matches in ANY year.
The fixture is historical, so a current-year window would silently drop
most of it. An optional year narrows the window to one calendar month,
expressed as an inclusive [first instant, last instant] range.

Usage:
    from services.month_window import MonthWindow

    window = MonthWindow.from_params(request.args.get("month"), request.args.get("year"))
    query = query.filter(window.condition(Transaction.date_of_sale))
"""

import calendar
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import and_, extract

from constants import MONTH_NAMES
from utils.normalize import to_month, to_year


def month_bounds(year: int, month: int):
    """
    First and last instant of a calendar month.

    Example:
        >>> month_bounds(2024, 2)
        (datetime.datetime(2024, 2, 1, 0, 0), datetime.datetime(2024, 2, 29, 23, 59, 59, 999999))
    """
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1)
    end = datetime(year, month, last_day, 23, 59, 59, 999999)
    return start, end


@dataclass(frozen=True)
class MonthWindow:
    month: int
    year: Optional[int] = None

    @classmethod
    def from_params(cls, month_raw: Optional[str], year_raw: Optional[str] = None) -> "MonthWindow":
        """Parse query-string values; raises InvalidParameter on bad input."""
        return cls(month=to_month(month_raw), year=to_year(year_raw))

    @property
    def start(self) -> Optional[datetime]:
        if self.year is None:
            return None
        return month_bounds(self.year, self.month)[0]

    @property
    def end(self) -> Optional[datetime]:
        if self.year is None:
            return None
        return month_bounds(self.year, self.month)[1]

    def condition(self, column):
        """SQLAlchemy filter condition selecting the window on a datetime column."""
        if self.year is None:
            return extract('month', column) == self.month
        return and_(column >= self.start, column <= self.end)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month,
            'monthName': MONTH_NAMES[self.month - 1],
            'year': self.year,
            'start': self.start.isoformat() if self.start else None,
            'end': self.end.isoformat() if self.end else None,
        }
