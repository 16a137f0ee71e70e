"""
Price Range Computation - Pure Functions for Testing

Bucket assignment and zero-filling for the price-range histogram.
All functions are pure (no I/O, no database access); the SQL side in
statistics_service builds its CASE expression from the same PRICE_BUCKETS.

Usage:
    from services.price_range_compute import (
        bucket_label_for_price,
        build_price_range_chart,
    )
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from constants import PRICE_BUCKETS, PRICE_BUCKET_LABELS


def bucket_label_for_price(price: float) -> str:
    """
    Return the histogram bucket label for a price.

    A price belongs to the first bucket whose upper bound is >= price.
    Integer prices therefore match the labels exactly (100 -> '0-100',
    101 -> '101-200'), and fractional prices in the gap between two labels
    go to the upper bucket (100.5 -> '101-200').

    Example:
        >>> bucket_label_for_price(900)
        '801-900'
        >>> bucket_label_for_price(900.01)
        '901-above'
    """
    for label, _, upper in PRICE_BUCKETS:
        if upper is None or price <= upper:
            return label
    # Unreachable: the last bucket is unbounded
    return PRICE_BUCKET_LABELS[-1]


def build_price_range_chart(counts: Iterable[Tuple[Optional[str], int]]) -> List[Dict[str, Any]]:
    """
    Merge (label, count) rows into the full, ordered bucket list.

    Buckets with no rows keep count 0. Unknown labels are ignored.

    Args:
        counts: Iterable of (bucket label, count), in any order

    Returns:
        List of {'priceRange', 'count'} dicts in PRICE_BUCKETS order
    """
    by_label = {}
    for label, count in counts:
        if label in PRICE_BUCKET_LABELS:
            by_label[label] = by_label.get(label, 0) + int(count or 0)

    return [
        {'priceRange': label, 'count': by_label.get(label, 0)}
        for label in PRICE_BUCKET_LABELS
    ]


def histogram_total(chart: List[Dict[str, Any]]) -> int:
    """Sum of bucket counts; equals the window's record count."""
    return sum(bucket['count'] for bucket in chart)
