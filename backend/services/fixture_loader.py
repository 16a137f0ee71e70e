"""
Fixture Loading Service - fetch + clean the seed dataset

This module is responsible for LOADING the fixture only:
- HTTP GET of the static JSON document
- Field renaming and type casting (vectorized, pandas)
- Dropping rows that cannot be stored

Writing to the database happens in services/seed_service.py.

Pipeline: **Fetch** → Clean → Replace rows in DB

Fixture Field Mapping:
  Fixture Field     → Record Key      Transformation
  ─────────────────────────────────────────────────────────────
  id                → id              Coerced to string ("" if missing)
  title             → title           NaN → ""
  description       → description     NaN → ""
  category          → category        NaN → ""
  price             → price           Numeric; NaN / negative rows dropped
  dateOfSale        → dateOfSale      ISO-8601 → naive UTC datetime; unparseable rows dropped
  sold / isSold     → isSold          Boolean; isSold wins when both are present
  image             → image           Optional, None if missing
"""

import logging
from typing import Any, Dict, List, Tuple

import pandas as pd
import requests

from services.errors import UpstreamFetchFailure

logger = logging.getLogger(__name__)

TEXT_FIELDS = ['title', 'description', 'category']

TRUE_STRINGS = {'true', '1', 'yes', 'y', 't'}


def fetch_fixture(url: str, timeout: float = 15) -> List[Dict[str, Any]]:
    """
    GET the fixture and return its list of raw records.

    No retries: a failure is surfaced to the caller immediately.

    Raises:
        UpstreamFetchFailure: network error, non-2xx status, invalid JSON,
            or a JSON document that is not a list
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("fixture_fetch_failed url=%s err=%s", url, e)
        raise UpstreamFetchFailure(details=str(e)) from e

    try:
        payload = response.json()
    except ValueError as e:
        logger.error("fixture_invalid_json url=%s err=%s", url, e)
        raise UpstreamFetchFailure(details=f"Fixture is not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise UpstreamFetchFailure(
            details=f"Fixture must be a JSON list of records, got {type(payload).__name__}"
        )

    logger.info("fixture_fetched url=%s records=%d", url, len(payload))
    return payload


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return bool(value)


def _to_id(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ''
    # Integer ids become floats when the column has gaps
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clean_fixture_records(records: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
    """
    Normalize raw fixture records into storable records.

    Args:
        records: Raw JSON records from the fixture

    Returns:
        (clean records, diagnostics) where diagnostics has
        'initial_rows', 'invalid_price', 'invalid_date' and 'kept'
    """
    diagnostics = {
        'initial_rows': len(records),
        'invalid_price': 0,
        'invalid_date': 0,
        'kept': 0,
    }

    df = pd.DataFrame([r for r in records if isinstance(r, dict)])
    if df.empty:
        return [], diagnostics

    # Per record: isSold wins when present (older seed variant), else sold
    sold_source = pd.Series(None, index=df.index, dtype=object)
    if 'sold' in df.columns:
        sold_source = df['sold'].astype(object)
    if 'isSold' in df.columns:
        sold_source = df['isSold'].astype(object).where(df['isSold'].notna(), sold_source)
    df['isSold'] = sold_source.map(_to_bool)

    for col in TEXT_FIELDS:
        if col not in df.columns:
            df[col] = ''
        df[col] = df[col].fillna('').astype(str)

    df['id'] = df['id'].map(_to_id) if 'id' in df.columns else ''

    # Filter: price must be a non-negative number
    before = len(df)
    if 'price' not in df.columns:
        df['price'] = None
    df['price'] = pd.to_numeric(df['price'], errors='coerce')
    df = df[df['price'].notna() & (df['price'] >= 0)].copy()
    diagnostics['invalid_price'] = before - len(df)

    # Parse dates (vectorized) and normalize to naive UTC
    before = len(df)
    if 'dateOfSale' in df.columns:
        parsed = pd.to_datetime(df['dateOfSale'], errors='coerce', utc=True, format='ISO8601')
        df['dateOfSale'] = parsed.dt.tz_convert(None)
        df = df[df['dateOfSale'].notna()].copy()
    else:
        df = df.iloc[0:0]
    diagnostics['invalid_date'] = before - len(df)

    if 'image' not in df.columns:
        df['image'] = None

    clean = []
    for row in df.to_dict('records'):
        image = row.get('image')
        clean.append({
            'id': row['id'],
            'title': row['title'],
            'description': row['description'],
            'category': row['category'],
            'price': float(row['price']),
            'dateOfSale': row['dateOfSale'].to_pydatetime(),
            'isSold': bool(row['isSold']),
            'image': image if isinstance(image, str) and image else None,
        })

    diagnostics['kept'] = len(clean)
    if diagnostics['kept'] < diagnostics['initial_rows']:
        logger.warning("fixture_rows_dropped %s", diagnostics)

    return clean, diagnostics


def load_fixture(url: str, timeout: float = 15) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
    """Fetch and clean in one step."""
    return clean_fixture_records(fetch_fixture(url, timeout=timeout))
