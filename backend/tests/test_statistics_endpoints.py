"""
Tests for the month-windowed statistics endpoints

- /statistics, /price-range-chart, /category-pie-chart, /combined-stats
- Month matches in every year; year narrows to one calendar month
- Sale amount counts sold items only
- Invalid month is rejected with 400 on every endpoint
"""

from datetime import datetime

import pytest

BASE = "/api/transactions"
MONTH_ENDPOINTS = ["statistics", "price-range-chart", "category-pie-chart", "combined-stats"]


@pytest.fixture
def two_march_sales(make_transactions):
    make_transactions([
        {"price": 50, "is_sold": True, "category": "A", "date_of_sale": datetime(2023, 3, 10)},
        {"price": 150, "is_sold": False, "category": "B", "date_of_sale": datetime(2023, 3, 20)},
    ])


@pytest.fixture
def multi_year(make_transactions):
    make_transactions([
        {"price": 20, "is_sold": True, "category": "books", "date_of_sale": datetime(2021, 3, 2)},
        {"price": 980, "is_sold": True, "category": "electronics", "date_of_sale": datetime(2022, 3, 15)},
        {"price": 300, "is_sold": False, "category": "electronics", "date_of_sale": datetime(2022, 3, 31, 23, 0)},
        {"price": 75.5, "is_sold": True, "category": "books", "date_of_sale": datetime(2022, 4, 1)},
        {"price": 410, "is_sold": True, "category": "toys", "date_of_sale": datetime(2021, 11, 5)},
    ])


class TestTwoRecordExample:
    """Two March records: one sold at 50, one unsold at 150."""

    def test_statistics(self, client, two_march_sales):
        r = client.get(f"{BASE}/statistics?month=3")
        assert r.status_code == 200
        assert r.get_json() == {
            "totalSaleAmount": 50,
            "totalSoldItems": 1,
            "totalNotSoldItems": 1,
        }

    def test_price_range_chart(self, client, two_march_sales):
        chart = client.get(f"{BASE}/price-range-chart?month=3").get_json()
        counts = {b["priceRange"]: b["count"] for b in chart}
        assert counts.pop("0-100") == 1
        assert counts.pop("101-200") == 1
        assert set(counts.values()) == {0}

    def test_category_pie_chart(self, client, two_march_sales):
        assert client.get(f"{BASE}/category-pie-chart?month=3").get_json() == [
            {"category": "A", "count": 1},
            {"category": "B", "count": 1},
        ]


class TestAllYearsWindow:

    def test_statistics_sums_sold_only_across_years(self, client, multi_year):
        body = client.get(f"{BASE}/statistics?month=3").get_json()
        assert body == {
            "totalSaleAmount": 1000,
            "totalSoldItems": 2,
            "totalNotSoldItems": 1,
        }

    def test_histogram_total_equals_window_count(self, client, multi_year):
        chart = client.get(f"{BASE}/price-range-chart?month=3").get_json()
        assert len(chart) == 10
        assert sum(b["count"] for b in chart) == 3

        stats = client.get(f"{BASE}/statistics?month=3").get_json()
        assert stats["totalSoldItems"] + stats["totalNotSoldItems"] == 3

    def test_category_order_count_desc_then_name(self, client, multi_year):
        assert client.get(f"{BASE}/category-pie-chart?month=3").get_json() == [
            {"category": "electronics", "count": 2},
            {"category": "books", "count": 1},
        ]

    def test_month_boundary_excludes_next_month(self, client, multi_year):
        body = client.get(f"{BASE}/statistics?month=4").get_json()
        assert body == {"totalSaleAmount": 75.5, "totalSoldItems": 1, "totalNotSoldItems": 0}


class TestYearNarrowing:

    def test_year_selects_one_calendar_month(self, client, multi_year):
        body = client.get(f"{BASE}/statistics?month=3&year=2022").get_json()
        assert body == {"totalSaleAmount": 980, "totalSoldItems": 1, "totalNotSoldItems": 1}

    def test_year_without_records(self, client, multi_year):
        body = client.get(f"{BASE}/statistics?month=3&year=2019").get_json()
        assert body == {"totalSaleAmount": 0, "totalSoldItems": 0, "totalNotSoldItems": 0}

    def test_bad_year(self, client, multi_year):
        r = client.get(f"{BASE}/statistics?month=3&year=abc")
        assert r.status_code == 400
        assert r.get_json()["code"] == "INVALID_PARAMETER"


class TestEmptyWindow:

    def test_all_zero(self, client, multi_year):
        assert client.get(f"{BASE}/statistics?month=7").get_json() == {
            "totalSaleAmount": 0,
            "totalSoldItems": 0,
            "totalNotSoldItems": 0,
        }
        chart = client.get(f"{BASE}/price-range-chart?month=7").get_json()
        assert [b["count"] for b in chart] == [0] * 10
        assert client.get(f"{BASE}/category-pie-chart?month=7").get_json() == []


class TestCombinedStats:

    def test_matches_individual_endpoints(self, client, multi_year):
        combined = client.get(f"{BASE}/combined-stats?month=3").get_json()
        assert set(combined) == {"saleStats", "priceRangeChart", "categoryPieChart"}
        assert combined["saleStats"] == client.get(f"{BASE}/statistics?month=3").get_json()
        assert combined["priceRangeChart"] == client.get(f"{BASE}/price-range-chart?month=3").get_json()
        assert combined["categoryPieChart"] == client.get(f"{BASE}/category-pie-chart?month=3").get_json()

    def test_bucket_labels_in_order(self, client, multi_year):
        from constants import PRICE_BUCKET_LABELS

        combined = client.get(f"{BASE}/combined-stats?month=11").get_json()
        assert [b["priceRange"] for b in combined["priceRangeChart"]] == PRICE_BUCKET_LABELS
        assert combined["saleStats"]["totalSaleAmount"] == 410


@pytest.mark.parametrize("endpoint", MONTH_ENDPOINTS)
@pytest.mark.parametrize("query", ["?month=0", "?month=13", "?month=abc", "", "?month="])
def test_invalid_month_rejected(client, endpoint, query):
    r = client.get(f"{BASE}/{endpoint}{query}")
    assert r.status_code == 400
    body = r.get_json()
    assert body["code"] == "INVALID_PARAMETER"
    assert "month" in body["details"]


def test_missing_month_message(client):
    body = client.get(f"{BASE}/statistics").get_json()
    assert body["error"] == "Please provide a valid month (1-12)"
    assert body["details"] == "month: missing"


def test_store_failure_returns_500(client, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from models.database import db

    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection reset"))

    monkeypatch.setattr(db.session, "query", broken_query)

    r = client.get(f"{BASE}/statistics?month=3")
    assert r.status_code == 500
    body = r.get_json()
    assert body["code"] == "STORE_FAILURE"
    assert "totalSaleAmount" not in body
