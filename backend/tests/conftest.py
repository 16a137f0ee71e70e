"""
Root pytest configuration for backend tests.

Provides:
- Shared fixtures (app, client) backed by an in-memory SQLite store
- make_transactions: insert rows directly, bypassing the fixture fetch
- fixture_records: a small raw fixture in the remote document's shape
- --run-integration / --fixture-url for the live-fixture test
"""

import os
import sys
from datetime import datetime
from pathlib import Path

# Add backend directory to Python path so imports like
# `from services.listing_service import ...` and `from utils.normalize import ...` work
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Config reads DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

import pytest


def pytest_addoption(parser):
    group = parser.getgroup("fixture", "live seed fixture")
    group.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked as integration (fetch the live seed fixture).",
    )
    group.addoption(
        "--fixture-url",
        default=None,
        help="Fixture URL for integration tests (default: FIXTURE_URL or the public fixture).",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="needs --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture
def live_fixture_url(request):
    from config import DEFAULT_FIXTURE_URL

    return (
        request.config.getoption("--fixture-url")
        or os.environ.get("FIXTURE_URL")
        or DEFAULT_FIXTURE_URL
    )


TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SEED_ON_STARTUP": False,
    "FIXTURE_URL": "http://fixture.test/product_transaction.json",
}


@pytest.fixture
def app():
    """Create test Flask application with a fresh in-memory store."""
    from app import create_app

    app = create_app(dict(TEST_CONFIG))
    yield app

    from models.database import db
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_transactions(app):
    """
    Insert transactions straight into the store.

    Each row is a dict of Transaction column overrides; anything not given
    gets a neutral default. Returns the number of rows inserted.
    """
    from models.database import db
    from models.transaction import Transaction

    def _make(rows):
        with app.app_context():
            for i, row in enumerate(rows):
                values = {
                    "source_id": str(i + 1),
                    "title": f"Item {i + 1}",
                    "description": "",
                    "price": 10.0,
                    "date_of_sale": datetime(2021, 1, 15, 12, 0),
                    "category": "misc",
                    "is_sold": False,
                }
                values.update(row)
                db.session.add(Transaction(**values))
            db.session.commit()
        return len(rows)

    return _make


@pytest.fixture
def fixture_records():
    """Raw records as served by the remote fixture."""
    return [
        {
            "id": 1,
            "title": "Fjallraven Foldsack Backpack",
            "price": 329.85,
            "description": "Your perfect pack for everyday use",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
            "sold": False,
            "dateOfSale": "2021-11-27T20:29:54+05:30",
        },
        {
            "id": 2,
            "title": "Mens Casual Premium Slim Fit T-Shirts",
            "price": 44.6,
            "description": "Slim-fitting style, contrast raglan long sleeve",
            "category": "men's clothing",
            "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
            "sold": True,
            "dateOfSale": "2021-10-27T20:29:54+05:30",
        },
        {
            "id": 3,
            "title": "WD 2TB Elements Portable External Hard Drive",
            "price": 64,
            "description": "USB 3.0 and USB 2.0 compatibility",
            "category": "electronics",
            "image": "https://fakestoreapi.com/img/61IBBVJvSDL._AC_SY879_.jpg",
            "sold": True,
            "dateOfSale": "2022-03-27T20:29:54+05:30",
        },
    ]


class FakeResponse:
    """Minimal stand-in for requests.Response used by monkeypatched requests.get."""

    def __init__(self, payload=None, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


@pytest.fixture
def serve_fixture(monkeypatch):
    """
    Route requests.get to a canned response.

    Usage:
        serve_fixture(payload=[...])
        serve_fixture(exc=requests.ConnectionError("down"))
    Returns a list that records the (url, timeout) of every call.
    """
    import requests

    calls = []

    def _install(payload=None, status_code=200, exc=None, json_error=None):
        def fake_get(url, timeout=None, **kwargs):
            calls.append((url, timeout))
            if exc is not None:
                raise exc
            return FakeResponse(payload, status_code=status_code, json_error=json_error)

        monkeypatch.setattr(requests, "get", fake_get)
        return calls

    return _install
