"""
Admin and Health Endpoints

Endpoints:
- /initialize-database - Reseed from the fixture (force-reset by default)
- /health - Store reachability and row count
"""

from flask import current_app, request

from api.contracts import api_contract
from api.contracts.pydantic_models import SeedResult, HealthStatus
from constants import DEFAULT_INITIALIZE_MODE, SEED_MODES
from routes.transactions import transactions_bp
from services.seed_service import count_transactions, seed_database
from utils.normalize import to_choice


@transactions_bp.route("/initialize-database", methods=["GET"])
@api_contract("initialize-database", SeedResult)
def initialize_database():
    """
    Populate the transactions table from the configured fixture.

    Query params:
        - mode: 'force-reset' (default, wipe and reseed) or 'seed-once'
                (only when the table is empty)

    A failed fixture fetch returns 500 and leaves existing rows untouched.
    """
    mode = to_choice(
        request.args.get("mode"),
        SEED_MODES,
        default=DEFAULT_INITIALIZE_MODE,
        field="mode",
    )
    return seed_database(
        current_app.config["FIXTURE_URL"],
        mode=mode,
        timeout=current_app.config["FIXTURE_TIMEOUT_SECONDS"],
    )


@transactions_bp.route("/health", methods=["GET"])
@api_contract("health", HealthStatus)
def health():
    """Health check endpoint."""
    row_count = count_transactions()
    return {
        'status': 'healthy',
        'rowCount': row_count,
        'dataLoaded': row_count > 0,
    }
