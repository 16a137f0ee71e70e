"""
Transaction Listing Endpoint

Endpoints:
- /transactions - Searchable, paginated transaction table
"""

from flask import current_app, request

from api.contracts import api_contract
from api.contracts.pydantic_models import TransactionPage
from constants import DEFAULT_PAGE
from routes.transactions import transactions_bp
from services.listing_service import list_transactions
from utils.normalize import to_int, to_str


@transactions_bp.route("/transactions", methods=["GET"])
@api_contract("transactions", TransactionPage)
def get_transactions():
    """
    Paginated transaction list with optional free-text search.

    Query params:
        - page: Page number (default 1, >= 1)
        - perPage: Records per page (default 10, 1..MAX_PER_PAGE)
        - search: Matches title/description/category (case-insensitive);
                  a numeric search also matches price exactly

    Example:
        GET /api/transactions/transactions?page=2&perPage=10&search=jacket
    """
    page = to_int(request.args.get("page"), default=DEFAULT_PAGE, min_value=1, field="page")
    per_page = to_int(
        request.args.get("perPage"),
        default=current_app.config["DEFAULT_PER_PAGE"],
        min_value=1,
        max_value=current_app.config["MAX_PER_PAGE"],
        field="perPage",
    )
    search = to_str(request.args.get("search"), default="")

    return list_transactions(page=page, per_page=per_page, search=search)
