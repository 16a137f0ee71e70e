"""
Transaction API Routes - Split into domain-specific modules

This package organizes the transaction endpoints into logical domains:
- listing.py: Searchable, paginated transaction table
- statistics.py: Month-windowed sale totals, price histogram, category breakdown
- admin.py: Seeding and health endpoints

All modules share the same blueprint (transactions_bp) registered at
/api/transactions.
"""

from flask import Blueprint

# Create the shared blueprint
transactions_bp = Blueprint('transactions', __name__)


# Import all route modules to register their routes with the blueprint
from routes.transactions import listing  # noqa: E402,F401
from routes.transactions import statistics  # noqa: E402,F401
from routes.transactions import admin  # noqa: E402,F401
