"""
Seed Service - administrative (re)population of the transactions table

Two explicit modes, one per call:
- seed-once:   insert the fixture only if the table is empty
- force-reset: replace every row with the fixture

The fixture is fetched and cleaned BEFORE any write. If the fetch fails,
UpstreamFetchFailure propagates and existing rows are untouched. The
delete + insert of force-reset runs in one database transaction.
"""

import logging
from typing import Any, Dict

from constants import SEED_MODE_FORCE_RESET, SEED_MODE_ONCE, SEED_MODES
from db.session import store_operation
from models.transaction import Transaction
from services.fixture_loader import load_fixture
from utils.normalize import InvalidParameter

logger = logging.getLogger(__name__)


def count_transactions() -> int:
    with store_operation("count_transactions") as session:
        return session.query(Transaction).count()


def seed_database(url: str, mode: str = SEED_MODE_FORCE_RESET, timeout: float = 15) -> Dict[str, Any]:
    """
    Populate the transactions table from the fixture at url.

    Args:
        url: Fixture URL
        mode: 'seed-once' or 'force-reset'
        timeout: Fixture request timeout in seconds

    Returns:
        {'message', 'mode', 'seeded', 'inserted', 'skipped'}

    Raises:
        InvalidParameter: unknown mode
        UpstreamFetchFailure: fixture unreachable or malformed (nothing written)
        StoreFailure: database error (transaction rolled back)
    """
    if mode not in SEED_MODES:
        raise InvalidParameter(
            f"Expected one of {SEED_MODES}, got: {mode!r}",
            field="mode",
            received_value=mode
        )

    if mode == SEED_MODE_ONCE:
        existing = count_transactions()
        if existing > 0:
            logger.info("seed_skipped mode=%s existing=%d", mode, existing)
            return {
                'message': 'Database already contains data, skipping seed.',
                'mode': mode,
                'seeded': False,
                'inserted': 0,
                'skipped': 0,
            }

    records, diagnostics = load_fixture(url, timeout=timeout)
    skipped = diagnostics['initial_rows'] - diagnostics['kept']
    if not records and mode == SEED_MODE_FORCE_RESET:
        logger.warning("seed_empty_fixture mode=%s diagnostics=%s: table will be emptied", mode, diagnostics)

    with store_operation("seed_database") as session:
        if mode == SEED_MODE_FORCE_RESET:
            deleted = session.query(Transaction).delete(synchronize_session=False)
            logger.info("seed_wipe deleted=%d", deleted)
        session.add_all([Transaction.from_record(r) for r in records])
        session.commit()

    logger.info("seed_completed mode=%s inserted=%d skipped=%d", mode, len(records), skipped)

    return {
        'message': 'Database initialized with seed data.',
        'mode': mode,
        'seeded': True,
        'inserted': len(records),
        'skipped': skipped,
    }
