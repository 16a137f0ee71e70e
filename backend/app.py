"""
Flask Application Factory - Transaction Sales Dashboard API

All statistics use SQL aggregation; no per-request in-memory datasets.

Store lifecycle:
- create_app() binds the SQLAlchemy handle, creates tables and verifies
  the store answers (with backoff). An unreachable store aborts startup.
- run_app() disposes the engine when the server stops.
- Optional seed-once on startup (SEED_ON_STARTUP).

The analytics API is public (no authentication).
"""

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config, engine_options_for
from models.database import db

logger = logging.getLogger(__name__)


def configure_logging(level: str = None) -> None:
    """Root logging setup for the dev server and CLI (gunicorn brings its own)."""
    logging.basicConfig(
        level=(level or os.getenv('LOG_LEVEL', 'INFO')).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _seed_on_startup(app: Flask) -> None:
    """
    Seed-once on startup. Never blocks startup: a fixture or store failure
    is logged and the API starts with whatever data it has.
    """
    from constants import SEED_MODE_ONCE
    from services.errors import ServiceError
    from services.seed_service import seed_database

    try:
        result = seed_database(
            app.config["FIXTURE_URL"],
            mode=SEED_MODE_ONCE,
            timeout=app.config["FIXTURE_TIMEOUT_SECONDS"],
        )
        logger.info("startup_seed %s", result)
    except ServiceError as e:
        logger.warning("startup_seed_failed err=%s details=%s", e, e.details)


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Engine options depend on the final URI (tests override it)
    app.config.setdefault(
        "SQLALCHEMY_ENGINE_OPTIONS",
        engine_options_for(app.config["SQLALCHEMY_DATABASE_URI"]),
    )

    # Initialize CORS - allow all origins on the API
    CORS(app,
         resources={r"/api/*": {"origins": "*"}},
         methods=["GET", "OPTIONS"],
         allow_headers=["Content-Type", "X-Request-ID"],
         expose_headers=["X-Request-ID"],
         supports_credentials=False,
         send_wildcard=True)

    # === API MIDDLEWARE ===
    from api.middleware import (
        setup_request_id_middleware,
        setup_request_logging_middleware,
        setup_error_handlers,
    )
    setup_request_id_middleware(app)
    setup_request_logging_middleware(app)
    setup_error_handlers(app)

    # Initialize SQLAlchemy
    db.init_app(app)

    with app.app_context():
        from db.engine import warmup
        from models.transaction import Transaction  # noqa: F401  (register table)

        # HARD FAIL: don't serve an API without a store
        try:
            warmup(db.engine)
        except Exception as e:
            logger.error("store_unreachable uri=%s err=%s",
                         db.engine.url.render_as_string(hide_password=True), e)
            raise RuntimeError(f"Transaction store is unreachable: {e}") from e

        db.create_all()
        logger.info("store_ready dialect=%s", db.engine.dialect.name)

        if app.config.get("SEED_ON_STARTUP"):
            _seed_on_startup(app)

    # Register routes (PUBLIC - no authentication required)
    from routes.transactions import transactions_bp
    app.register_blueprint(transactions_bp, url_prefix='/api/transactions')

    @app.route("/api/ping", methods=["GET"])
    def ping():
        """Dead-simple liveness check - no DB access."""
        return jsonify({"ok": True})

    @app.route("/", methods=["GET"])
    def index():
        from services.seed_service import count_transactions

        count = count_transactions()
        return jsonify({
            "name": "Transaction Sales Dashboard API",
            "status": "running",
            "data_loaded": count > 0,
            "row_count": count,
        })

    return app


def run_app(host="0.0.0.0", port=5000, debug=None):
    """Main entry point for local development - starts Flask's dev server."""
    configure_logging()
    logger.info("Starting Flask API - Transaction Sales Dashboard")

    # Store failures at startup propagate and terminate the process
    app = create_app()

    try:
        app.run(debug=app.config["DEBUG"] if debug is None else debug, host=host, port=port)
    finally:
        from db.engine import dispose
        with app.app_context():
            dispose(db.engine)


if __name__ == "__main__":
    run_app()
