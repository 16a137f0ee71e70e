#!/usr/bin/env python3
"""
CLI for the Transaction Sales Dashboard

Commands:
    seed   - Populate the transactions table from the fixture
    serve  - Run the development server

Usage:
    python cli.py seed                       # wipe and reseed
    python cli.py seed --mode seed-once      # only if the table is empty
    python cli.py seed --fixture-url http://localhost:8000/fixture.json
    python cli.py serve --port 8000
"""

import json
import sys

import click

from constants import SEED_MODES, SEED_MODE_FORCE_RESET


def get_app(seed_on_startup=False):
    """Build the Flask app; the CLI seeds explicitly, not on startup."""
    from app import create_app
    return create_app({"SEED_ON_STARTUP": seed_on_startup})


@click.group()
@click.version_option(version="1.0.0", prog_name="txn-dashboard")
def cli():
    """Transaction Sales Dashboard CLI - seed data and run the API."""
    from app import configure_logging
    configure_logging()


@cli.command("seed")
@click.option("--mode", type=click.Choice(SEED_MODES), default=SEED_MODE_FORCE_RESET,
              show_default=True, help="seed-once keeps existing rows; force-reset replaces them")
@click.option("--fixture-url", default=None, help="Override FIXTURE_URL")
@click.option("--json", "output_json", is_flag=True, help="Output result as JSON")
def seed(mode, fixture_url, output_json):
    """Populate the transactions table from the fixture."""
    from services.errors import ServiceError
    from services.seed_service import seed_database

    app = get_app()
    url = fixture_url or app.config["FIXTURE_URL"]

    with app.app_context():
        try:
            result = seed_database(url, mode=mode, timeout=app.config["FIXTURE_TIMEOUT_SECONDS"])
        except ServiceError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            if e.details:
                click.secho(f"  {e.details}", fg="red", err=True)
            sys.exit(1)

    if output_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.echo(result["message"])
    if result["seeded"]:
        click.secho(f"  Inserted: {result['inserted']}", fg="green")
        if result["skipped"]:
            click.secho(f"  Skipped (invalid rows): {result['skipped']}", fg="yellow")


@cli.command("serve")
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", default=5000, show_default=True, type=int)
@click.option("--debug/--no-debug", default=None, help="Override FLASK_DEBUG")
def serve(host, port, debug):
    """Run the development server."""
    from app import run_app
    run_app(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
