"""``flask seed``: demo accounts, restaurants and reviews for local work."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from restoreviews.core.config import ENV_VAR
from restoreviews.core.extensions import db
from restoreviews.seeds import seed_data

LOGGER = logging.getLogger(__name__)

STEPS = {
    "all": seed_data.run_all,
    "users": seed_data.seed_users,
    "restaurants": seed_data.seed_restaurants_and_reviews,
}


def _refuse_in_production() -> None:
    # Seeded accounts have well-known passwords.
    env = os.getenv(ENV_VAR, "").strip().lower()
    cfg = current_app.config
    if env == "production" or not (cfg.get("DEBUG") or cfg.get("TESTING")):
        raise click.UsageError("Seeding is restricted to development and testing environments.")


def _print_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(map(len, summary))
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table:<{width}}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


@click.group("seed")
def seed_cli() -> None:
    """Database seeding commands."""


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice(sorted(STEPS)),
    default="all",
    show_default=True,
    help="Seed one slice. 'restaurants' needs the demo users to exist.",
)
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@with_appcontext
def run_command(only: str, verbose: bool) -> None:
    """Insert the demo data. Safe to run repeatedly; existing rows are kept."""
    _refuse_in_production()
    if verbose:
        logging.getLogger(seed_data.__name__).setLevel(logging.INFO)
    try:
        summary = STEPS[only](db, verbose=verbose)
    except (SQLAlchemyError, ValueError, RuntimeError) as exc:
        db.session.rollback()
        LOGGER.error("seed.failed", exc_info=True)
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _print_summary(summary)
