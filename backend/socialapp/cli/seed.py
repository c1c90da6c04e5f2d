"""``flask seed``: load demo accounts and posts into a development database."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext

from socialapp.core.config import ENV_VAR
from socialapp.core.extensions import db
from socialapp.seeds import demo_data

LOGGER = logging.getLogger(__name__)

Summary = dict[str, dict[str, int]]


def _set_verbosity(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    for name in (demo_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


def _echo_summary(summary: Summary) -> None:
    """Print one ``created/existing`` line per table, then the demo login."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(table) for table in summary)
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )
    demo = demo_data.USER_FIXTURES[0]
    click.echo(f"Demo login: {demo['email']} / {demo['password']}")


def _is_production() -> bool:
    if os.getenv(ENV_VAR, "").strip().lower() == "production":
        return True
    # ProductionConfig is the only config shipping a Secure refresh cookie
    secure_cookie = bool(current_app.config.get("REFRESH_COOKIE_SECURE"))
    return secure_cookie and not (current_app.debug or current_app.testing)


def _seed(users_only: bool, verbose: bool) -> Summary:
    """Run the seeders and commit once; roll back everything on failure."""
    try:
        if users_only:
            summary = demo_data.seed_users(db, verbose=verbose)
        else:
            summary = demo_data.run_all(db, verbose=verbose)
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        LOGGER.exception("seed.failed")
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    return summary


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Demo data for local development."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _set_verbosity(verbose)


@seed_cli.command("run")
@click.option("--users-only", is_flag=True, help="Create the demo accounts without posts.")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, users_only: bool) -> None:
    """Insert the demo users, posts, comments and likes that are missing."""
    _echo_summary(_seed(users_only, bool(ctx.obj.get("verbose", False))))


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping tables.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    if _is_production():
        raise click.UsageError("'flask seed fresh' refuses to run against production.")
    if not yes:
        click.confirm("Drop every table and recreate the schema?", abort=True)
    LOGGER.info("seed.recreating_schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    _echo_summary(_seed(False, bool(ctx.obj.get("verbose", False))))
