"""Flask CLI commands for account administration."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from restoreviews.core.roles import Role
from restoreviews.services._shared.errors import ConflictError
from restoreviews.services.users import UserCreateIn, UserService


@click.group("users")
def users_cli() -> None:
    """Account administration commands."""


@users_cli.command("create-admin")
@click.option("--username", required=True, help="Administrator username (5+ characters).")
@click.option(
    "--password",
    required=True,
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Administrator password (5+ characters).",
)
@click.option(
    "--email",
    default=None,
    help="Contact email (defaults to <username>@localhost.localdomain).",
)
@with_appcontext
def create_admin_command(username: str, password: str, email: str | None) -> None:
    """Create the first administrator account.

    Self-service signup always grants the ``user`` role, so this is how an
    installation obtains its first ``admin``.
    """
    dto = UserCreateIn(
        username=username,
        password=password,
        email=email or f"{username.strip()}@localhost.localdomain",
        role=Role.ADMIN,
    )
    try:
        user = UserService().create_user(dto)
    except ConflictError as exc:
        raise click.ClickException(str(exc)) from exc
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    click.echo(f"Created admin '{user.username}' (id={user.id}).")
