"""CLI commands for the database and user accounts."""

from __future__ import annotations

import click

from storefront.application.register_user import RegisterUserHandler
from storefront.application.seed_store import SeedStoreHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.user import Role
from storefront.infrastructure.bootstrap import (
    container,
    password_hasher,
    token_service,
    unit_of_work,
)


@click.command("init")
def db_init() -> None:
    """Create all tables (existing tables are left untouched)."""
    container().create_schema()
    click.echo("Database schema created.")


@click.command("seed")
def db_seed() -> None:
    """Create the demo accounts and products in an empty store."""
    handler = SeedStoreHandler(uow=unit_of_work(), hasher=password_hasher())

    try:
        result = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.users_created and not result.products_created:
        click.echo("Store already seeded, nothing to do.")
        return
    click.echo(
        f"Seeded {result.users_created} user(s) and {result.products_created} product(s)."
    )


@click.command("create")
@click.option("--username", required=True, help="Unique user name (3-50 characters).")
@click.option("--email", required=True, help="Login email.")
@click.option("--password", required=True, prompt=True, hide_input=True, help="Password.")
@click.option("--admin", is_flag=True, default=False, help="Grant administrator rights.")
def user_create(username: str, email: str, password: str, admin: bool) -> None:
    """Register a new account."""
    handler = RegisterUserHandler(
        uow=unit_of_work(),
        hasher=password_hasher(),
        tokens=token_service(),
    )

    try:
        result = handler.handle(
            username=username,
            email=email,
            password=password,
            role=Role.ADMIN if admin else Role.USER,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{result.user.id} '{result.user.username}' created ({result.user.role})")
