"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, ProductDTO
from storefront.application.seed_store import ADMIN_EMAIL
from storefront.domain.exceptions import DomainException
from storefront.domain.model.user import User
from storefront.infrastructure.bootstrap import unit_of_work

as_email_option = click.option(
    "--as-email",
    "as_email",
    default=ADMIN_EMAIL,
    show_default=True,
    help="Email of the account to act as.",
)


def acting_user(email: str) -> User:
    """Load the account a command runs on behalf of."""
    try:
        with unit_of_work(read_only=True) as uow:
            user = uow.users.get_by_email(email)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if user is None:
        raise click.ClickException(
            f"No account for {email!r}. Run 'storefront db seed' or 'storefront user create'."
        )
    return user


def display_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 68)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name[:28]:<28} {(p.category or '-'):<14} {p.price:>10} {p.stock:>6}"
        )


def display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"User:     #{dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*40}")
    for item in dto.items:
        click.echo(
            f"  #{item.product_id:<9} {item.quantity:>5} {item.price:>10} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*40}")
    click.echo(f"  {'Order Total':<17} {dto.total:>23}")
