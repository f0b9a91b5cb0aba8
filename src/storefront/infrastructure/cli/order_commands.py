"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderLineSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import unit_of_work
from storefront.infrastructure.cli.common import acting_user, as_email_option, display_order


def _parse_items(raw: str) -> list[OrderLineSpec]:
    """Parse '1:3,4:1' (product id : quantity) into OrderLineSpec list."""
    specs: list[OrderLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.split(":", 1)
        try:
            specs.append(OrderLineSpec(product_id=int(product_id), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(f"Invalid item '{pair}'. Both parts must be integers.")
    return specs


@click.command("place")
@click.option("--address", required=True, help="Shipping address.")
@click.option("--items", default=None, help="Items as 'ProductId:Qty,...'; omit to check out the cart.")
@as_email_option
def order_place(address: str, items: str | None, as_email: str) -> None:
    """Place an order from explicit items or from the cart."""
    specs = _parse_items(items) if items else None
    handler = PlaceOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(acting_user(as_email), shipping_address=address, lines=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed  (status={dto.status}, total={dto.total})")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@as_email_option
def order_show(order_id: int, as_email: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work(read_only=True))

    try:
        dto = handler.handle(acting_user(as_email), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto)


@click.command("list")
@click.option("--all", "all_orders", is_flag=True, default=False, help="Every order (administrators).")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Only orders in this status (with --all).",
)
@as_email_option
def order_list(all_orders: bool, status: str | None, as_email: str) -> None:
    """List your orders, or every order with --all."""
    handler = ListOrdersHandler(uow=unit_of_work(read_only=True))

    try:
        orders = handler.handle(acting_user(as_email), all_orders=all_orders, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<6} {'Status':<10} {'Items':>5} {'Total':>12}  Created")
    click.echo("-" * 70)
    for o in orders:
        count = sum(item.quantity for item in o.items)
        click.echo(f"{o.id:<6} {o.user_id:<6} {o.status:<10} {count:>5} {o.total:>12}  {o.created_at}")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@as_email_option
def order_cancel(order_id: int, as_email: str) -> None:
    """Cancel an order and put its stock back."""
    handler = CancelOrderHandler(uow=unit_of_work())

    try:
        handler.handle(acting_user(as_email), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock restored.")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.argument("status", type=click.Choice([s.value for s in OrderStatus], case_sensitive=False))
@as_email_option
def order_status(order_id: int, status: str, as_email: str) -> None:
    """Move an order to STATUS (administrators)."""
    handler = UpdateOrderStatusHandler(uow=unit_of_work())

    try:
        dto = handler.handle(acting_user(as_email), order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
