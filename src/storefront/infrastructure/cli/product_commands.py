"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.browse_catalog import SearchProductsHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.restock_product import DeductStockHandler, RestockProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import unit_of_work
from storefront.infrastructure.cli.common import acting_user, as_email_option, display_products


@click.command("list")
@click.option("--keyword", default=None, help="Match against name and description.")
@click.option("--category", default=None, help="Only this category.")
@click.option("--in-stock", is_flag=True, default=False, help="Hide sold-out products.")
def product_list(keyword: str | None, category: str | None, in_stock: bool) -> None:
    """List or search the catalog."""
    handler = SearchProductsHandler(uow=unit_of_work(read_only=True))

    try:
        products = handler.handle(keyword=keyword, category=category, in_stock_only=in_stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_products(products)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, show_default=True, help="Initial stock.")
@click.option("--category", default=None, help="Category.")
@click.option("--description", default=None, help="Description.")
@as_email_option
def product_add(
    name: str,
    price: str,
    stock: int,
    category: str | None,
    description: str | None,
    as_email: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(
            acting_user(as_email),
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price} (stock {product.stock})")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--category", default=None, help="New category.")
@click.option("--description", default=None, help="New description.")
@as_email_option
def product_update(
    product_id: int,
    name: str | None,
    price: str | None,
    stock: int | None,
    category: str | None,
    description: str | None,
    as_email: str,
) -> None:
    """Edit a product's catalog fields."""
    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(
            acting_user(as_email),
            product_id=product_id,
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: {product.name} at {product.price} (stock {product.stock})")


@click.command("restock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@as_email_option
def product_restock(product_id: int, quantity: int, as_email: str) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(acting_user(as_email), product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} restocked, stock is now {product.stock}")


@click.command("deduct")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to take out.")
@as_email_option
def product_deduct(product_id: int, quantity: int, as_email: str) -> None:
    """Take units out of a product's stock (never below zero)."""
    handler = DeductStockHandler(uow=unit_of_work())

    try:
        product = handler.handle(acting_user(as_email), product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} stock reduced, stock is now {product.stock}")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@as_email_option
def product_delete(product_id: int, as_email: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(uow=unit_of_work())

    try:
        handler.handle(acting_user(as_email), product_id=product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
