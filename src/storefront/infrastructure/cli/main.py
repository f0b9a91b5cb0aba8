import click

from storefront.infrastructure.cli.db_commands import db_init, db_seed, user_create
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_place,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_deduct,
    product_delete,
    product_list,
    product_restock,
    product_update,
)


@click.group()
def cli() -> None:
    """Storefront: catalog, carts and orders"""


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def user() -> None:
    """Manage user accounts."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
db.add_command(db_init)
db.add_command(db_seed)
user.add_command(user_create)
product.add_command(product_add)
product.add_command(product_deduct)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
