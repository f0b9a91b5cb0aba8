"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / HTTP layers and the application layer
without exposing domain internals to the outside world.  Amounts are
rendered as fixed-point strings (e.g. "7999.00").
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.user import User


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: int
    quantity: int
    price: str  # snapshot taken when the order was placed
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: int
    status: str
    shipping_address: str
    items: list[OrderLineDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    price: str
    stock: int
    category: str | None
    description: str | None
    image_url: str | None


@dataclass(frozen=True)
class CartLineDTO:
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # current catalog price, not a snapshot
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    user_id: int
    items: list[CartLineDTO]
    item_count: int
    total: str


@dataclass(frozen=True)
class UserDTO:
    id: int
    username: str
    email: str
    role: str


@dataclass(frozen=True)
class AuthResultDTO:
    token: str
    user: UserDTO


@dataclass(frozen=True)
class OrderStatisticsDTO:
    total_orders: int
    by_status: dict[str, int]
    revenue: str


# --- Mapping ------------------------------------------------------------------


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        shipping_address=order.shipping_address,
        items=[
            OrderLineDTO(
                product_id=line.product_id,
                quantity=line.quantity.value,
                price=str(line.price),
                subtotal=str(line.subtotal),
            )
            for line in order.lines
        ],
        total=str(order.total),
        created_at=order.created_at.isoformat(),
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        price=str(product.price),
        stock=product.stock,
        category=product.category,
        description=product.description,
        image_url=product.image_url,
    )


def to_user_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,  # type: ignore[arg-type]
        username=user.username,
        email=user.email,
        role=user.role.value,
    )
