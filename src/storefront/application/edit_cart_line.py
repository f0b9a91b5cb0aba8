"""Application services: change or remove a single cart line.

Lines are addressed by id, so every mutation first checks that the line's
cart belongs to the acting user.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.show_cart import build_cart_dto
from storefront.domain.exceptions import (
    CartLineNotFoundError,
    InsufficientStockError,
    PermissionDeniedError,
    ProductNotFoundError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def _owned_cart(uow: UnitOfWork, actor: User, line_id: int) -> Cart:
    cart = uow.carts.get_by_line_id(line_id)
    if cart is None:
        raise CartLineNotFoundError(line_id)
    if not cart.is_owned_by(actor.id):  # type: ignore[arg-type]
        raise PermissionDeniedError(f"No permission to modify cart line #{line_id}")
    return cart


class UpdateCartLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, line_id: int, quantity: int) -> CartDTO:
        qty = Quantity(quantity)
        with self._uow as uow:
            cart = _owned_cart(uow, actor, line_id)
            line = cart.get_line(line_id)

            product = uow.products.get_by_id(line.product_id)
            if product is None:
                raise ProductNotFoundError(line.product_id)
            if qty.value > product.stock:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(want {qty.value}, have {product.stock})"
                )

            cart.update_quantity(line_id, qty)
            uow.carts.save(cart)
            dto = build_cart_dto(uow, cart)
            uow.commit()

        logger.info("Cart line updated", user_id=actor.id, line_id=line_id, quantity=qty.value)
        return dto


class RemoveCartLineHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, line_id: int) -> CartDTO:
        with self._uow as uow:
            cart = _owned_cart(uow, actor, line_id)
            cart.remove(line_id)
            uow.carts.save(cart)
            dto = build_cart_dto(uow, cart)
            uow.commit()

        logger.info("Cart line removed", user_id=actor.id, line_id=line_id)
        return dto
