"""Application service: Add To Cart use case.

The cart is created on first use.  Adding a product already in the cart
merges into its line; the merged quantity must still be in stock.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.show_cart import build_cart_dto
from storefront.domain.exceptions import InsufficientStockError, ProductNotFoundError
from storefront.domain.model.cart import Cart
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, product_id: int, quantity: int = 1) -> CartDTO:
        qty = Quantity(quantity)
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            cart = uow.carts.get_for_user(actor.id)  # type: ignore[arg-type]
            if cart is None:
                cart = Cart.empty_for(actor.id)  # type: ignore[arg-type]

            existing = cart.find_line(product_id)
            wanted = qty.value + (existing.quantity.value if existing else 0)
            if wanted > product.stock:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(want {wanted}, have {product.stock})"
                )

            cart.add(product_id, qty)
            uow.carts.save(cart)
            dto = build_cart_dto(uow, cart)
            uow.commit()

        logger.info(
            "Cart line added",
            user_id=actor.id,
            product_id=product_id,
            quantity=qty.value,
        )
        return dto
