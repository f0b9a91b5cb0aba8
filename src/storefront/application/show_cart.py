"""Application service: Show Cart use case (query).

Cart lines carry no price; the current catalog price is looked up for
display and for the cart total.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartLineDTO
from storefront.domain.model.cart import Cart
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


def build_cart_dto(uow: UnitOfWork, cart: Cart) -> CartDTO:
    items: list[CartLineDTO] = []
    total = Money.zero()
    for line in cart.lines:
        product = uow.products.get_by_id(line.product_id)
        if product is None:
            continue
        subtotal = product.price * line.quantity.value
        total = total + subtotal
        items.append(
            CartLineDTO(
                id=line.id,  # type: ignore[arg-type]
                product_id=line.product_id,
                product_name=product.name,
                quantity=line.quantity.value,
                unit_price=str(product.price),
                subtotal=str(subtotal),
            )
        )
    return CartDTO(
        user_id=cart.user_id,
        items=items,
        item_count=sum(item.quantity for item in items),
        total=str(total),
    )


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User) -> CartDTO:
        with self._uow as uow:
            cart = uow.carts.get_for_user(actor.id)  # type: ignore[arg-type]
            if cart is None:
                cart = Cart.empty_for(actor.id)  # type: ignore[arg-type]
            return build_cart_dto(uow, cart)
