"""Application service: Place Order use case.

This is the order transaction coordinator: it turns a checkout request
into a persisted PENDING order.  Stock decrements, the order insert and
the cart clear happen in one unit of work, so a failure on any line
leaves every store exactly as it was.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, OrderLineSpec, to_order_dto
from storefront.domain.exceptions import DomainException, ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        actor: User,
        shipping_address: str,
        lines: list[OrderLineSpec] | None = None,
    ) -> OrderDTO:
        """Place an order for *actor*.

        Steps:
        1. Resolve the requested lines (explicit, or the actor's cart
           when *lines* is None).
        2. Debit stock line by line via the allocation service, which
           snapshots prices.
        3. Let the Order aggregate validate and persist it as PENDING.
        4. Clear the actor's cart and commit.
        """
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        try:
            with self._uow as uow:
                requested = self._requested_lines(uow, actor, lines)

                svc = StockAllocationService(uow.products)
                order_lines = svc.allocate(requested)

                order = Order.create(
                    user_id=actor.id,  # type: ignore[arg-type]
                    shipping_address=shipping_address,
                    lines=order_lines,
                )
                uow.orders.add(order)
                uow.carts.clear(actor.id)  # type: ignore[arg-type]
                uow.commit()
        except DomainException as exc:
            logger.warning(
                "Order rejected",
                user_id=actor.id,
                code=exc.code,
                reason=str(exc),
            )
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=actor.id,
            lines=len(order.lines),
            total=str(order.total),
        )
        return to_order_dto(order)

    @staticmethod
    def _requested_lines(
        uow: UnitOfWork,
        actor: User,
        lines: list[OrderLineSpec] | None,
    ) -> list[tuple[int, int]]:
        if lines is None:
            cart = uow.carts.get_for_user(actor.id)  # type: ignore[arg-type]
            requested = (
                [(line.product_id, line.quantity.value) for line in cart.lines]
                if cart is not None
                else []
            )
        else:
            requested = [(item.product_id, item.quantity) for item in lines]

        if not requested:
            raise ValidationError("Order must contain at least one item")
        return requested
