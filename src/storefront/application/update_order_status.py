"""Application service: Update Order Status use case (administrators).

A direct status transition.  When a live order becomes CANCELLED its
stock is restored exactly once; the Order aggregate refuses to leave
CANCELLED, so a second restoration can never happen.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


def parse_status(raw: str | OrderStatus) -> OrderStatus:
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError as exc:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status {raw!r} (expected one of {allowed})"
        ) from exc


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, order_id: int, status: str | OrderStatus) -> OrderDTO:
        require_admin(actor)
        new_status = parse_status(status)

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            old_status = order.status
            needs_restore = order.change_status(new_status)

            skipped: list[int] = []
            if needs_restore:
                svc = StockAllocationService(uow.products)
                skipped = svc.restore_for_order(order)

            uow.orders.save(order)
            uow.commit()

        if skipped:
            logger.warning(
                "Stock not restored for deleted products",
                order_id=order_id,
                product_ids=skipped,
            )
        logger.info(
            "Order status changed",
            order_id=order_id,
            old_status=old_status.value,
            new_status=new_status.value,
            stock_restored=needs_restore,
        )
        return to_order_dto(order)
