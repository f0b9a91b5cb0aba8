"""Application service: Cancel Order use case.

Only PENDING and CONFIRMED orders can be cancelled, by their owner or an
administrator.  The stock taken by the order is restored in the same
unit of work as the status change.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_access
from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_allocation_service import StockAllocationService

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            require_access(actor, order.user_id, f"order #{order_id}")

            # Transition first: it rejects SHIPPED/DELIVERED/CANCELLED
            # orders before any stock is touched.
            order.cancel()

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
        logger.info("Order cancelled", order_id=order_id, by_user=actor.id)
        return to_order_dto(order)
