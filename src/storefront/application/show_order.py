"""Application services: order queries."""

from __future__ import annotations

from storefront.application.authorization import require_access, require_admin
from storefront.application.dto import OrderDTO, OrderStatisticsDTO, to_order_dto
from storefront.application.update_order_status import parse_status
from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, order_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        require_access(actor, order.user_id, f"order #{order_id}")
        return to_order_dto(order)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        actor: User,
        all_orders: bool = False,
        status: str | OrderStatus | None = None,
    ) -> list[OrderDTO]:
        """List the actor's own orders, or every order for administrators.

        The status filter only applies to the administrative listing.
        """
        if all_orders:
            require_admin(actor)
            wanted = parse_status(status) if status is not None else None
            with self._uow as uow:
                orders = uow.orders.list_all(status=wanted)
        else:
            with self._uow as uow:
                orders = uow.orders.list_for_user(actor.id)  # type: ignore[arg-type]
        return [to_order_dto(order) for order in orders]


class OrderStatisticsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User) -> OrderStatisticsDTO:
        require_admin(actor)
        with self._uow as uow:
            counts = uow.orders.count_by_status()
            revenue = uow.orders.revenue()
        return OrderStatisticsDTO(
            total_orders=sum(counts.values()),
            by_status={status.value: counts.get(status, 0) for status in OrderStatus},
            revenue=str(revenue),
        )
