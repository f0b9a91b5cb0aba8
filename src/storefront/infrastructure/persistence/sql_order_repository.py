"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from collections import defaultdict
from datetime import timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.domain.exceptions import OrderNotFoundError
from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.orm import OrderItemRecord, OrderRecord


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        record = OrderRecord(
            user_id=order.user_id,
            status=order.status,
            total_amount=order.total.amount,
            shipping_address=order.shipping_address,
            created_at=order.created_at,
        )
        self._session.add(record)
        self._session.flush()
        order.id = record.id

        self._session.add_all(
            OrderItemRecord(
                order_id=record.id,
                product_id=line.product_id,
                quantity=line.quantity.value,
                price=line.price.amount,
            )
            for line in order.lines
        )
        self._session.flush()

    def get_by_id(self, order_id: int) -> Order | None:
        record = self._session.get(OrderRecord, order_id, populate_existing=True)
        if record is None:
            return None
        return self._load_many([record])[0]

    def save(self, order: Order) -> None:
        record = self._session.get(OrderRecord, order.id)
        if record is None:
            raise OrderNotFoundError(order.id)  # type: ignore[arg-type]
        record.status = order.status
        self._session.flush()

    def list_for_user(self, user_id: int) -> list[Order]:
        stmt = self._newest_first(select(OrderRecord).where(OrderRecord.user_id == user_id))
        return self._load_many(list(self._session.scalars(stmt)))

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        stmt = select(OrderRecord)
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status)
        return self._load_many(list(self._session.scalars(self._newest_first(stmt))))

    def count_by_status(self) -> dict[OrderStatus, int]:
        stmt = select(OrderRecord.status, func.count(OrderRecord.id)).group_by(
            OrderRecord.status
        )
        return {status: count for status, count in self._session.execute(stmt)}

    def revenue(self) -> Money:
        stmt = select(func.coalesce(func.sum(OrderRecord.total_amount), 0)).where(
            OrderRecord.status != OrderStatus.CANCELLED
        )
        return Money.of(self._session.execute(stmt).scalar_one())

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _newest_first(stmt):
        return stmt.order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc()).execution_options(
            populate_existing=True
        )

    def _load_many(self, records: list[OrderRecord]) -> list[Order]:
        if not records:
            return []
        items_stmt = (
            select(OrderItemRecord)
            .where(OrderItemRecord.order_id.in_([r.id for r in records]))
            .order_by(OrderItemRecord.id)
        )
        items_by_order: dict[int, list[OrderItemRecord]] = defaultdict(list)
        for item in self._session.scalars(items_stmt):
            items_by_order[item.order_id].append(item)
        return [self._to_domain(r, items_by_order[r.id]) for r in records]

    @staticmethod
    def _to_domain(record: OrderRecord, items: list[OrderItemRecord]) -> Order:
        created_at = record.created_at
        if created_at.tzinfo is None:
            # SQLite hands back naive datetimes; they were stored as UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=record.id,
            user_id=record.user_id,
            lines=[
                OrderLine(
                    product_id=item.product_id,
                    quantity=Quantity(item.quantity),
                    price=Money.of(item.price),
                )
                for item in items
            ],
            shipping_address=record.shipping_address,
            status=record.status,
            created_at=created_at,
        )
