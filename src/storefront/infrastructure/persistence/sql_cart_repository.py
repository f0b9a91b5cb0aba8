"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.orm import CartItemRecord, CartRecord


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_for_user(self, user_id: int) -> Cart | None:
        record = self._session.scalars(
            select(CartRecord).where(CartRecord.user_id == user_id)
        ).first()
        return self._load(record) if record is not None else None

    def get_by_line_id(self, line_id: int) -> Cart | None:
        item = self._session.get(CartItemRecord, line_id, populate_existing=True)
        if item is None:
            return None
        record = self._session.get(CartRecord, item.cart_id)
        return self._load(record) if record is not None else None

    def save(self, cart: Cart) -> None:
        if cart.id is None:
            record = CartRecord(user_id=cart.user_id)
            self._session.add(record)
            self._session.flush()
            cart.id = record.id

        stored = {item.id: item for item in self._items(cart.id)}
        kept = {line.id for line in cart.lines if line.id is not None}

        for item_id, item in stored.items():
            if item_id not in kept:
                self._session.delete(item)
        self._session.flush()

        for line in cart.lines:
            if line.id is None:
                item = CartItemRecord(
                    cart_id=cart.id,
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                )
                self._session.add(item)
                self._session.flush()
                line.id = item.id
            else:
                stored[line.id].quantity = line.quantity.value
        self._session.flush()

    def clear(self, user_id: int) -> None:
        cart_id = self._session.scalars(
            select(CartRecord.id).where(CartRecord.user_id == user_id)
        ).first()
        if cart_id is None:
            return
        self._session.execute(delete(CartItemRecord).where(CartItemRecord.cart_id == cart_id))

    # --- Mapping --------------------------------------------------------------

    def _items(self, cart_id: int) -> list[CartItemRecord]:
        stmt = (
            select(CartItemRecord)
            .where(CartItemRecord.cart_id == cart_id)
            .order_by(CartItemRecord.id)
            .execution_options(populate_existing=True)
        )
        return list(self._session.scalars(stmt))

    def _load(self, record: CartRecord) -> Cart:
        return Cart(
            id=record.id,
            user_id=record.user_id,
            lines=[
                CartLine(
                    id=item.id,
                    product_id=item.product_id,
                    quantity=Quantity(item.quantity),
                )
                for item in self._items(record.id)
            ],
        )
