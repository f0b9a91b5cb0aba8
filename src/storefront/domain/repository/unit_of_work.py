"""Abstract unit of work.

A unit of work is the transaction boundary of every use case: all
repository calls made inside one ``with uow:`` block either become
visible together on ``commit()`` or not at all.  Leaving the block
without committing, or through an exception, rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    carts: CartRepository
    orders: OrderRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # Rolling back after a successful commit is a no-op.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change of this unit of work durable and visible."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change of this unit of work."""
