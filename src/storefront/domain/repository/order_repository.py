"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order together with its lines and assign its ``id``."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a status change of an existing order."""

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return every order (optionally one status), newest first."""

    @abstractmethod
    def count_by_status(self) -> dict[OrderStatus, int]:
        """Return the number of orders per status (absent statuses omitted)."""

    @abstractmethod
    def revenue(self) -> Money:
        """Return the summed total of all orders that are not cancelled."""
