"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_user(self, user_id: int) -> Cart | None:
        """Return the user's cart with its lines, or None if never created."""

    @abstractmethod
    def get_by_line_id(self, line_id: int) -> Cart | None:
        """Return the cart that owns the given line, or None."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the cart and synchronise its lines (insert/update/delete)."""

    @abstractmethod
    def clear(self, user_id: int) -> None:
        """Delete every line of the user's cart; no-op if there is none."""
