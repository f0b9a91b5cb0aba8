"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by id."""

    @abstractmethod
    def search(
        self,
        keyword: str | None = None,
        category: str | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        """Filter by keyword (name or description), category and stock."""

    @abstractmethod
    def categories(self) -> list[str]:
        """Return the distinct, non-empty categories in alphabetical order."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product and assign its ``id``."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist catalog edits of an existing product."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product; raises ProductNotFoundError if absent."""

    @abstractmethod
    def decrease_stock(self, product_id: int, quantity: int) -> None:
        """Atomically take *quantity* units out of stock.

        Must be a single guarded update (``stock >= quantity``), never a
        read-then-write pair.  Raises ProductNotFoundError when the row is
        absent and InsufficientStockError when the guard rejects the update;
        stock is unchanged in both cases.
        """

    @abstractmethod
    def increase_stock(self, product_id: int, quantity: int) -> None:
        """Atomically add *quantity* units.

        Raises ProductNotFoundError, or ValidationError when the total would
        exceed ``MAX_QUANTITY``.
        """
