"""Product aggregate.

Products live independently of orders and carts.  Stock is the only
resource contended by concurrent flows (checkout, cancellation, restock),
so the two stock methods here are the only legal stock mutations.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.value_objects import MAX_QUANTITY, Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0
    category: str | None = None
    description: str | None = None
    image_url: str | None = None

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock: int = 0,
        category: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_price(price)
        _check_stock(stock)
        return Product(
            id=None,
            name=name.strip(),
            price=price,
            stock=stock,
            category=category.strip() if category else None,
            description=description,
            image_url=image_url,
        )

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def decrease_stock(self, quantity: int) -> None:
        """Take *quantity* units out of stock."""
        if quantity <= 0:
            raise ValidationError("Stock decrement must be positive")
        if quantity > self.stock:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.stock})"
            )
        self.stock -= quantity

    def increase_stock(self, quantity: int) -> None:
        """Put *quantity* units back, up to ``MAX_QUANTITY`` in total."""
        if quantity <= 0:
            raise ValidationError("Stock increment must be positive")
        _check_stock(self.stock + quantity)
        self.stock += quantity

    def update_details(
        self,
        name: str | None = None,
        price: Money | None = None,
        category: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> None:
        """Edit catalog fields.

        Stock is not edited here; it only moves through the two stock
        methods.  A price change does NOT affect any existing orders
        because order lines capture a price snapshot at creation time.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if price is not None:
            _check_price(price)
            self.price = price
        if category is not None:
            self.category = category.strip() or None
        if description is not None:
            self.description = description
        if image_url is not None:
            self.image_url = image_url


def _check_price(price: Money) -> None:
    if price.is_zero:
        raise ValidationError("Product price must be greater than zero")


def _check_stock(stock: int) -> None:
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")
    if stock > MAX_QUANTITY:
        raise ValidationError(f"Stock cannot exceed {MAX_QUANTITY}, got {stock}")
