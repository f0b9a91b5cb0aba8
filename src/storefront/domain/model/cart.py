"""Cart aggregate, one per user, created lazily.

The cart exclusively owns its lines.  At most one line exists per product;
adding a product that is already in the cart merges the quantities.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import CartLineNotFoundError
from storefront.domain.model.value_objects import Quantity


@dataclass
class CartLine:
    id: int | None
    product_id: int
    quantity: Quantity


@dataclass
class Cart:
    id: int | None
    user_id: int
    lines: list[CartLine] = field(default_factory=list)

    @staticmethod
    def empty_for(user_id: int) -> Cart:
        return Cart(id=None, user_id=user_id)

    def find_line(self, product_id: int) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def get_line(self, line_id: int) -> CartLine:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise CartLineNotFoundError(line_id)

    def add(self, product_id: int, quantity: Quantity) -> CartLine:
        """Add *quantity* of a product, merging into an existing line."""
        line = self.find_line(product_id)
        if line is not None:
            line.quantity = Quantity(line.quantity.value + quantity.value)
            return line
        line = CartLine(id=None, product_id=product_id, quantity=quantity)
        self.lines.append(line)
        return line

    def update_quantity(self, line_id: int, quantity: Quantity) -> CartLine:
        line = self.get_line(line_id)
        line.quantity = quantity
        return line

    def remove(self, line_id: int) -> CartLine:
        line = self.get_line(line_id)
        self.lines.remove(line)
        return line

    def clear(self) -> None:
        self.lines.clear()

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    @property
    def is_empty(self) -> bool:
        return not self.lines
