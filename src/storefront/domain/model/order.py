"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items.  Lines reference
products by id only; there are no live back-references to the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidStatusTransitionError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: int
    quantity: Quantity
    price: Money  # locked at order-creation time

    def __post_init__(self) -> None:
        if self.price.is_zero:
            raise ValidationError(
                f"Order line for product #{self.product_id} must have a positive price"
            )

    @property
    def subtotal(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    lines: list[OrderLine]
    shipping_address: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: int, shipping_address: str, lines: list[OrderLine]) -> Order:
        """Create a new PENDING order, enforcing all invariants."""
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")

        if not lines:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            user_id=user_id,
            lines=list(lines),
            shipping_address=shipping_address.strip(),
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> None:
        """Transition PENDING|CONFIRMED -> CANCELLED.

        Stock restoration must happen in the same unit of work
        (coordinated by the application handler via the domain service).
        """
        if self.status not in CANCELLABLE_STATUSES:
            raise InvalidStatusTransitionError(
                f"Cannot cancel order #{self.id} in {self.status.value} status"
            )
        self.status = OrderStatus.CANCELLED

    def change_status(self, new_status: OrderStatus) -> bool:
        """Administrative transition to *new_status*.

        Returns True when this call moved the order into CANCELLED, i.e.
        when the caller must restore stock.  CANCELLED is terminal: setting
        it again is a no-op and leaving it is rejected, so stock is
        restored at most once per order.
        """
        if self.status == OrderStatus.CANCELLED:
            if new_status == OrderStatus.CANCELLED:
                return False
            raise InvalidStatusTransitionError(
                f"Order #{self.id} is cancelled and cannot move to {new_status.value}"
            )
        self.status = new_status
        return new_status == OrderStatus.CANCELLED

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
