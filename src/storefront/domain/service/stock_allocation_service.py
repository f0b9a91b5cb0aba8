"""Domain service: Stock Allocation.

This service coordinates the cross-aggregate work of taking stock out of
the catalog for a set of requested lines, and of putting it back when an
order is cancelled.  It lives in the domain layer because the stock rules
are core business rules, not just orchestration.

It must run inside a unit of work: it raises on the first failing line
and relies on the transaction rollback to undo decrements already applied
for earlier lines.
"""

from __future__ import annotations

from storefront.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    StockConflictError,
)
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.product_repository import ProductRepository


class StockAllocationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def allocate(self, requested: list[tuple[int, int]]) -> list[OrderLine]:
        """Debit stock for every ``(product_id, quantity)`` pair, in order.

        For each line:
          1. load the product (ProductNotFoundError if absent);
          2. check stock (InsufficientStockError);
          3. snapshot the current price into an OrderLine;
          4. issue the guarded decrement on the store.  If the guard
             rejects it although step 2 passed, another transaction
             depleted the row in between: StockConflictError.
        """
        lines: list[OrderLine] = []

        for product_id, qty in requested:
            quantity = Quantity(qty)
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            if product.stock < quantity.value:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(need {quantity.value}, have {product.stock})"
                )

            lines.append(
                OrderLine(
                    product_id=product_id,
                    quantity=quantity,
                    price=product.price,  # <-- price snapshot
                )
            )

            try:
                self._product_repo.decrease_stock(product_id, quantity.value)
            except InsufficientStockError as exc:
                raise StockConflictError(
                    f"Stock for {product.name} was taken by a concurrent order"
                ) from exc

        return lines

    def restore_for_order(self, order: Order) -> list[int]:
        """Put every line's quantity back into stock.

        Restoring fails only if stock would pass ``MAX_QUANTITY``.  Products
        deleted from the catalog since the order was placed are skipped;
        their ids are returned so the caller can report them.
        """
        skipped: list[int] = []
        for line in order.lines:
            try:
                self._product_repo.increase_stock(line.product_id, line.quantity.value)
            except ProductNotFoundError:
                skipped.append(line.product_id)
        return skipped
