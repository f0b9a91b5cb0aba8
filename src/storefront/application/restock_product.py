"""Application services: manual stock adjustments (administrators).

Both directions go through the guarded repository operations, so a
deduction can never take stock below zero.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class RestockProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, product_id: int, quantity: int) -> ProductDTO:
        """Add *quantity* units to a product's stock with an atomic increment."""
        require_admin(actor)
        qty = Quantity(quantity)
        with self._uow as uow:
            uow.products.increase_stock(product_id, qty.value)
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            uow.commit()

        logger.info(
            "Product restocked",
            product_id=product_id,
            added=qty.value,
            stock=product.stock,
        )
        return to_product_dto(product)


class DeductStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, product_id: int, quantity: int) -> ProductDTO:
        """Take *quantity* units out of stock, e.g. for damaged goods.

        Fails with InsufficientStockError and leaves stock untouched when
        fewer than *quantity* units are left.
        """
        require_admin(actor)
        qty = Quantity(quantity)
        with self._uow as uow:
            uow.products.decrease_stock(product_id, qty.value)
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            uow.commit()

        logger.info(
            "Product stock deducted",
            product_id=product_id,
            removed=qty.value,
            stock=product.stock,
        )
        return to_product_dto(product)
