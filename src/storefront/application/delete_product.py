"""Application service: Delete Product use case (administrators).

Cart lines pointing at the product go with it; order lines keep their
product id and price snapshot as history.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User, product_id: int) -> None:
        require_admin(actor)
        with self._uow as uow:
            uow.products.delete(product_id)
            uow.commit()
        logger.info("Product deleted", product_id=product_id)
