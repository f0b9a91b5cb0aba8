"""Application service: Clear Cart use case (idempotent)."""

from __future__ import annotations

import structlog

from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, actor: User) -> None:
        with self._uow as uow:
            uow.carts.clear(actor.id)  # type: ignore[arg-type]
            uow.commit()
        logger.info("Cart cleared", user_id=actor.id)
