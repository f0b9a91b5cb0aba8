"""Application service: Update Product use case (administrators)."""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import MAX_QUANTITY, Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        actor: User,
        product_id: int,
        name: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Edit a product's catalog fields.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        require_admin(actor)
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if name is not None:
                clash = uow.products.get_by_name(name.strip())
                if clash is not None and clash.id != product_id:
                    raise ValidationError(f"Product '{name.strip()}' already exists")

            product.update_details(
                name=name,
                price=Money.of(price) if price is not None else None,
                category=category,
                description=description,
                image_url=image_url,
            )
            uow.products.save(product)

            # Stock only moves through the guarded stock operations.
            if stock is not None:
                if stock < 0:
                    raise ValidationError(f"Stock cannot be negative, got {stock}")
                if stock > MAX_QUANTITY:
                    raise ValidationError(f"Stock cannot exceed {MAX_QUANTITY}, got {stock}")
                delta = stock - product.stock
                if delta > 0:
                    uow.products.increase_stock(product_id, delta)
                elif delta < 0:
                    uow.products.decrease_stock(product_id, -delta)
                product = uow.products.get_by_id(product_id)

            uow.commit()

        logger.info("Product updated", product_id=product_id)
        return to_product_dto(product)  # type: ignore[arg-type]
