"""Application service: Add Product use case (administrators)."""

from __future__ import annotations

import structlog

from storefront.application.authorization import require_admin
from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        actor: User,
        name: str,
        price: str,
        stock: int = 0,
        category: str | None = None,
        description: str | None = None,
        image_url: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        require_admin(actor)
        product = Product.create(
            name=name,
            price=Money.of(price),
            stock=stock,
            category=category,
            description=description,
            image_url=image_url,
        )

        with self._uow as uow:
            if uow.products.get_by_name(product.name) is not None:
                raise ValidationError(f"Product '{product.name}' already exists")
            uow.products.add(product)
            uow.commit()

        logger.info("Product added", product_id=product.id, name=product.name)
        return to_product_dto(product)
