"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session

from storefront.domain.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import MAX_QUANTITY, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.orm import CartItemRecord, ProductRecord


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        # Stock is changed by Core UPDATEs, so never trust the identity map.
        record = self._session.get(ProductRecord, product_id, populate_existing=True)
        return self._to_domain(record) if record is not None else None

    def get_by_name(self, name: str) -> Product | None:
        stmt = select(ProductRecord).where(
            func.lower(ProductRecord.name) == name.strip().lower()
        )
        record = self._scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def list_all(self) -> list[Product]:
        stmt = select(ProductRecord).order_by(ProductRecord.id)
        return [self._to_domain(r) for r in self._scalars(stmt)]

    def search(
        self,
        keyword: str | None = None,
        category: str | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        stmt = select(ProductRecord)
        if keyword and keyword.strip():
            pattern = f"%{keyword.strip()}%"
            stmt = stmt.where(
                or_(
                    ProductRecord.name.ilike(pattern),
                    ProductRecord.description.ilike(pattern),
                )
            )
        if category and category.strip():
            stmt = stmt.where(func.lower(ProductRecord.category) == category.strip().lower())
        if in_stock_only:
            stmt = stmt.where(ProductRecord.stock > 0)
        stmt = stmt.order_by(ProductRecord.id)
        return [self._to_domain(r) for r in self._scalars(stmt)]

    def categories(self) -> list[str]:
        stmt = (
            select(ProductRecord.category)
            .distinct()
            .where(ProductRecord.category.is_not(None), ProductRecord.category != "")
            .order_by(ProductRecord.category)
        )
        return list(self._session.scalars(stmt))

    def add(self, product: Product) -> None:
        record = ProductRecord(
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
            category=product.category,
            image_url=product.image_url,
        )
        self._session.add(record)
        self._session.flush()
        product.id = record.id

    def save(self, product: Product) -> None:
        record = self._session.get(ProductRecord, product.id)
        if record is None:
            raise ProductNotFoundError(product.id)  # type: ignore[arg-type]
        record.name = product.name
        record.description = product.description
        record.price = product.price.amount
        record.category = product.category
        record.image_url = product.image_url
        self._session.flush()

    def delete(self, product_id: int) -> None:
        record = self._session.get(ProductRecord, product_id)
        if record is None:
            raise ProductNotFoundError(product_id)
        # Cart lines go with the product; order lines keep their snapshot.
        self._session.execute(
            delete(CartItemRecord).where(CartItemRecord.product_id == product_id)
        )
        self._session.delete(record)
        self._session.flush()

    def decrease_stock(self, product_id: int, quantity: int) -> None:
        result = self._session.execute(
            update(ProductRecord)
            .where(ProductRecord.id == product_id, ProductRecord.stock >= quantity)
            .values(stock=ProductRecord.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            if not self._exists(product_id):
                raise ProductNotFoundError(product_id)
            raise InsufficientStockError(
                f"Insufficient stock for product #{product_id} (need {quantity})"
            )

    def increase_stock(self, product_id: int, quantity: int) -> None:
        result = self._session.execute(
            update(ProductRecord)
            .where(
                ProductRecord.id == product_id,
                ProductRecord.stock <= MAX_QUANTITY - quantity,
            )
            .values(stock=ProductRecord.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            if not self._exists(product_id):
                raise ProductNotFoundError(product_id)
            raise ValidationError(
                f"Stock for product #{product_id} cannot exceed {MAX_QUANTITY}"
            )

    # --- Helpers --------------------------------------------------------------

    def _scalars(self, stmt):
        return self._session.scalars(stmt.execution_options(populate_existing=True))

    def _exists(self, product_id: int) -> bool:
        stmt = select(ProductRecord.id).where(ProductRecord.id == product_id)
        return self._session.execute(stmt).first() is not None

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            price=Money.of(record.price),
            stock=record.stock,
            category=record.category,
            description=record.description,
            image_url=record.image_url,
        )
