"""Application services: catalog queries (read-only, no authentication)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, to_product_dto
from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class SearchProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        keyword: str | None = None,
        category: str | None = None,
        in_stock_only: bool = False,
    ) -> list[ProductDTO]:
        keyword = keyword.strip() if keyword else None
        category = category.strip() if category else None
        with self._uow as uow:
            products = uow.products.search(
                keyword=keyword or None,
                category=category or None,
                in_stock_only=in_stock_only,
            )
        return [to_product_dto(p) for p in products]


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return to_product_dto(product)


class ListCategoriesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[str]:
        with self._uow as uow:
            return uow.products.categories()
