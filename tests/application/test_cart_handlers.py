"""Tests for the cart use cases."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.edit_cart_line import RemoveCartLineHandler, UpdateCartLineHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import (
    CartLineNotFoundError,
    InsufficientStockError,
    PermissionDeniedError,
    ProductNotFoundError,
)
from tests.fakes import FakeUnitOfWork, make_product, make_user

ALICE = make_user(1, "alice")
BOB = make_user(2, "bob")


def _uow() -> FakeUnitOfWork:
    return FakeUnitOfWork(
        products=[
            make_product(1, "Widget", "15.00", stock=10),
            make_product(2, "Gadget", "25.00", stock=3),
        ]
    )


class TestShowCart:

    def test_cart_is_empty_before_first_use(self):
        dto = ShowCartHandler(_uow()).handle(ALICE)
        assert dto.items == []
        assert dto.total == "0.00"

    def test_uses_current_prices(self):
        uow = _uow()
        AddToCartHandler(uow).handle(ALICE, 1, 2)
        product = uow.products.get_by_id(1)
        product.update_details(price=product.price + product.price)
        uow.products.save(product)

        dto = ShowCartHandler(uow).handle(ALICE)
        assert dto.items[0].unit_price == "30.00"
        assert dto.total == "60.00"


class TestAddToCart:

    def test_creates_cart_lazily(self):
        uow = _uow()
        dto = AddToCartHandler(uow).handle(ALICE, product_id=1, quantity=2)
        assert dto.item_count == 2
        assert dto.total == "30.00"
        assert dto.items[0].product_name == "Widget"

    def test_same_product_merges_into_one_line(self):
        uow = _uow()
        handler = AddToCartHandler(uow)
        handler.handle(ALICE, 1, 2)
        dto = handler.handle(ALICE, 1, 3)
        assert len(dto.items) == 1
        assert dto.items[0].quantity == 5

    def test_merged_quantity_checked_against_stock(self):
        uow = _uow()
        handler = AddToCartHandler(uow)
        handler.handle(ALICE, 2, 2)
        with pytest.raises(InsufficientStockError, match="want 4, have 3"):
            handler.handle(ALICE, 2, 2)
        assert ShowCartHandler(uow).handle(ALICE).items[0].quantity == 2

    def test_unknown_product(self):
        with pytest.raises(ProductNotFoundError):
            AddToCartHandler(_uow()).handle(ALICE, 42, 1)


class TestEditCartLine:

    def _cart_with_line(self):
        uow = _uow()
        dto = AddToCartHandler(uow).handle(ALICE, 1, 1)
        return uow, dto.items[0].id

    def test_update_quantity(self):
        uow, line_id = self._cart_with_line()
        dto = UpdateCartLineHandler(uow).handle(ALICE, line_id, 4)
        assert dto.items[0].quantity == 4

    def test_update_beyond_stock_rejected(self):
        uow, line_id = self._cart_with_line()
        with pytest.raises(InsufficientStockError):
            UpdateCartLineHandler(uow).handle(ALICE, line_id, 11)

    def test_other_users_line_rejected(self):
        uow, line_id = self._cart_with_line()
        with pytest.raises(PermissionDeniedError):
            UpdateCartLineHandler(uow).handle(BOB, line_id, 2)
        with pytest.raises(PermissionDeniedError):
            RemoveCartLineHandler(uow).handle(BOB, line_id)

    def test_unknown_line(self):
        uow, _ = self._cart_with_line()
        with pytest.raises(CartLineNotFoundError):
            RemoveCartLineHandler(uow).handle(ALICE, 999)

    def test_remove_line(self):
        uow, line_id = self._cart_with_line()
        dto = RemoveCartLineHandler(uow).handle(ALICE, line_id)
        assert dto.items == []


class TestClearCart:

    def test_clear(self):
        uow = _uow()
        AddToCartHandler(uow).handle(ALICE, 1, 1)
        AddToCartHandler(uow).handle(ALICE, 2, 1)
        ClearCartHandler(uow).handle(ALICE)
        assert ShowCartHandler(uow).handle(ALICE).items == []

    def test_clear_without_cart_is_noop(self):
        ClearCartHandler(_uow()).handle(BOB)
