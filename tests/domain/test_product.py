"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import InsufficientStockError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import MAX_QUANTITY, Money


def _product(stock: int = 10) -> Product:
    return Product.create(name="Widget", price=Money.of("15.00"), stock=stock, category="Gadgets")


class TestProductCreation:

    def test_happy_path(self):
        p = Product.create(name="  Widget ", price=Money.of("15"), stock=3, category=" Gadgets ")
        assert p.id is None
        assert p.name == "Widget"
        assert p.category == "Gadgets"
        assert p.stock == 3
        assert p.in_stock

    def test_name_required(self):
        with pytest.raises(ValidationError, match="name is required"):
            Product.create(name="  ", price=Money.of("1"))

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            Product.create(name="Freebie", price=Money.zero())

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product.create(name="Widget", price=Money.of("1"), stock=-1)

    def test_oversized_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            Product.create(name="Widget", price=Money.of("1"), stock=MAX_QUANTITY + 1)

    def test_default_stock_is_zero(self):
        p = Product.create(name="Widget", price=Money.of("1"))
        assert p.stock == 0
        assert not p.in_stock


class TestStockMutations:

    def test_decrease_within_stock(self):
        p = _product(stock=10)
        p.decrease_stock(4)
        assert p.stock == 6

    def test_decrease_to_exactly_zero(self):
        p = _product(stock=2)
        p.decrease_stock(2)
        assert p.stock == 0
        assert not p.in_stock

    def test_decrease_beyond_stock_leaves_stock_unchanged(self):
        p = _product(stock=10)
        with pytest.raises(InsufficientStockError, match="need 11, have 10"):
            p.decrease_stock(11)
        assert p.stock == 10

    def test_decrease_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product().decrease_stock(0)

    def test_increase(self):
        p = _product(stock=0)
        p.increase_stock(5)
        assert p.stock == 5

    def test_increase_must_be_positive(self):
        with pytest.raises(ValidationError):
            _product().increase_stock(-1)

    def test_increase_past_the_cap_leaves_stock_unchanged(self):
        p = _product(stock=MAX_QUANTITY)
        with pytest.raises(ValidationError, match="cannot exceed"):
            p.increase_stock(1)
        assert p.stock == MAX_QUANTITY


class TestUpdateDetails:

    def test_only_given_fields_change(self):
        p = _product()
        p.update_details(price=Money.of("20"))
        assert p.price == Money.of("20.00")
        assert p.name == "Widget"
        assert p.category == "Gadgets"

    def test_blank_category_clears_it(self):
        p = _product()
        p.update_details(category="  ")
        assert p.category is None

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            _product().update_details(name=" ")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_details(price=Money.zero())
