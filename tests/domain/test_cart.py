"""Unit tests for the Cart aggregate."""

import pytest

from storefront.domain.exceptions import CartLineNotFoundError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.value_objects import Quantity


def _cart() -> Cart:
    return Cart(
        id=1,
        user_id=7,
        lines=[CartLine(id=10, product_id=1, quantity=Quantity(2))],
    )


class TestCart:

    def test_empty_for(self):
        cart = Cart.empty_for(7)
        assert cart.id is None
        assert cart.is_empty
        assert cart.is_owned_by(7)

    def test_add_new_product_appends_line(self):
        cart = _cart()
        line = cart.add(2, Quantity(1))
        assert line.id is None
        assert len(cart.lines) == 2

    def test_add_existing_product_merges(self):
        cart = _cart()
        line = cart.add(1, Quantity(3))
        assert line.id == 10
        assert line.quantity == Quantity(5)
        assert len(cart.lines) == 1

    def test_update_quantity(self):
        cart = _cart()
        cart.update_quantity(10, Quantity(7))
        assert cart.find_line(1).quantity == Quantity(7)

    def test_unknown_line(self):
        with pytest.raises(CartLineNotFoundError, match="#99"):
            _cart().get_line(99)

    def test_remove(self):
        cart = _cart()
        cart.remove(10)
        assert cart.is_empty

    def test_clear(self):
        cart = _cart()
        cart.clear()
        assert cart.is_empty
