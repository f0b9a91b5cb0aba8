"""The order transaction against a real database, including a checkout race."""

import threading

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderLineSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import ConflictError, InsufficientStockError
from storefront.domain.model.user import User


def _stock(container, product_id: int) -> int:
    with container.unit_of_work() as uow:
        return uow.products.get_by_id(product_id).stock


def _order_count(container) -> int:
    with container.unit_of_work() as uow:
        return len(uow.orders.list_all())


class TestPlaceOrder:

    def test_cart_checkout(self, container, add_product, customer):
        widget = add_product("Widget", "15.00", stock=10)
        AddToCartHandler(container.unit_of_work()).handle(customer, widget.id, 2)

        dto = PlaceOrderHandler(container.unit_of_work()).handle(customer, "1 Main St")

        assert len(dto.items) == 1
        assert dto.items[0].quantity == 2
        assert dto.total == "30.00"
        assert _stock(container, widget.id) == 8
        with container.unit_of_work() as uow:
            assert uow.carts.get_for_user(customer.id).is_empty

    def test_quantity_above_stock(self, container, add_product, customer):
        widget = add_product(stock=10)
        with pytest.raises(InsufficientStockError):
            PlaceOrderHandler(container.unit_of_work()).handle(
                customer, "1 Main St", [OrderLineSpec(widget.id, 11)]
            )
        assert _stock(container, widget.id) == 10
        assert _order_count(container) == 0

    def test_all_or_nothing(self, container, add_product, customer):
        widget = add_product("Widget", stock=10)
        gadget = add_product("Gadget", stock=1)
        with pytest.raises(InsufficientStockError):
            PlaceOrderHandler(container.unit_of_work()).handle(
                customer,
                "1 Main St",
                [OrderLineSpec(widget.id, 3), OrderLineSpec(gadget.id, 2)],
            )
        assert _stock(container, widget.id) == 10
        assert _stock(container, gadget.id) == 1
        assert _order_count(container) == 0

    def test_cancel_restores_stock_once(self, container, add_product, customer):
        widget = add_product(stock=5)
        order = PlaceOrderHandler(container.unit_of_work()).handle(
            customer, "1 Main St", [OrderLineSpec(widget.id, 5)]
        )
        assert _stock(container, widget.id) == 0

        CancelOrderHandler(container.unit_of_work()).handle(customer, order.id)
        assert _stock(container, widget.id) == 5


class TestCheckoutRace:

    def test_two_checkouts_for_the_last_unit(self, container, add_product, customer):
        widget = add_product(stock=1)
        with container.unit_of_work() as uow:
            rival = User.register("dave", "dave@example.com", "digest")
            uow.users.add(rival)
            uow.commit()

        barrier = threading.Barrier(2)
        outcomes: list = []
        lock = threading.Lock()

        def checkout(user: User) -> None:
            # One unit of work per thread.
            handler = PlaceOrderHandler(container.unit_of_work())
            barrier.wait()
            try:
                result = handler.handle(user, "1 Main St", [OrderLineSpec(widget.id, 1)])
            except (InsufficientStockError, ConflictError) as exc:
                result = exc
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=checkout, args=(u,)) for u in (customer, rival)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert len(outcomes) == 2
        failures = [o for o in outcomes if isinstance(o, Exception)]
        assert len(failures) == 1
        assert _stock(container, widget.id) == 0
        assert _order_count(container) == 1
