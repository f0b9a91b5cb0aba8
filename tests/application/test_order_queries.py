"""Tests for order queries and statistics."""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.dto import OrderLineSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import (
    ListOrdersHandler,
    OrderStatisticsHandler,
    ShowOrderHandler,
)
from storefront.domain.exceptions import PermissionDeniedError
from tests.fakes import FakeUnitOfWork, make_admin, make_product, make_user

ALICE = make_user(1, "alice")
BOB = make_user(2, "bob")


def _setup():
    uow = FakeUnitOfWork(products=[make_product(1, "Widget", "10.00", stock=100)])
    place = PlaceOrderHandler(uow)
    first = place.handle(ALICE, "1 Main St", [OrderLineSpec(1, 1)])
    second = place.handle(ALICE, "1 Main St", [OrderLineSpec(1, 2)])
    third = place.handle(BOB, "2 Side St", [OrderLineSpec(1, 3)])
    return uow, first, second, third


class TestShowOrder:

    def test_owner_sees_order(self):
        uow, first, _, _ = _setup()
        assert ShowOrderHandler(uow).handle(ALICE, first.id).total == "10.00"

    def test_other_user_rejected(self):
        uow, first, _, _ = _setup()
        with pytest.raises(PermissionDeniedError):
            ShowOrderHandler(uow).handle(BOB, first.id)

    def test_admin_sees_any_order(self):
        uow, first, _, _ = _setup()
        assert ShowOrderHandler(uow).handle(make_admin(), first.id).id == first.id


class TestListOrders:

    def test_own_orders_newest_first(self):
        uow, first, second, _ = _setup()
        ids = [o.id for o in ListOrdersHandler(uow).handle(ALICE)]
        assert ids == [second.id, first.id]

    def test_all_orders_requires_admin(self):
        uow, *_ = _setup()
        with pytest.raises(PermissionDeniedError):
            ListOrdersHandler(uow).handle(ALICE, all_orders=True)

    def test_all_orders_filtered_by_status(self):
        uow, first, _, _ = _setup()
        CancelOrderHandler(uow).handle(ALICE, first.id)

        handler = ListOrdersHandler(uow)
        assert len(handler.handle(make_admin(), all_orders=True)) == 3
        cancelled = handler.handle(make_admin(), all_orders=True, status="cancelled")
        assert [o.id for o in cancelled] == [first.id]


class TestStatistics:

    def test_counts_and_revenue_exclude_cancelled(self):
        uow, first, _, _ = _setup()
        CancelOrderHandler(uow).handle(ALICE, first.id)

        stats = OrderStatisticsHandler(uow).handle(make_admin())

        assert stats.total_orders == 3
        assert stats.by_status["PENDING"] == 2
        assert stats.by_status["CANCELLED"] == 1
        assert stats.by_status["DELIVERED"] == 0
        assert stats.revenue == "50.00"

    def test_requires_admin(self):
        uow, *_ = _setup()
        with pytest.raises(PermissionDeniedError):
            OrderStatisticsHandler(uow).handle(ALICE)
