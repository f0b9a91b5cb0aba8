"""Fixtures for tests that run against a real SQLite database file."""

import pytest

from storefront.application.seed_store import SeedStoreHandler
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.config import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'storefront-test.db'}",
        secret_key="test-secret",
        log_level="WARNING",
    )


@pytest.fixture
def container(settings):
    c = Container(settings)
    c.create_schema()
    yield c
    c.dispose()


@pytest.fixture
def seeded(container):
    SeedStoreHandler(container.unit_of_work(), container.password_hasher).handle()
    return container


@pytest.fixture
def customer(container) -> User:
    user = User.register("carol", "carol@example.com", container.password_hasher.hash("secret1"))
    with container.unit_of_work() as uow:
        uow.users.add(user)
        uow.commit()
    return user


@pytest.fixture
def add_product(container):
    def _add(name: str = "Widget", price: str = "15.00", stock: int = 10, category: str = "Gadgets") -> Product:
        product = Product.create(name=name, price=Money.of(price), stock=stock, category=category)
        with container.unit_of_work() as uow:
            uow.products.add(product)
            uow.commit()
        return product

    return _add
