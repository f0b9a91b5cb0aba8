"""Application service: seed an empty store with demo accounts and products.

Each part only runs when its table is empty, so seeding is idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.security import PasswordHasher

logger = structlog.get_logger(__name__)

ADMIN_EMAIL = "admin@storefront.local"
DEMO_USER_EMAIL = "user@storefront.local"
DEMO_PASSWORD = "123456"

# name, description, price, stock, category
DEMO_PRODUCTS = [
    ("iPhone 15 Pro", "Flagship phone with the A17 Pro chip", "7999", 50, "Electronics"),
    ("MacBook Air M3", "Thin and light laptop for work and study", "8999", 30, "Electronics"),
    ("AirPods Pro", "Wireless earbuds with active noise cancelling", "1899", 100, "Electronics"),
    ("iPad Air", "Tablet with Apple Pencil support", "4399", 40, "Electronics"),
    ("White Oxford Shirt", "100% cotton, business casual", "299", 200, "Clothing"),
    ("Jeans", "Classic blue denim", "399", 150, "Clothing"),
    ("Running Shoes", "Breathable everyday trainers", "699", 80, "Clothing"),
    ("Thinking in Java", "Classic Java programming textbook", "89", 60, "Books"),
    ("Introduction to Algorithms", "Computer science classic", "128", 35, "Books"),
    ("Design Patterns", "Elements of reusable object-oriented software", "98", 50, "Books"),
    ("Desk Lamp", "Minimal LED lamp", "299", 90, "Home"),
    ("Scented Candle", "Soy wax candle, several scents", "68", 300, "Home"),
]


@dataclass(frozen=True)
class SeedResult:
    users_created: int
    products_created: int


class SeedStoreHandler:

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher) -> None:
        self._uow = uow
        self._hasher = hasher

    def handle(self) -> SeedResult:
        users_created = 0
        products_created = 0

        with self._uow as uow:
            if uow.users.count() == 0:
                digest = self._hasher.hash(DEMO_PASSWORD)
                uow.users.add(User.register("admin", ADMIN_EMAIL, digest, Role.ADMIN))
                uow.users.add(User.register("testuser", DEMO_USER_EMAIL, digest))
                users_created = 2

            if not uow.products.list_all():
                for name, description, price, stock, category in DEMO_PRODUCTS:
                    uow.products.add(
                        Product.create(
                            name=name,
                            price=Money.of(price),
                            stock=stock,
                            category=category,
                            description=description,
                        )
                    )
                products_created = len(DEMO_PRODUCTS)

            uow.commit()

        logger.info(
            "Store seeded",
            users_created=users_created,
            products_created=products_created,
        )
        return SeedResult(users_created=users_created, products_created=products_created)
