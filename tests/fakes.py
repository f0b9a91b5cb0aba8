"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQL repositories but
keep everything in dicts.  Repositories hand out copies, like the SQL
ones hand out freshly mapped aggregates, so nothing changes until it is
saved.  ``FakeUnitOfWork`` snapshots every store when a block is entered
and on commit, and rolls back to the last snapshot.
"""

from __future__ import annotations

import copy

from storefront.domain.exceptions import (
    AuthenticationError,
    InsufficientStockError,
    OrderNotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import MAX_QUANTITY, Money
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.security import Claims, PasswordHasher, TokenService


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self._next_id = 1
        for p in products or []:
            if p.id is None:
                self.add(p)
            else:
                self._store[p.id] = copy.deepcopy(p)
                self._next_id = max(self._next_id, p.id + 1)

    def get_by_id(self, product_id: int) -> Product | None:
        return copy.deepcopy(self._store.get(product_id))

    def get_by_name(self, name: str) -> Product | None:
        for p in self._store.values():
            if p.name.lower() == name.strip().lower():
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for _, p in sorted(self._store.items())]

    def search(
        self,
        keyword: str | None = None,
        category: str | None = None,
        in_stock_only: bool = False,
    ) -> list[Product]:
        result = []
        for p in self.list_all():
            if keyword:
                haystack = f"{p.name} {p.description or ''}".lower()
                if keyword.lower() not in haystack:
                    continue
            if category and (p.category or "").lower() != category.lower():
                continue
            if in_stock_only and not p.in_stock:
                continue
            result.append(p)
        return result

    def categories(self) -> list[str]:
        return sorted({p.category for p in self._store.values() if p.category})

    def add(self, product: Product) -> None:
        product.id = self._next_id
        self._next_id += 1
        self._store[product.id] = copy.deepcopy(product)

    def save(self, product: Product) -> None:
        stored = self._store.get(product.id)  # type: ignore[arg-type]
        if stored is None:
            raise ProductNotFoundError(product.id)  # type: ignore[arg-type]
        # Catalog edits only; stock moves through the stock methods.
        updated = copy.deepcopy(product)
        updated.stock = stored.stock
        self._store[product.id] = updated  # type: ignore[index]

    def delete(self, product_id: int) -> None:
        if product_id not in self._store:
            raise ProductNotFoundError(product_id)
        del self._store[product_id]

    def decrease_stock(self, product_id: int, quantity: int) -> None:
        stored = self._store.get(product_id)
        if stored is None:
            raise ProductNotFoundError(product_id)
        if stored.stock < quantity:
            raise InsufficientStockError(
                f"Insufficient stock for product #{product_id} (need {quantity})"
            )
        stored.stock -= quantity

    def increase_stock(self, product_id: int, quantity: int) -> None:
        stored = self._store.get(product_id)
        if stored is None:
            raise ProductNotFoundError(product_id)
        if stored.stock + quantity > MAX_QUANTITY:
            raise ValidationError(f"Stock for product #{product_id} cannot exceed {MAX_QUANTITY}")
        stored.stock += quantity

    # --- Test helpers ---------------------------------------------------------

    def stock_of(self, product_id: int) -> int:
        return self._store[product_id].stock


class FakeCartRepository(CartRepository):

    def __init__(self) -> None:
        self._store: dict[int, Cart] = {}
        self._next_cart_id = 1
        self._next_line_id = 1

    def get_for_user(self, user_id: int) -> Cart | None:
        return copy.deepcopy(self._store.get(user_id))

    def get_by_line_id(self, line_id: int) -> Cart | None:
        for cart in self._store.values():
            if any(line.id == line_id for line in cart.lines):
                return copy.deepcopy(cart)
        return None

    def save(self, cart: Cart) -> None:
        if cart.id is None:
            cart.id = self._next_cart_id
            self._next_cart_id += 1
        for line in cart.lines:
            if line.id is None:
                line.id = self._next_line_id
                self._next_line_id += 1
        self._store[cart.user_id] = copy.deepcopy(cart)

    def clear(self, user_id: int) -> None:
        cart = self._store.get(user_id)
        if cart is not None:
            cart.clear()


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def add(self, order: Order) -> None:
        order.id = self._next_id
        self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)

    def get_by_id(self, order_id: int) -> Order | None:
        return copy.deepcopy(self._store.get(order_id))

    def save(self, order: Order) -> None:
        stored = self._store.get(order.id)  # type: ignore[arg-type]
        if stored is None:
            raise OrderNotFoundError(order.id)  # type: ignore[arg-type]
        stored.status = order.status

    def list_for_user(self, user_id: int) -> list[Order]:
        return [o for o in self._newest_first() if o.user_id == user_id]

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        return [o for o in self._newest_first() if status is None or o.status == status]

    def count_by_status(self) -> dict[OrderStatus, int]:
        counts: dict[OrderStatus, int] = {}
        for order in self._store.values():
            counts[order.status] = counts.get(order.status, 0) + 1
        return counts

    def revenue(self) -> Money:
        total = Money.zero()
        for order in self._store.values():
            if order.status != OrderStatus.CANCELLED:
                total = total + order.total
        return total

    def _newest_first(self) -> list[Order]:
        orders = sorted(self._store.values(), key=lambda o: (o.created_at, o.id), reverse=True)
        return [copy.deepcopy(o) for o in orders]


class FakeUserRepository(UserRepository):

    def __init__(self, users: list[User] | None = None) -> None:
        self._store: dict[int, User] = {}
        self._next_id = 1
        for u in users or []:
            if u.id is None:
                self.add(u)
            else:
                self._store[u.id] = copy.deepcopy(u)
                self._next_id = max(self._next_id, u.id + 1)

    def get_by_id(self, user_id: int) -> User | None:
        return copy.deepcopy(self._store.get(user_id))

    def get_by_email(self, email: str) -> User | None:
        for u in self._store.values():
            if u.email.lower() == email.strip().lower():
                return copy.deepcopy(u)
        return None

    def get_by_username(self, username: str) -> User | None:
        for u in self._store.values():
            if u.username == username.strip():
                return copy.deepcopy(u)
        return None

    def add(self, user: User) -> None:
        user.id = self._next_id
        self._next_id += 1
        self._store[user.id] = copy.deepcopy(user)

    def count(self) -> int:
        return len(self._store)


class FakeUnitOfWork(UnitOfWork):

    def __init__(
        self,
        products: list[Product] | None = None,
        users: list[User] | None = None,
        product_repo: FakeProductRepository | None = None,
    ) -> None:
        self.products = product_repo or FakeProductRepository(products)
        self.carts = FakeCartRepository()
        self.orders = FakeOrderRepository()
        self.users = FakeUserRepository(users)
        self.commits = 0
        self._snapshot: list[dict] | None = None

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = self._take_snapshot()
        return self

    def commit(self) -> None:
        self.commits += 1
        self._snapshot = self._take_snapshot()

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        for repo, state in zip(self._repos(), self._snapshot):
            repo.__dict__.clear()
            repo.__dict__.update(copy.deepcopy(state))

    def _repos(self) -> list:
        return [self.products, self.carts, self.orders, self.users]

    def _take_snapshot(self) -> list[dict]:
        return [copy.deepcopy(repo.__dict__) for repo in self._repos()]


class FakePasswordHasher(PasswordHasher):

    def hash(self, plaintext: str) -> str:
        return f"hashed:{plaintext}"

    def verify(self, plaintext: str, digest: str) -> bool:
        return digest == f"hashed:{plaintext}"


class FakeTokenService(TokenService):

    def issue(self, user: User) -> str:
        return f"token:{user.id}:{user.role.value}"

    def verify(self, token: str) -> Claims:
        parts = token.split(":")
        if len(parts) != 3 or parts[0] != "token":
            raise AuthenticationError("Could not validate credentials")
        return Claims(user_id=int(parts[1]), role=Role(parts[2]))


# --- Builders -----------------------------------------------------------------


def make_product(
    id: int = 1,
    name: str = "Widget",
    price: str = "15.00",
    stock: int = 10,
    category: str | None = "Gadgets",
    description: str | None = None,
) -> Product:
    return Product(
        id=id,
        name=name,
        price=Money.of(price),
        stock=stock,
        category=category,
        description=description,
    )


def make_user(id: int = 1, username: str = "alice", role: Role = Role.USER) -> User:
    return User(
        id=id,
        username=username,
        email=f"{username}@example.com",
        password_hash="hashed:secret1",
        role=role,
    )


def make_admin(id: int = 99) -> User:
    return make_user(id=id, username="admin", role=Role.ADMIN)
