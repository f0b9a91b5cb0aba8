"""FastAPI routes: auth, catalog, cart and orders.

Endpoints are thin: they build the use case handler with a fresh unit of
work and return its DTO.  Static paths are declared before their
``/{id}`` siblings so they are matched first.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from storefront.application.add_product import AddProductHandler
from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.browse_catalog import (
    ListCategoriesHandler,
    SearchProductsHandler,
    ShowProductHandler,
)
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import (
    AuthResultDTO,
    CartDTO,
    OrderDTO,
    OrderLineSpec,
    OrderStatisticsDTO,
    ProductDTO,
    UserDTO,
    to_user_dto,
)
from storefront.application.edit_cart_line import RemoveCartLineHandler, UpdateCartLineHandler
from storefront.application.login_user import LoginUserHandler
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.register_user import RegisterUserHandler
from storefront.application.restock_product import DeductStockHandler, RestockProductHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.show_order import (
    ListOrdersHandler,
    OrderStatisticsHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import MAX_QUANTITY
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.dependencies import (
    get_container,
    get_current_user,
    get_read_uow,
    get_uow,
)
from storefront.infrastructure.api.schemas import (
    AddToCartRequest,
    LoginRequest,
    PlaceOrderRequest,
    ProductCreateRequest,
    ProductUpdateRequest,
    RegisterRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.infrastructure.bootstrap import Container

# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@auth_router.post("/register", status_code=201)
def register(body: RegisterRequest, container: Container = Depends(get_container)) -> AuthResultDTO:
    handler = RegisterUserHandler(
        uow=container.unit_of_work(),
        hasher=container.password_hasher,
        tokens=container.token_service,
    )
    return handler.handle(username=body.username, email=body.email, password=body.password)


@auth_router.post("/login")
def login(body: LoginRequest, container: Container = Depends(get_container)) -> AuthResultDTO:
    handler = LoginUserHandler(
        uow=container.unit_of_work(),
        hasher=container.password_hasher,
        tokens=container.token_service,
    )
    return handler.handle(email=body.email, password=body.password)


@auth_router.get("/me")
def me(user: User = Depends(get_current_user)) -> UserDTO:
    return to_user_dto(user)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("")
def list_products(
    keyword: str | None = None,
    category: str | None = None,
    in_stock: bool = False,
    uow: UnitOfWork = Depends(get_read_uow),
) -> list[ProductDTO]:
    return SearchProductsHandler(uow).handle(
        keyword=keyword, category=category, in_stock_only=in_stock
    )


@product_router.get("/categories")
def list_categories(uow: UnitOfWork = Depends(get_read_uow)) -> list[str]:
    return ListCategoriesHandler(uow).handle()


@product_router.get("/{product_id}")
def get_product(product_id: int, uow: UnitOfWork = Depends(get_read_uow)) -> ProductDTO:
    return ShowProductHandler(uow).handle(product_id)


@product_router.post("", status_code=201)
def create_product(
    body: ProductCreateRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> ProductDTO:
    return AddProductHandler(uow).handle(
        user,
        name=body.name,
        price=str(body.price),
        stock=body.stock,
        category=body.category,
        description=body.description,
        image_url=body.image_url,
    )


@product_router.put("/{product_id}")
def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> ProductDTO:
    return UpdateProductHandler(uow).handle(
        user,
        product_id=product_id,
        name=body.name,
        price=str(body.price) if body.price is not None else None,
        stock=body.stock,
        category=body.category,
        description=body.description,
        image_url=body.image_url,
    )


@product_router.patch("/{product_id}/stock")
def adjust_stock(
    product_id: int,
    quantity: int = Query(ge=1, le=MAX_QUANTITY),
    operation: str = "increase",
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> ProductDTO:
    op = operation.strip().lower()
    if op == "increase":
        return RestockProductHandler(uow).handle(user, product_id=product_id, quantity=quantity)
    if op == "decrease":
        return DeductStockHandler(uow).handle(user, product_id=product_id, quantity=quantity)
    raise ValidationError(f"Unknown stock operation '{operation}'; use increase or decrease")


@product_router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: int,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> None:
    DeleteProductHandler(uow).handle(user, product_id=product_id)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("")
def show_cart(
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_read_uow),
) -> CartDTO:
    return ShowCartHandler(uow).handle(user)


@cart_router.post("/add")
def add_to_cart(
    body: AddToCartRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> CartDTO:
    return AddToCartHandler(uow).handle(user, product_id=body.product_id, quantity=body.quantity)


@cart_router.put("/items/{line_id}")
def update_cart_item(
    line_id: int,
    body: UpdateCartItemRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> CartDTO:
    return UpdateCartLineHandler(uow).handle(user, line_id=line_id, quantity=body.quantity)


@cart_router.delete("/items/{line_id}")
def remove_cart_item(
    line_id: int,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> CartDTO:
    return RemoveCartLineHandler(uow).handle(user, line_id=line_id)


@cart_router.delete("", status_code=204)
def clear_cart(user: User = Depends(get_current_user), uow: UnitOfWork = Depends(get_uow)) -> None:
    ClearCartHandler(uow).handle(user)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201)
def place_order(
    body: PlaceOrderRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> OrderDTO:
    lines = (
        [OrderLineSpec(product_id=i.product_id, quantity=i.quantity) for i in body.items]
        if body.items is not None
        else None
    )
    return PlaceOrderHandler(uow).handle(user, shipping_address=body.shipping_address, lines=lines)


@order_router.get("/my")
def my_orders(
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_read_uow),
) -> list[OrderDTO]:
    return ListOrdersHandler(uow).handle(user)


@order_router.get("/admin/all")
def all_orders(
    status: str | None = None,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_read_uow),
) -> list[OrderDTO]:
    return ListOrdersHandler(uow).handle(user, all_orders=True, status=status)


@order_router.get("/admin/statistics")
def order_statistics(
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_read_uow),
) -> OrderStatisticsDTO:
    return OrderStatisticsHandler(uow).handle(user)


@order_router.put("/admin/{order_id}/status")
def update_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> OrderDTO:
    return UpdateOrderStatusHandler(uow).handle(user, order_id, body.status)


@order_router.get("/{order_id}")
def get_order(
    order_id: int,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_read_uow),
) -> OrderDTO:
    return ShowOrderHandler(uow).handle(user, order_id)


@order_router.put("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    user: User = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_uow),
) -> OrderDTO:
    return CancelOrderHandler(uow).handle(user, order_id)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
health_router = APIRouter(prefix="/api", tags=["health"])


@health_router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
