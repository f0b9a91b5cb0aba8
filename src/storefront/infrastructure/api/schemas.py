"""Pydantic request schemas for the HTTP API.

These are external contracts only; business validation stays in the
domain and surfaces as VALIDATION_ERROR either way.  Responses are the
application DTOs.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from storefront.domain.model.value_objects import MAX_QUANTITY


class RegisterRequest(BaseModel):
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
class ProductCreateRequest(BaseModel):
    name: str
    price: Decimal
    stock: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    category: str | None = None
    description: str | None = None
    image_url: str | None = None


class ProductUpdateRequest(BaseModel):
    name: str | None = None
    price: Decimal | None = None
    stock: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    category: str | None = None
    description: str | None = None
    image_url: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(ge=1, le=MAX_QUANTITY)


class PlaceOrderRequest(BaseModel):
    shipping_address: str
    # Omitted: check out the caller's cart.
    items: list[OrderItemRequest] | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str
