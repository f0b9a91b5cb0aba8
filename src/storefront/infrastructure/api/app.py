"""FastAPI application factory and the ``storefront-api`` entry point."""

from __future__ import annotations

from contextlib import asynccontextmanager

import click
import uvicorn
from fastapi import FastAPI

from storefront.infrastructure.api.errors import register_error_handlers
from storefront.infrastructure.api.routes import (
    auth_router,
    cart_router,
    health_router,
    order_router,
    product_router,
)
from storefront.infrastructure.bootstrap import bootstrap
from storefront.infrastructure.config import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    container = bootstrap(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        container.dispose()

    app = FastAPI(title="Storefront", version="1.0.0", lifespan=lifespan)
    app.state.container = container
    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(health_router)
    return app


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, type=int, show_default=True, help="Bind port.")
@click.option("--create-schema", is_flag=True, default=False, help="Create missing tables first.")
def serve(host: str, port: int, create_schema: bool) -> None:
    """Run the HTTP API."""
    app = create_app()
    if create_schema:
        app.state.container.create_schema()
    uvicorn.run(app, host=host, port=port)
