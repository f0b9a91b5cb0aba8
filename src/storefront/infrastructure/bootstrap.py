"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  The CLI uses the
module-level process container; the HTTP app and the tests build their
own ``Container`` from explicit settings.
"""

from __future__ import annotations

import structlog

from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging
from storefront.infrastructure.persistence.database import (
    create_db_engine,
    create_schema,
    make_session_factory,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from storefront.infrastructure.security.jose_token_service import JoseTokenService
from storefront.infrastructure.security.passlib_hasher import PasslibPasswordHasher

logger = structlog.get_logger(__name__)


class Container:
    """Long-lived collaborators for one configuration."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.engine = create_db_engine(settings.database_url, settings.db_isolation)
        self.session_factory = make_session_factory(self.engine)
        self.read_session_factory = make_session_factory(self.engine, read_only=True)
        self.password_hasher = PasslibPasswordHasher()
        self.token_service = JoseTokenService(
            secret_key=settings.secret_key,
            algorithm=settings.token_algorithm,
            expire_minutes=settings.token_expire_minutes,
        )

    def unit_of_work(self, read_only: bool = False) -> SqlUnitOfWork:
        # A fresh instance per use case call; instances are not thread-safe.
        if read_only:
            return SqlUnitOfWork(self.read_session_factory)
        return SqlUnitOfWork(self.session_factory)

    def create_schema(self) -> None:
        create_schema(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def bootstrap(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json)
    container = Container(settings)
    logger.debug("Container ready", environment=settings.environment)
    return container


_container: Container | None = None


def container() -> Container:
    global _container
    if _container is None:
        _container = bootstrap()
    return _container


def reset() -> None:
    """Forget the process container so the next call re-reads the environment."""
    global _container
    if _container is not None:
        _container.dispose()
    _container = None


def unit_of_work(read_only: bool = False) -> SqlUnitOfWork:
    return container().unit_of_work(read_only=read_only)


def password_hasher() -> PasslibPasswordHasher:
    return container().password_hasher


def token_service() -> JoseTokenService:
    return container().token_service
