"""SQLAlchemy unit of work.

Each ``with uow:`` block runs in a fresh session, i.e. one database
transaction.  An instance is not thread-safe: give every request or worker
thread its own.

Driver errors escaping the block are translated into domain errors:
serialization failures and lock timeouts become ConflictError (the
transaction lost a race and may be retried), everything else StorageError.
Integers too large for the driver to bind become ValidationError.
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    StorageError,
    ValidationError,
)
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_product_repository import SqlProductRepository
from storefront.infrastructure.persistence.sql_user_repository import SqlUserRepository

logger = structlog.get_logger(__name__)

# SQLSTATE serialization_failure and deadlock_detected.
_CONFLICT_SQLSTATES = frozenset({"40001", "40P01"})


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.carts = SqlCartRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.users = SqlUserRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            if self._session is not None:
                self._session.close()
            self._session = None
        if isinstance(exc, SQLAlchemyError):
            raise translate_error(exc) from exc
        if isinstance(exc, OverflowError):
            logger.info("Value out of range", error=str(exc))
            raise ValidationError("Numeric value out of range") from exc

    def commit(self) -> None:
        self._session.commit()  # type: ignore[union-attr]

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()


def translate_error(exc: SQLAlchemyError) -> DomainException:
    if is_conflict(exc):
        logger.warning("Transaction conflict", error=str(getattr(exc, "orig", exc)))
        return ConflictError("The request conflicted with a concurrent update; please retry")
    logger.error("Storage failure", error=str(exc))
    return StorageError("Unexpected storage failure")


def is_conflict(exc: SQLAlchemyError) -> bool:
    if not isinstance(exc, DBAPIError):
        return False
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _CONFLICT_SQLSTATES:
        return True
    return isinstance(exc, OperationalError) and "database is locked" in str(orig)
