"""SQLAlchemy engine and session factory.

SQLite: pysqlite's own transaction handling is switched off and every
writing transaction is opened with ``BEGIN IMMEDIATE``, so it holds the
write lock from its first statement and concurrent checkouts run one after
the other.  Read-only sessions (see ``make_session_factory``) open a plain
deferred ``BEGIN`` and keep reading while a writer holds the lock.
Other databases run at the configured isolation level (SERIALIZABLE by
default).
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.infrastructure.persistence.orm import Base


def create_db_engine(database_url: str, isolation_level: str = "SERIALIZABLE") -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            isolation_level=isolation_level,
            pool_pre_ping=True,
        )

    options: dict = {"connect_args": {"check_same_thread": False}}
    if _is_memory_url(database_url):
        # One shared connection, otherwise every session sees its own empty database.
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)
    _install_sqlite_transaction_hooks(engine)
    return engine


def make_session_factory(engine: Engine, read_only: bool = False) -> sessionmaker:
    if read_only:
        engine = engine.execution_options(read_only=True)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def drop_schema(engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine)


def _is_memory_url(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///") or ":memory:" in database_url


def _install_sqlite_transaction_hooks(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get("read_only"):
            conn.exec_driver_sql("BEGIN")
        else:
            conn.exec_driver_sql("BEGIN IMMEDIATE")
