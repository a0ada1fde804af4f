"""
Coffee Menu Backend — Database Session Management
===================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine, turns on SQLite foreign-key enforcement for
       every new connection, and provides a session dependency that
       auto-commits on success and auto-rolls-back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Referential Integrity:
    Item rows reference their Category with ON DELETE CASCADE. SQLite only
    honours foreign keys when `PRAGMA foreign_keys=ON` is issued on the
    connection, so a connect listener sets it. Server databases enforce the
    constraint natively and the listener is not installed for them.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import event, pool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from coffeemenu.config import settings
from coffeemenu.exceptions import StoreError, driver_message

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    """
    Pool configuration per backend.

    SQLite: NullPool. Each session opens its own connection to the file,
    and the connection never outlives the event loop that opened it.
    Others: a sized queue pool with pre-ping.
    """
    options = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        options["poolclass"] = pool.NullPool
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


engine = create_async_engine(settings.database_url, **_engine_options())


if settings.is_sqlite:
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # Cascade deletes are a no-op without this
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# expire_on_commit=False: rows stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for create_all and Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction (a failed commit becomes
           StoreError carrying the driver message, e.g. "database is locked")
        4. On error: rolls back the transaction
        5. Always: closes the session

    Example usage in a route:
        @router.get("/categories")
        async def list_categories(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            try:
                await session.commit()
            except SQLAlchemyError as e:
                message = driver_message(e)
                logger.error("Store failure during commit: %s", message)
                raise StoreError(message=message, context={"operation": "commit"}) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def init_models() -> None:
    """
    What:  Creates the catalog tables if they do not exist yet.
    When:  Called during application startup (lifespan handler).
    Why:   A fresh deployment starts from an empty database file.
    """
    # Registers Category and Item with Base.metadata
    from coffeemenu.models import catalog  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Gracefully closes all pooled connections (application shutdown)."""
    await engine.dispose()
