"""Database Session Manager — request-scoped read sessions over an async connection pool.

Invariants:
    - One AsyncSession per request; it is rolled back on error and closed on
      every exit path (success, empty result, error, cancellation)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py);
      nothing is retried

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import Table, literal, select, text

from geolookup.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# Most specific first: OperationalError and IntegrityError subclass DBAPIError
_ERROR_DESCRIPTIONS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "query"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
)


def describe_db_error(exc: SQLAlchemyError) -> tuple[str, str]:
    """Map a SQLAlchemy exception to a (user-safe message, operation) pair."""
    for exc_type, message, operation in _ERROR_DESCRIPTIONS:
        if isinstance(exc, exc_type):
            return message, operation
    return "Database operation failed", "unknown"


class DatabaseSessionManager:
    """Hands out pooled read sessions and checks database readiness."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session; roll back and map errors, always close."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            message, operation = describe_db_error(e)
            logger.error(
                f"DB {operation} error: {e}", extra={"operation": operation},
            )
            raise DatabaseError(message, operation) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness checks)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def check_tables(self, tables: list[Table]) -> dict[str, bool]:
        """Read one row from each table; False for tables the read fails on."""
        status = {}
        for table in tables:
            try:
                async with self.session() as db:
                    await db.execute(
                        select(literal(1)).select_from(table).limit(1),
                    )
                status[table.name] = True
            except DatabaseError:
                status[table.name] = False
        return status

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, released on every exit path."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
