"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL, plus the
translation of driver failures into ``StoreUnavailableError``.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ozza.config import Settings
from ozza.domain.error import StoreUnavailableError
from ozza.domain.repository import UnitOfWork


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Don't expire objects after commit
        autoflush=False,  # Manual flushing for better control
        autocommit=False,  # Explicit transaction management
    )


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Translate connectivity failures into ``StoreUnavailableError``.

    Integrity violations are left alone: they are answers, not outages.

    Args:
        operation: Name of the repository operation, for logs
    """
    try:
        yield
    except IntegrityError:
        raise
    except (OperationalError, InterfaceError, DBAPIError, OSError, TimeoutError) as e:
        logfire.error(
            "Store unavailable",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
        )
        raise StoreUnavailableError(operation) from e


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request session.

    Each atomic block is a SAVEPOINT inside the request transaction, so a
    failed block rolls back alone and nothing commits until the request
    session does.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with store_errors("transaction"):
            async with self.session.begin_nested():
                yield
