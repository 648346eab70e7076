"""
Async database access.

The engine is created lazily from DATABASE_URL so tooling and tests can import
the app without a database. Callers use get_connection() for reads and
get_transaction() for writes (commits on success, rolls back on error).
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None


class DatabaseNotConfiguredError(RuntimeError):
    """Raised when DATABASE_URL is not set."""

    pass


# Errors meaning "the store is unreachable" rather than "the query is wrong".
# Read paths degrade to empty results on these; write paths surface them.
DATABASE_UNAVAILABLE_ERRORS = (
    DatabaseNotConfiguredError,
    OperationalError,
    InterfaceError,
    OSError,
)


def get_database_url() -> str | None:
    """Get the async database URL, normalising plain postgres URLs to asyncpg."""
    database_url = os.environ.get("DATABASE_URL", "")
    if not database_url:
        return None

    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("postgresql://"):
        database_url = database_url.replace(
            "postgresql://", "postgresql+asyncpg://", 1
        )

    return database_url


def get_engine() -> AsyncEngine:
    """Get (or create) the shared async engine."""
    global _engine

    if _engine is None:
        database_url = get_database_url()
        if not database_url:
            raise DatabaseNotConfiguredError("DATABASE_URL is not set")
        _engine = create_async_engine(database_url, pool_pre_ping=True)
        logger.info("Database engine created")

    return _engine


@asynccontextmanager
async def get_connection() -> AsyncIterator[AsyncConnection]:
    """Open a connection without an explicit transaction (for reads)."""
    async with get_engine().connect() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[AsyncConnection]:
    """Open a connection inside a transaction that commits on exit."""
    async with get_engine().begin() as conn:
        yield conn


async def close_engine() -> None:
    """Dispose of the engine (app shutdown, test teardown)."""
    global _engine

    if _engine is not None:
        await _engine.dispose()
        _engine = None
