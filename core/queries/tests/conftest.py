"""Pytest fixtures for query tests.

Queries run against an in-memory SQLite database created from the table
metadata, so these tests need no PostgreSQL.
"""

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from core.queries.users import upsert_user
from core.tables import metadata


@pytest_asyncio.fixture
async def conn():
    """A connection to a fresh database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite://")
    async with engine.connect() as connection:
        await connection.run_sync(metadata.create_all)
        yield connection
    await engine.dispose()


@pytest_asyncio.fixture
async def teacher_id(conn):
    user = await upsert_user(conn, "teacher-1", name="王老師")
    return user["user_id"]


@pytest_asyncio.fixture
async def other_teacher_id(conn):
    user = await upsert_user(conn, "teacher-2", name="李老師")
    return user["user_id"]
