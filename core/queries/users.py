"""User row queries."""

import os
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from core.tables import users

# open_id of the deployment owner; always stored with the admin role
OWNER_OPEN_ID = os.environ.get("OWNER_OPEN_ID")


async def get_user_by_open_id(conn: AsyncConnection, open_id: str) -> dict | None:
    result = await conn.execute(select(users).where(users.c.open_id == open_id))
    row = result.mappings().first()
    return dict(row) if row else None


def _insert_for(conn: AsyncConnection):
    # Tests run on SQLite; both dialects share the ON CONFLICT API
    if conn.dialect.name == "sqlite":
        return sqlite_insert
    return pg_insert


async def upsert_user(
    conn: AsyncConnection,
    open_id: str,
    *,
    name: str | None = None,
    email: str | None = None,
) -> dict:
    """
    Create the user on first sight, otherwise refresh last_signed_in.

    A single INSERT ... ON CONFLICT statement, so concurrent first requests
    for the same open_id both get the one row. name/email are only written
    when given, so a token without them does not erase stored values.
    """
    if not open_id:
        raise ValueError("open_id is required")

    now = datetime.now(timezone.utc)
    values = {
        "open_id": open_id,
        "name": name,
        "email": email,
        "last_signed_in": now,
    }
    update_data = {"last_signed_in": now, "updated_at": now}
    if name is not None:
        update_data["name"] = name
    if email is not None:
        update_data["email"] = email
    if OWNER_OPEN_ID and open_id == OWNER_OPEN_ID:
        values["role"] = "admin"
        update_data["role"] = "admin"

    insert = _insert_for(conn)
    stmt = insert(users).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[users.c.open_id], set_=update_data
    ).returning(users)

    result = await conn.execute(stmt)
    return dict(result.mappings().one())
