"""
Option catalog and quotation pool queries.

Three catalogs share one shape (see core.tables._option_table). A row with
user_id NULL and is_default true is a global default; rows with a user_id are
that user's custom options.
"""

from sqlalchemy import Table, insert, select
from sqlalchemy.ext.asyncio import AsyncConnection

from core.tables import (
    positive_trait_options,
    quotes,
    suggestion_options,
    weakness_options,
)

# kind -> (table, value column name)
OPTION_TABLES: dict[str, tuple[Table, str]] = {
    "positive_trait": (positive_trait_options, "trait"),
    "weakness": (weakness_options, "weakness"),
    "suggestion": (suggestion_options, "suggestion"),
}

OPTION_KINDS = tuple(OPTION_TABLES)


def option_max_length(kind: str) -> int:
    """Longest value the catalog's column accepts."""
    table, column = _option_table(kind)
    return table.c[column].type.length


class UnknownOptionKindError(ValueError):
    """Raised for an option kind outside OPTION_KINDS."""

    pass


def _option_table(kind: str) -> tuple[Table, str]:
    try:
        return OPTION_TABLES[kind]
    except KeyError:
        raise UnknownOptionKindError(f"Unknown option kind: {kind}")


async def get_default_options(conn: AsyncConnection, kind: str) -> list[str]:
    """Global default values for one catalog, in insertion order."""
    table, column = _option_table(kind)
    result = await conn.execute(
        select(table.c[column])
        .where(table.c.is_default.is_(True))
        .order_by(table.c.option_id)
    )
    return [row[0] for row in result]


async def get_user_options(
    conn: AsyncConnection, kind: str, user_id: int
) -> list[str]:
    """One user's custom values for one catalog, in insertion order."""
    table, column = _option_table(kind)
    result = await conn.execute(
        select(table.c[column])
        .where(table.c.user_id == user_id)
        .order_by(table.c.option_id)
    )
    return [row[0] for row in result]


async def add_user_option(
    conn: AsyncConnection, kind: str, user_id: int, value: str
) -> int:
    """Add a custom option for a user and return its option_id."""
    table, column = _option_table(kind)
    result = await conn.execute(
        insert(table)
        .values({"user_id": user_id, column: value, "is_default": False})
        .returning(table.c.option_id)
    )
    return result.scalar_one()


async def add_default_option(conn: AsyncConnection, kind: str, value: str) -> int:
    """Add a global default option (seeding)."""
    table, column = _option_table(kind)
    result = await conn.execute(
        insert(table)
        .values({"user_id": None, column: value, "is_default": True})
        .returning(table.c.option_id)
    )
    return result.scalar_one()


async def clear_default_options(conn: AsyncConnection, kind: str) -> int:
    """Delete every global default of one catalog. Returns rows removed."""
    table, _column = _option_table(kind)
    result = await conn.execute(table.delete().where(table.c.is_default.is_(True)))
    return result.rowcount


async def get_all_quotes(conn: AsyncConnection) -> list[dict]:
    """The full quotation pool, ordered by quote_id."""
    result = await conn.execute(select(quotes).order_by(quotes.c.quote_id))
    return [
        {
            "id": row["quote_id"],
            "text": row["text"],
            "author": row["author"],
            "category": row["category"],
        }
        for row in result.mappings()
    ]


async def add_quote(
    conn: AsyncConnection, text: str, author: str, category: str | None = None
) -> int:
    """Insert a quotation and return its quote_id."""
    result = await conn.execute(
        insert(quotes)
        .values(text=text, author=author, category=category)
        .returning(quotes.c.quote_id)
    )
    return result.scalar_one()


async def clear_quotes(conn: AsyncConnection) -> int:
    """Delete the whole quotation pool. Returns rows removed."""
    result = await conn.execute(quotes.delete())
    return result.rowcount
