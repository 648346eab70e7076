#!/usr/bin/env python
"""
Seed default options and the quotation pool.

Replaces every global default option and every quotation with the presets in
core/reviews/presets.py. Users' custom options are left alone.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --create-tables   # local dev without alembic
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()
load_dotenv(".env.local", override=True)

from core.database import close_engine, get_engine, get_transaction
from core.queries.options import (
    add_default_option,
    add_quote,
    clear_default_options,
    clear_quotes,
)
from core.reviews.presets import FAMOUS_QUOTES, POSITIVE_TRAITS, SUGGESTIONS, WEAKNESSES
from core.tables import metadata

PRESETS = {
    "positive_trait": POSITIVE_TRAITS,
    "weakness": WEAKNESSES,
    "suggestion": SUGGESTIONS,
}


async def create_tables():
    """Create missing tables directly from metadata."""
    print("[0/3] Creating tables...")
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    print("  Done")


async def seed():
    async with get_transaction() as conn:
        print("[1/3] Clearing existing defaults and quotes...")
        for kind in PRESETS:
            removed = await clear_default_options(conn, kind)
            print(f"  {kind}: removed {removed}")
        removed = await clear_quotes(conn)
        print(f"  quotes: removed {removed}")

        print("[2/3] Inserting default options...")
        for kind, values in PRESETS.items():
            for value in values:
                await add_default_option(conn, kind, value)
            print(f"  {kind}: {len(values)}")

        print("[3/3] Inserting quotes...")
        for quote in FAMOUS_QUOTES:
            await add_quote(conn, quote["text"], quote["author"], quote.get("category"))
        print(f"  quotes: {len(FAMOUS_QUOTES)}")


async def main():
    parser = argparse.ArgumentParser(description="Seed default options and quotes")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from metadata before seeding",
    )
    args = parser.parse_args()

    try:
        if args.create_tables:
            await create_tables()
        await seed()
        print("Database initialised.")
    finally:
        await close_engine()


if __name__ == "__main__":
    asyncio.run(main())
