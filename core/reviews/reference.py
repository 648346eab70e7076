"""
Reference data snapshot: default options and the quotation pool.

Loaded once at start-up (FastAPI lifespan) and kept until the process exits;
request handlers only ever read it.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from core.database import DATABASE_UNAVAILABLE_ERRORS, get_connection
from core.queries.options import get_all_quotes, get_default_options

from .types import Quote

logger = logging.getLogger(__name__)


class ReferenceDataNotLoadedError(Exception):
    """Raised when reference data is read before load_reference_data() ran."""

    pass


@dataclass(frozen=True)
class ReferenceData:
    positive_traits: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    quotes: tuple[Quote, ...] = ()
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def options(self) -> dict[str, list[str]]:
        """Default options in the API's response shape."""
        return {
            "positiveTraits": list(self.positive_traits),
            "weaknesses": list(self.weaknesses),
            "suggestions": list(self.suggestions),
        }


_reference_data: ReferenceData | None = None


def get_reference_data() -> ReferenceData:
    if _reference_data is None:
        raise ReferenceDataNotLoadedError("Reference data has not been loaded")
    return _reference_data


def set_reference_data(data: ReferenceData) -> None:
    global _reference_data
    _reference_data = data


def clear_reference_data() -> None:
    global _reference_data
    _reference_data = None


async def fetch_reference_data() -> ReferenceData:
    """Read defaults and quotes from the database into a new snapshot."""
    async with get_connection() as conn:
        positive_traits = await get_default_options(conn, "positive_trait")
        weaknesses = await get_default_options(conn, "weakness")
        suggestions = await get_default_options(conn, "suggestion")
        quote_rows = await get_all_quotes(conn)

    return ReferenceData(
        positive_traits=tuple(positive_traits),
        weaknesses=tuple(weaknesses),
        suggestions=tuple(suggestions),
        quotes=tuple(Quote.from_dict(q) for q in quote_rows),
    )


async def load_reference_data() -> ReferenceData:
    """
    Load the snapshot and install it.

    If the database is unreachable an empty snapshot is installed, so options
    come back empty and prompts carry no quotations.
    """
    try:
        data = await fetch_reference_data()
    except DATABASE_UNAVAILABLE_ERRORS as e:
        logger.error(
            "Could not load reference data, serving empty defaults until restart: %s",
            e,
        )
        data = ReferenceData()

    set_reference_data(data)
    logger.info(
        "Reference data loaded: %d traits, %d weaknesses, %d suggestions, %d quotes",
        len(data.positive_traits),
        len(data.weaknesses),
        len(data.suggestions),
        len(data.quotes),
    )
    return data
