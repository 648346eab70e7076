"""
Review record queries.

Every by-id function filters on the owning user, so a review that belongs to
someone else looks exactly like one that does not exist.
"""

import json
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from core.tables import reviews

logger = logging.getLogger(__name__)


def encode_json_list(items: list) -> str:
    """Serialize a list for a TEXT column (UTF-8, order preserved)."""
    return json.dumps(list(items), ensure_ascii=False)


def decode_json_list(raw: str | None) -> list:
    """Inverse of encode_json_list. Malformed or non-list values decode to []."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Could not decode stored list: %r", raw[:50])
        return []
    if not isinstance(value, list):
        logger.warning("Stored value is not a list: %r", raw[:50])
        return []
    return value


def _row_to_review(row) -> dict:
    """Decode a reviews row into API-facing camelCase fields."""
    return {
        "id": row["review_id"],
        "userId": row["user_id"],
        "studentName": row["student_name"],
        "positiveTraits": decode_json_list(row["positive_traits"]),
        "weaknesses": decode_json_list(row["weaknesses"]),
        "impressivePoints": row["impressive_points"],
        "suggestions": decode_json_list(row["suggestions"]),
        "generatedReview": row["generated_review"],
        "usedQuotes": decode_json_list(row["used_quotes"]),
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


async def create_review(
    conn: AsyncConnection,
    *,
    user_id: int,
    student_name: str,
    positive_traits: list[str],
    weaknesses: list[str],
    impressive_points: str | None,
    suggestions: list[str],
    generated_review: str,
    used_quotes: list[dict],
) -> int:
    """Insert a review and return its review_id."""
    result = await conn.execute(
        insert(reviews)
        .values(
            user_id=user_id,
            student_name=student_name,
            positive_traits=encode_json_list(positive_traits),
            weaknesses=encode_json_list(weaknesses),
            impressive_points=impressive_points or "",
            suggestions=encode_json_list(suggestions),
            generated_review=generated_review,
            used_quotes=encode_json_list(used_quotes),
        )
        .returning(reviews.c.review_id)
    )
    return result.scalar_one()


async def get_review(
    conn: AsyncConnection, review_id: int, user_id: int
) -> dict | None:
    """Get one review owned by user_id, or None."""
    result = await conn.execute(
        select(reviews).where(
            reviews.c.review_id == review_id,
            reviews.c.user_id == user_id,
        )
    )
    row = result.mappings().first()
    return _row_to_review(row) if row else None


async def list_user_reviews(conn: AsyncConnection, user_id: int) -> list[dict]:
    """All reviews owned by user_id, newest first."""
    result = await conn.execute(
        select(reviews)
        .where(reviews.c.user_id == user_id)
        .order_by(reviews.c.created_at.desc(), reviews.c.review_id.desc())
    )
    return [_row_to_review(row) for row in result.mappings()]


async def update_review_text(
    conn: AsyncConnection,
    review_id: int,
    user_id: int,
    generated_review: str,
) -> bool:
    """Replace the review text. Returns False if not found or not owned."""
    result = await conn.execute(
        update(reviews)
        .where(
            reviews.c.review_id == review_id,
            reviews.c.user_id == user_id,
        )
        .values(
            generated_review=generated_review,
            updated_at=datetime.now(timezone.utc),
        )
    )
    return result.rowcount > 0


async def delete_review(conn: AsyncConnection, review_id: int, user_id: int) -> bool:
    """Delete a review. Returns False if not found or not owned."""
    result = await conn.execute(
        delete(reviews).where(
            reviews.c.review_id == review_id,
            reviews.c.user_id == user_id,
        )
    )
    return result.rowcount > 0
