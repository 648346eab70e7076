"""
Review API routes.

Endpoints:
- POST /api/reviews/generate - Generate a review and save it
- GET /api/reviews - List the caller's reviews (newest first)
- GET /api/reviews/options - Default traits/weaknesses/suggestions
- GET /api/reviews/options/custom - Caller's custom options
- POST /api/reviews/options/custom - Add a custom option
- GET /api/reviews/{review_id} - Get one review
- PATCH /api/reviews/{review_id} - Replace the review text
- DELETE /api/reviews/{review_id} - Delete a review

Reviews owned by someone else are reported as not found.
"""

import logging
from typing import Any, Literal

import sentry_sdk
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.database import DATABASE_UNAVAILABLE_ERRORS, get_connection, get_transaction
from core.llm import GenerationError
from core.queries.options import add_user_option, get_user_options, option_max_length
from core.queries.reviews import (
    create_review,
    delete_review,
    get_review,
    list_user_reviews,
    update_review_text,
)
from core.queries.users import get_user_by_open_id, upsert_user
from core.reviews import ReviewInput, generate_student_review, get_reference_data
from web_api.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reviews", tags=["reviews"])

REVIEW_NOT_FOUND = "評語不存在"
GENERATION_FAILED = "無法生成評語，請稍後重試"
DATABASE_UNAVAILABLE = "資料庫暫時無法使用，請稍後重試"


class CamelModel(BaseModel):
    """Accepts camelCase JSON keys for snake_case fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateReviewRequest(CamelModel):
    """Request body for review generation."""

    student_name: str = Field(min_length=1, max_length=100)
    positive_traits: list[str] = Field(min_length=1)
    weaknesses: list[str]
    impressive_points: str | None = None
    suggestions: list[str]

    def to_review_input(self) -> ReviewInput:
        return ReviewInput(
            student_name=self.student_name,
            positive_traits=self.positive_traits,
            weaknesses=self.weaknesses,
            impressive_points=self.impressive_points,
            suggestions=self.suggestions,
        )


class UpdateReviewRequest(CamelModel):
    """Request body for replacing a review's text."""

    generated_review: str = Field(min_length=1)


class CustomOptionRequest(CamelModel):
    """Request body for adding a custom option."""

    kind: Literal["positive_trait", "weakness", "suggestion"]
    value: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_value_length(self) -> "CustomOptionRequest":
        max_length = option_max_length(self.kind)
        if len(self.value) > max_length:
            raise ValueError(
                f"value must be at most {max_length} characters for {self.kind}"
            )
        return self


def _database_unavailable(e: Exception) -> HTTPException:
    logger.error("Database unavailable: %s", e)
    sentry_sdk.capture_exception(e)
    return HTTPException(status_code=503, detail=DATABASE_UNAVAILABLE)


@router.post("/generate")
async def generate_review_endpoint(
    request: GenerateReviewRequest,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Generate a review from teacher inputs and save it for the caller.

    One LLM call, then one write. If the write fails the generated text is
    not returned.
    """
    reference = get_reference_data()

    try:
        generated = await generate_student_review(
            request.to_review_input(), list(reference.quotes)
        )
    except GenerationError as e:
        sentry_sdk.capture_exception(e)
        raise HTTPException(status_code=502, detail=GENERATION_FAILED)

    used_quotes = [quote.to_dict() for quote in generated.used_quotes]

    try:
        async with get_transaction() as conn:
            db_user = await upsert_user(
                conn, user["sub"], name=user.get("name"), email=user.get("email")
            )
            review_id = await create_review(
                conn,
                user_id=db_user["user_id"],
                student_name=request.student_name,
                positive_traits=request.positive_traits,
                weaknesses=request.weaknesses,
                impressive_points=request.impressive_points,
                suggestions=request.suggestions,
                generated_review=generated.review,
                used_quotes=used_quotes,
            )
    except DATABASE_UNAVAILABLE_ERRORS as e:
        raise _database_unavailable(e)

    return {
        "review": generated.review,
        "usedQuotes": used_quotes,
        "savedId": review_id,
    }


@router.get("")
async def list_reviews_endpoint(
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """List the caller's reviews, newest first. Empty if the store is down."""
    try:
        async with get_connection() as conn:
            db_user = await get_user_by_open_id(conn, user["sub"])
            if not db_user:
                return {"reviews": []}
            reviews = await list_user_reviews(conn, db_user["user_id"])
    except DATABASE_UNAVAILABLE_ERRORS as e:
        logger.warning("Database unavailable, returning no reviews: %s", e)
        return {"reviews": []}

    return {"reviews": reviews}


@router.get("/options")
async def get_options_endpoint(
    user: dict = Depends(get_current_user),
) -> dict[str, list[str]]:
    """Default traits, weaknesses and suggestions offered when composing a review."""
    return get_reference_data().options()


@router.get("/options/custom")
async def get_custom_options_endpoint(
    user: dict = Depends(get_current_user),
) -> dict[str, list[str]]:
    """The caller's own custom options, same shape as /options."""
    empty = {"positiveTraits": [], "weaknesses": [], "suggestions": []}
    try:
        async with get_connection() as conn:
            db_user = await get_user_by_open_id(conn, user["sub"])
            if not db_user:
                return empty
            user_id = db_user["user_id"]
            return {
                "positiveTraits": await get_user_options(
                    conn, "positive_trait", user_id
                ),
                "weaknesses": await get_user_options(conn, "weakness", user_id),
                "suggestions": await get_user_options(conn, "suggestion", user_id),
            }
    except DATABASE_UNAVAILABLE_ERRORS as e:
        logger.warning("Database unavailable, returning no custom options: %s", e)
        return empty


@router.post("/options/custom")
async def add_custom_option_endpoint(
    request: CustomOptionRequest,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """Add a custom option for the caller."""
    try:
        async with get_transaction() as conn:
            db_user = await upsert_user(
                conn, user["sub"], name=user.get("name"), email=user.get("email")
            )
            option_id = await add_user_option(
                conn, request.kind, db_user["user_id"], request.value
            )
    except DATABASE_UNAVAILABLE_ERRORS as e:
        raise _database_unavailable(e)

    return {"id": option_id}


@router.get("/{review_id}")
async def get_review_endpoint(
    review_id: int,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """Get one of the caller's reviews."""
    review = None
    try:
        async with get_connection() as conn:
            db_user = await get_user_by_open_id(conn, user["sub"])
            if db_user:
                review = await get_review(conn, review_id, db_user["user_id"])
    except DATABASE_UNAVAILABLE_ERRORS as e:
        logger.warning("Database unavailable, treating review %d as absent: %s", review_id, e)

    if not review:
        raise HTTPException(status_code=404, detail=REVIEW_NOT_FOUND)

    return review


@router.patch("/{review_id}")
async def update_review_endpoint(
    review_id: int,
    request: UpdateReviewRequest,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """Replace the text of one of the caller's reviews."""
    try:
        async with get_transaction() as conn:
            db_user = await get_user_by_open_id(conn, user["sub"])
            updated = bool(db_user) and await update_review_text(
                conn, review_id, db_user["user_id"], request.generated_review
            )
    except DATABASE_UNAVAILABLE_ERRORS as e:
        raise _database_unavailable(e)

    if not updated:
        raise HTTPException(status_code=404, detail=REVIEW_NOT_FOUND)

    return {"success": True}


@router.delete("/{review_id}")
async def delete_review_endpoint(
    review_id: int,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """Delete one of the caller's reviews."""
    try:
        async with get_transaction() as conn:
            db_user = await get_user_by_open_id(conn, user["sub"])
            deleted = bool(db_user) and await delete_review(
                conn, review_id, db_user["user_id"]
            )
    except DATABASE_UNAVAILABLE_ERRORS as e:
        raise _database_unavailable(e)

    if not deleted:
        raise HTTPException(status_code=404, detail=REVIEW_NOT_FOUND)

    return {"success": True}
