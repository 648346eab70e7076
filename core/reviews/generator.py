"""
Review generation.

Builds the prompt from teacher inputs, makes one LLM call, and detects which
pool quotations the model used. Does not touch the database; persisting the
result is the caller's job.
"""

import logging
import os

from core.llm import DEFAULT_PROVIDER, RetryPolicy, complete

from .prompts import build_review_messages, build_review_prompt, is_review_length_ok
from .quotes import QuoteMatcher, extract_used_quotes
from .types import GeneratedReview, Quote, ReviewInput

logger = logging.getLogger(__name__)

# Review-specific model (may differ from other LLM usage)
REVIEW_PROVIDER = os.environ.get("REVIEW_PROVIDER") or DEFAULT_PROVIDER

REVIEW_MAX_TOKENS = int(os.environ.get("REVIEW_MAX_TOKENS", "1024"))

# Service default; REVIEW_MAX_ATTEMPTS=1 keeps the single-call behaviour
REVIEW_RETRY_POLICY = RetryPolicy(
    max_attempts=int(os.environ.get("REVIEW_MAX_ATTEMPTS", "1"))
)


async def generate_student_review(
    review_input: ReviewInput,
    quotes: list[Quote],
    *,
    provider: str | None = None,
    retry_policy: RetryPolicy | None = None,
    matcher: QuoteMatcher | None = None,
) -> GeneratedReview:
    """
    Generate a review for one student.

    Args:
        review_input: Validated teacher inputs
        quotes: The quotation pool at generation time
        provider: LiteLLM model string (defaults to REVIEW_PROVIDER)
        retry_policy: Retry behaviour for the LLM call (defaults to REVIEW_RETRY_POLICY)
        matcher: Quotation matching strategy (defaults to 20-character prefix)

    Returns:
        GeneratedReview with the raw text and the matched quotations

    Raises:
        GenerationError: If the LLM call failed
    """
    system, user_prompt = build_review_prompt(review_input, quotes)

    review_text = await complete(
        messages=build_review_messages(user_prompt),
        system=system,
        provider=provider or REVIEW_PROVIDER,
        max_tokens=REVIEW_MAX_TOKENS,
        retry_policy=retry_policy or REVIEW_RETRY_POLICY,
    )

    # The length instruction is advisory; the text is kept as returned
    if not is_review_length_ok(review_text):
        logger.warning(
            "Generated review for %s has %d characters (requested 180-200)",
            review_input.student_name,
            len(review_text.strip()),
        )

    used_quotes = extract_used_quotes(review_text, quotes, matcher)

    logger.info(
        "Generated review for %s: %d characters, %d quote(s) used",
        review_input.student_name,
        len(review_text),
        len(used_quotes),
    )

    return GeneratedReview(review=review_text, used_quotes=used_quotes)
