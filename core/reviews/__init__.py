"""Student review generation: prompts, quotation matching, reference data."""

from .generator import generate_student_review
from .prompts import build_review_prompt, is_review_length_ok
from .quotes import PrefixQuoteMatcher, QuoteMatcher, extract_used_quotes
from .reference import (
    ReferenceData,
    ReferenceDataNotLoadedError,
    get_reference_data,
    load_reference_data,
    set_reference_data,
    clear_reference_data,
)
from .types import GeneratedReview, Quote, ReviewInput

__all__ = [
    "generate_student_review",
    "build_review_prompt",
    "is_review_length_ok",
    "PrefixQuoteMatcher",
    "QuoteMatcher",
    "extract_used_quotes",
    "ReferenceData",
    "ReferenceDataNotLoadedError",
    "get_reference_data",
    "load_reference_data",
    "set_reference_data",
    "clear_reference_data",
    "GeneratedReview",
    "Quote",
    "ReviewInput",
]
