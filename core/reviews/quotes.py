"""
Detect which pool quotations the model echoed back into a review.

The default strategy looks for the first 20 characters of each quotation.
Quotations that only differ after that prefix are indistinguishable, so
matching is kept behind QuoteMatcher and can be swapped per call.
"""

from dataclasses import dataclass
from typing import Protocol

from .types import Quote

DEFAULT_PREFIX_LENGTH = 20


class QuoteMatcher(Protocol):
    def matches(self, review_text: str, quote: Quote) -> bool: ...


@dataclass(frozen=True)
class PrefixQuoteMatcher:
    """Match when the quote's leading characters appear verbatim in the text.

    Quotes shorter than prefix_length are matched on their full text.
    An empty quote never matches.
    """
    prefix_length: int = DEFAULT_PREFIX_LENGTH

    def matches(self, review_text: str, quote: Quote) -> bool:
        needle = quote.text[: self.prefix_length]
        if not needle:
            return False
        return needle in review_text


DEFAULT_MATCHER = PrefixQuoteMatcher()


def extract_used_quotes(
    review_text: str,
    quotes: list[Quote],
    matcher: QuoteMatcher | None = None,
) -> list[Quote]:
    """
    Return the quotations found in review_text, in pool order.

    Args:
        review_text: Generated review
        quotes: The quotation pool used for the prompt
        matcher: Matching strategy (defaults to 20-character prefix)
    """
    matcher = matcher or DEFAULT_MATCHER
    return [quote for quote in quotes if matcher.matches(review_text, quote)]
