"""
Type definitions for review generation.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Quote:
    """A quotation from the shared pool."""
    text: str
    author: str
    id: int | None = None
    category: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Quote":
        return cls(
            text=data["text"],
            author=data["author"],
            id=data.get("id"),
            category=data.get("category"),
        )


@dataclass
class ReviewInput:
    """Teacher-supplied inputs for one review."""
    student_name: str
    positive_traits: list[str]
    weaknesses: list[str] = field(default_factory=list)
    impressive_points: str | None = None  # None or "" means not provided
    suggestions: list[str] = field(default_factory=list)


@dataclass
class GeneratedReview:
    """Model output plus the quotations detected in it."""
    review: str
    used_quotes: list[Quote]
