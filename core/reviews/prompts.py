# core/reviews/prompts.py
"""
Prompt assembly for review generation.

Pure functions: the same inputs always produce the same prompt strings.
List contents are neither validated nor truncated; an empty list renders as
an empty bullet block.
"""

from .types import Quote, ReviewInput

# Only the first N pool quotations are offered to the model
QUOTE_SAMPLE_SIZE = 10

REVIEW_MIN_LENGTH = 180
REVIEW_MAX_LENGTH = 200

REVIEW_SYSTEM_PROMPT = (
    "你是一位經驗豐富的國小教師，擅長撰寫正向、鼓勵性的學生評語。\n"
    "你的評語應該：\n"
    "1. 以正向積極的口吻，肯定學生的優點和進步\n"
    "2. 用溫和、妥善的語氣提出學生可以繼續加強的領域\n"
    "3. 融入適當的名言佳句，增加評語的啟發性\n"
    "4. 結構清晰，邏輯連貫，語言簡潔易懂\n"
    f"5. 長度必須嚴格控制在{REVIEW_MIN_LENGTH}-{REVIEW_MAX_LENGTH}字之間，"
    f"不超過{REVIEW_MAX_LENGTH}字\n"
    "6. 避免使用過於複雜的詞彙，保持親切感"
)

IMPRESSIVE_POINTS_PLACEHOLDER = "（未提供，請根據學生的正向特質和建議推斷其可能的亮點）"


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def format_quote_sample(quotes: list[Quote]) -> str:
    """Format the first QUOTE_SAMPLE_SIZE quotations as `- "text" - author` lines."""
    return "\n".join(
        f'- "{quote.text}" - {quote.author}' for quote in quotes[:QUOTE_SAMPLE_SIZE]
    )


def build_review_prompt(
    review_input: ReviewInput,
    quotes: list[Quote],
) -> tuple[str, str]:
    """
    Build the system and user prompts for one review.

    Args:
        review_input: Student name, traits, weaknesses, highlights, suggestions
        quotes: The quotation pool, in pool order

    Returns:
        Tuple of (system_prompt, user_prompt)
    """
    impressive_points = review_input.impressive_points or IMPRESSIVE_POINTS_PLACEHOLDER

    user_prompt = (
        "請為以下學生撰寫一份正向輔導性的評語。"
        f"評語字數必須嚴格控制在{REVIEW_MIN_LENGTH}-{REVIEW_MAX_LENGTH}字之間，"
        f"不超過{REVIEW_MAX_LENGTH}字。不要在評語中包含字數統計。"
        "即使未提供令人印象深刻的地方，也應根據正向特質和建議撰寫完整的評語。\n\n"
        f"學生名稱：{review_input.student_name}\n\n"
        f"正向特質：\n{_bullets(review_input.positive_traits)}\n\n"
        f"需要改進的地方：\n{_bullets(review_input.weaknesses)}\n\n"
        f"令人印象深刻的地方：\n{impressive_points}\n\n"
        f"建議：\n{_bullets(review_input.suggestions)}\n\n"
        f"可用的名言佳句（請在評語中適當引用1-2句）：\n{format_quote_sample(quotes)}\n\n"
        "請撰寫一份溫暖、鼓勵性的評語，融入適當的名言佳句，"
        "幫助學生和家長了解學生的優點和改進方向。"
    )

    return REVIEW_SYSTEM_PROMPT, user_prompt


def build_review_messages(user_prompt: str) -> list[dict]:
    """Wrap the user prompt as the message list sent alongside the system prompt."""
    return [{"role": "user", "content": user_prompt}]


def is_review_length_ok(text: str) -> bool:
    """Whether text length is within the requested [180, 200] characters."""
    return REVIEW_MIN_LENGTH <= len(text.strip()) <= REVIEW_MAX_LENGTH
