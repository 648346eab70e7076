"""
LLM completion via LiteLLM.

One entry point, complete(), used by review generation. Retry behaviour is
an explicit RetryPolicy; the default policy makes a single attempt.
"""

import asyncio
import logging
import os
from dataclasses import dataclass

from litellm import acompletion

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = os.environ.get("LLM_PROVIDER") or "anthropic/claude-sonnet-4-20250514"


class GenerationError(Exception):
    """Raised when the LLM call fails (transport or non-success response)."""

    pass


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to call the provider and how long to wait in between."""

    max_attempts: int = 1
    backoff_seconds: float = 1.0
    backoff_multiplier: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return self.backoff_seconds * (self.backoff_multiplier ** (attempt - 1))


NO_RETRY = RetryPolicy(max_attempts=1)


def _extract_content(response) -> str:
    """Read choices[0].message.content; anything missing or non-string is ""."""
    choices = getattr(response, "choices", None)
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


async def complete(
    messages: list[dict],
    system: str | None = None,
    provider: str | None = None,
    max_tokens: int = 1024,
    retry_policy: RetryPolicy | None = None,
    timeout: float | None = None,
) -> str:
    """
    Run a single non-streaming completion and return the text.

    Args:
        messages: List of {"role": "user"|"assistant", "content": str}
        system: Optional system prompt, prepended as a system message
        provider: LiteLLM model string. If None, uses DEFAULT_PROVIDER.
        max_tokens: Maximum tokens in response
        retry_policy: Attempts and backoff. Defaults to NO_RETRY.
        timeout: Optional per-attempt timeout in seconds passed to the provider

    Returns:
        The completion text ("" if the provider returned no text content)

    Raises:
        GenerationError: If every attempt failed
    """
    model = provider or DEFAULT_PROVIDER
    policy = retry_policy or NO_RETRY

    llm_messages = list(messages)
    if system:
        llm_messages = [{"role": "system", "content": system}] + llm_messages

    kwargs = {}
    if timeout is not None:
        kwargs["timeout"] = timeout

    attempt = 0
    while True:
        attempt += 1
        try:
            response = await acompletion(
                model=model,
                messages=llm_messages,
                max_tokens=max_tokens,
                **kwargs,
            )
        except Exception as e:
            if attempt >= policy.max_attempts:
                logger.error(
                    "LLM call to %s failed after %d attempt(s): %s", model, attempt, e
                )
                raise GenerationError(str(e)) from e

            delay = policy.delay_for(attempt)
            logger.warning(
                "LLM call to %s failed (attempt %d/%d), retrying in %.1fs: %s",
                model,
                attempt,
                policy.max_attempts,
                delay,
                e,
            )
            await asyncio.sleep(delay)
            continue

        return _extract_content(response)
