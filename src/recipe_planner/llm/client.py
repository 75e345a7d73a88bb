"""
Recipe Planner - LLM Client.

Thin wrapper around the OpenAI async client for plain-text completions.
Extraction prompts ask for raw JSON, which the recipe_import package
parses and validates itself; provider exceptions propagate unchanged so
callers can map them to their own error taxonomy.
"""

import logging

from openai import AsyncOpenAI

from recipe_planner.config import settings
from recipe_planner.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)

# Singleton client instance
_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """
    Get the shared AsyncOpenAI client.

    Callers must check settings.ai_configured first; the client is
    never constructed without a key.
    """
    global _client

    if _client is None:
        kwargs = {
            "api_key": settings.openai_api_key,
            "max_retries": settings.openai_max_retries,
        }
        if settings.openai_timeout_seconds is not None:
            kwargs["timeout"] = settings.openai_timeout_seconds
        _client = AsyncOpenAI(**kwargs)

    return _client


def reset_client() -> None:
    """Drop the cached client (settings changed, or tests)."""
    global _client
    _client = None


async def complete_text(
    prompt: str,
    *,
    max_tokens: int,
    node: str = "completion",
) -> str:
    """
    Send a single user prompt and return the model's text output.

    Args:
        prompt: The full prompt text
        max_tokens: Completion token budget
        node: Label used for prompt logging

    Returns:
        The raw message content (empty string if the model returned none)

    Raises:
        openai.OpenAIError subclasses, unchanged
    """
    client = get_client()
    model = settings.openai_model

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            max_tokens=max_tokens,
        )
    except Exception as e:
        log_prompt(node=node, model=model, prompt=prompt, max_tokens=max_tokens, error=str(e))
        raise

    content = response.choices[0].message.content or ""
    logger.debug(f"{node}: received {len(content)} chars from {model}")

    log_prompt(
        node=node,
        model=model,
        prompt=prompt,
        max_tokens=max_tokens,
        response_text=content,
    )

    return content
