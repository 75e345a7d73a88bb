"""
AI extraction fallback.

Sends page HTML or PDF text to the completion API with a strict
JSON-only prompt, then validates the output before anything leaves this
module. Model output is untrusted: it is parsed into pydantic payload
models and only complete recipes are turned into RecipeData.

Provider failures map onto the import error taxonomy. Nothing is
retried here beyond the provider client's own retry policy.
"""

import json
import logging
import re
from dataclasses import replace

import openai
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from recipe_planner.config import settings
from recipe_planner.llm.client import complete_text

from .errors import (
    NoRecipeFoundError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderNotConfiguredError,
    ProviderRateLimitedError,
)
from .models import RecipeData, unique_tags
from .normalizer import resolve_url
from .prompts import (
    HTML_TRUNCATION_MARKER,
    PDF_TRUNCATION_MARKER,
    build_html_prompt,
    build_pdf_prompt,
    truncate,
)

logger = logging.getLogger(__name__)

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\[{][\s\S]*[\]}])\s*```", re.IGNORECASE)


# =============================================================================
# Response payloads
# =============================================================================


class AIRecipePayload(BaseModel):
    """One recipe as returned by the model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str | None = None
    ingredients: list[str] | str | None = None
    instructions: list[str] | str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    tags: list[str] = Field(default_factory=list)

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _keep_text_items(cls, value):
        if isinstance(value, list):
            return [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value):
        if isinstance(value, str):
            return value.split(",")
        if not isinstance(value, list):
            return []
        return [tag for tag in value if isinstance(tag, str)]

    @field_validator("image_url", mode="before")
    @classmethod
    def _blank_image(cls, value):
        if not isinstance(value, str) or value.strip().lower() in ("", "null", "none"):
            return None
        return value.strip()

    def to_recipe_data(self, base_url: str | None = None) -> RecipeData:
        return RecipeData(
            title=(self.title or "").strip(),
            ingredients=_join_lines(self.ingredients),
            instructions=_join_lines(self.instructions),
            image_url=resolve_url(self.image_url, base_url or "") if self.image_url else None,
            tags=unique_tags(self.tags),
        )


def _join_lines(value: list[str] | str | None) -> str:
    if isinstance(value, list):
        return "\n".join(value)
    return (value or "").strip()


# =============================================================================
# Response parsing
# =============================================================================


def strip_code_fence(text: str) -> str:
    """Unwrap a ```json ... ``` fenced block if the model added one."""
    text = text.strip()
    match = _CODE_FENCE_RE.search(text)
    return match.group(1) if match else text


def _load_json(text: str, what: str):
    try:
        return json.loads(strip_code_fence(text))
    except ValueError as e:
        raise NoRecipeFoundError(f"Failed to extract valid recipe data from the {what}") from e


def parse_recipe_response(text: str, base_url: str | None = None) -> RecipeData:
    """Validate a single-recipe response; raise NoRecipeFoundError unless it is complete."""
    data = _load_json(text, "page")
    if not isinstance(data, dict):
        raise NoRecipeFoundError("AI response was not a recipe object")

    try:
        payload = AIRecipePayload.model_validate(data)
    except ValidationError as e:
        raise NoRecipeFoundError(f"AI response did not match the recipe schema: {e}") from e

    recipe = payload.to_recipe_data(base_url)
    if not recipe.is_complete:
        raise NoRecipeFoundError("AI returned incomplete recipe data")
    return recipe


def parse_recipes_response(text: str) -> list[RecipeData]:
    """
    Validate a multi-recipe response.

    Entries that fail validation or lack a title, ingredients or
    instructions are dropped individually. An empty result is not an error.
    """
    data = _load_json(text, "PDF")
    if isinstance(data, dict):
        entries = data.get("recipes")
    else:
        entries = data
    if not isinstance(entries, list):
        raise NoRecipeFoundError("AI response did not contain a recipes array")

    recipes = []
    for position, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            logger.info(f"Dropping recipe #{position}: not an object")
            continue
        try:
            payload = AIRecipePayload.model_validate(entry)
        except ValidationError as e:
            logger.info(f"Dropping recipe #{position}: {e.error_count()} validation errors")
            continue

        # PDFs carry no image URLs
        recipe = replace(payload.to_recipe_data(), image_url=None)
        if not recipe.is_complete:
            logger.info(f"Dropping recipe #{position} ({recipe.title!r}): incomplete")
            continue
        recipes.append(recipe)

    logger.info(f"Kept {len(recipes)} of {len(entries)} recipes from AI response")
    return recipes


# =============================================================================
# Provider calls
# =============================================================================


async def _complete(prompt: str, *, max_tokens: int, node: str) -> str:
    if not settings.ai_configured:
        raise ProviderNotConfiguredError(
            "OpenAI API key is not configured. Only schema.org recipe extraction is available."
        )

    try:
        return await complete_text(prompt, max_tokens=max_tokens, node=node)
    except openai.RateLimitError as e:
        logger.warning(f"AI provider rate limited the request: {e}")
        raise ProviderRateLimitedError(
            "Too many requests to the AI provider. Please try again in a few minutes."
        ) from e
    except openai.AuthenticationError as e:
        logger.error(f"AI provider rejected credentials: {e}")
        raise ProviderAuthenticationError(
            "AI provider authentication failed. Please check API key configuration."
        ) from e
    except openai.OpenAIError as e:
        logger.error(f"AI provider call failed: {e}")
        raise ProviderError(f"AI provider error: {e}") from e


async def extract_with_ai(html: str, base_url: str | None = None) -> RecipeData:
    """
    Extract a single recipe from page HTML.

    Args:
        html: Raw page HTML (truncated to settings.max_html_chars)
        base_url: Page URL, used to resolve a relative image URL

    Raises:
        NoRecipeFoundError, ProviderNotConfiguredError,
        ProviderRateLimitedError, ProviderError
    """
    prompt = build_html_prompt(truncate(html, settings.max_html_chars, HTML_TRUNCATION_MARKER))
    text = await _complete(prompt, max_tokens=settings.html_max_tokens, node="html_recipe")
    return parse_recipe_response(text, base_url)


async def extract_all_with_ai(pdf_text: str) -> list[RecipeData]:
    """
    Extract every recipe found in PDF text.

    Returns:
        Complete recipes only; may be empty.
    """
    prompt = build_pdf_prompt(truncate(pdf_text, settings.max_pdf_chars, PDF_TRUNCATION_MARKER))
    text = await _complete(prompt, max_tokens=settings.pdf_max_tokens, node="pdf_recipes")
    return parse_recipes_response(text)
