"""JSON-LD/Schema.org recipe extraction."""

import json
import logging

from bs4 import BeautifulSoup

from .models import RecipeData
from .normalizer import (
    extract_image_url,
    extract_tags,
    has_type,
    ingredients_text,
    instructions_text,
)

logger = logging.getLogger(__name__)

JSON_LD_MIME = "application/ld+json"


def extract_schema_org_recipe(html: str, base_url: str) -> RecipeData | None:
    """
    Extract a recipe from the page's schema.org JSON-LD markup.

    Script blocks are tried in document order. Blocks that aren't valid
    JSON, hold no Recipe node, or hold a Recipe missing a title,
    ingredients or instructions are skipped.

    Returns:
        RecipeData for the first usable Recipe node, or None when the page
        has none. None is the expected "not found" outcome, not a failure.
    """
    for block in _json_ld_blocks(html):
        try:
            data = json.loads(block, strict=False)
        except ValueError:
            logger.debug("Skipping JSON-LD block that is not valid JSON")
            continue

        node = find_recipe_node(data)
        if node is None:
            continue

        recipe = map_schema_org_recipe(node, base_url)
        if recipe.is_complete:
            return recipe

        logger.debug(f"Skipping incomplete schema.org recipe: {recipe.title!r}")

    return None


def _json_ld_blocks(html: str) -> list[str]:
    soup = BeautifulSoup(html, "lxml")
    blocks = []
    for script in soup.find_all("script", attrs={"type": _is_json_ld_type}):
        raw = script.string or script.get_text()
        if raw and raw.strip():
            blocks.append(raw)
    return blocks


def _is_json_ld_type(value: str | None) -> bool:
    return bool(value) and value.split(";")[0].strip().lower() == JSON_LD_MIME


def find_recipe_node(data) -> dict | None:
    """
    Depth-first search for a Recipe node.

    Walks arrays and @graph collections. A HowTo carrying
    recipeIngredient counts as a Recipe.
    """
    if isinstance(data, list):
        for item in data:
            found = find_recipe_node(item)
            if found is not None:
                return found
        return None

    if not isinstance(data, dict):
        return None

    if has_type(data, "Recipe"):
        return data

    if "@graph" in data:
        return find_recipe_node(data["@graph"])

    if has_type(data, "HowTo") and data.get("recipeIngredient"):
        return data

    return None


def map_schema_org_recipe(node: dict, base_url: str) -> RecipeData:
    """Map schema.org Recipe fields to RecipeData. Completeness is checked by the caller."""
    title = node.get("name") or node.get("headline")
    ingredients = node.get("recipeIngredient")
    if ingredients is None:
        # Deprecated schema.org property still emitted by older sites
        ingredients = node.get("ingredients")

    return RecipeData(
        title=title.strip() if isinstance(title, str) else "",
        ingredients=ingredients_text(ingredients),
        instructions=instructions_text(node.get("recipeInstructions")),
        image_url=extract_image_url(node.get("image"), base_url),
        tags=extract_tags(node),
    )
