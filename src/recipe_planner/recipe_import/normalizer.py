"""Normalization utilities for schema.org recipe fields."""

from urllib.parse import urljoin, urlparse

from .models import unique_tags


def has_type(node: dict, type_name: str) -> bool:
    """Check a JSON-LD node's @type (or bare "type"), which may be a string or a list."""
    declared = node.get("@type", node.get("type"))
    if isinstance(declared, str):
        return declared == type_name
    if isinstance(declared, list):
        return type_name in declared
    return False


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def ingredients_text(ingredients) -> str:
    """
    Join recipe ingredients into a newline-delimited blob.

    Handles:
        - List of strings
        - List of dicts with 'text' or 'name' field
        - A single string (used as-is)
    """
    if isinstance(ingredients, str):
        return ingredients.strip()

    if not isinstance(ingredients, list):
        return ""

    lines = []
    for item in ingredients:
        if isinstance(item, dict):
            item = item.get("text") or item.get("name")
        text = _text(item)
        if text:
            lines.append(text)
    return "\n".join(lines)


def _step_text(step: dict) -> str:
    text = step.get("text")
    if not text and isinstance(step.get("itemListElement"), dict):
        text = step["itemListElement"].get("text")
    return _text(text)


def instructions_text(instructions) -> str:
    """
    Flatten recipeInstructions into a single text block.

    Handles:
        - A plain string (used as-is)
        - A list mixing strings, HowToStep and HowToSection objects.
          Steps are numbered by position ("1. ..."); sections emit a
          "Name:" header followed by their own nested steps.
        - A single HowToStep or HowToSection object
    """
    if isinstance(instructions, str):
        return instructions.strip()

    if isinstance(instructions, list):
        parts = []
        for index, item in enumerate(instructions, start=1):
            if isinstance(item, str):
                if item.strip():
                    parts.append(item.strip())
            elif isinstance(item, dict):
                if has_type(item, "HowToSection"):
                    section = instructions_text(item)
                    if section:
                        parts.append(section)
                else:
                    text = _step_text(item)
                    if text:
                        parts.append(f"{index}. {text}")
        return "\n\n".join(parts)

    if isinstance(instructions, dict):
        if has_type(instructions, "HowToSection"):
            header = _text(instructions.get("name"))
            body = instructions_text(instructions.get("itemListElement"))
            lines = [f"{header}:"] if header else []
            if body:
                lines.append(body)
            return "\n".join(lines) if body else ""
        return _step_text(instructions)

    return ""


def resolve_url(url: str, base_url: str) -> str | None:
    """Resolve a possibly relative URL; None unless the result is an absolute http(s) URL."""
    try:
        resolved = urljoin(base_url or "", url.strip())
        parsed = urlparse(resolved)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return resolved


def extract_image_url(image, base_url: str) -> str | None:
    """
    Extract an absolute image URL.

    Handles:
        - Plain URL string
        - ImageObject dict with 'url' or 'contentUrl'
        - List of either (first entry wins)
    Relative URLs are resolved against base_url; anything that can't be
    resolved is treated as no image.
    """
    if isinstance(image, list):
        image = image[0] if image else None

    if isinstance(image, dict):
        image = image.get("url") or image.get("contentUrl")

    url = _text(image)
    if not url:
        return None
    return resolve_url(url, base_url)


def _as_list(value) -> list:
    if isinstance(value, list):
        return value
    if value is None:
        return []
    return [value]


def extract_tags(recipe: dict) -> tuple[str, ...]:
    """Union of recipeCategory, recipeCuisine and keywords (comma-split when a string)."""
    values = _as_list(recipe.get("recipeCategory")) + _as_list(recipe.get("recipeCuisine"))

    keywords = recipe.get("keywords")
    if isinstance(keywords, str):
        values.extend(keywords.split(","))
    else:
        values.extend(_as_list(keywords))

    return unique_tags(values)
