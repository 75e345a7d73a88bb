"""
Grocery list grouping.

Utilities for grouping similar ingredients so that lines like
"1 clove garlic" and "2 cloves garlic" sort next to each other, plus
building and exporting a categorized shopping list.
"""

import re
from dataclasses import dataclass

from recipe_planner.recipe_import.models import RecipeData

from .categories import GroceryCategory, categorize_ingredient

# Units and measurements to remove
UNITS = (
    # Volume
    "cup", "cups", "tablespoon", "tablespoons", "tbsp", "teaspoon", "teaspoons", "tsp",
    "fluid ounce", "fluid ounces", "fl oz", "pint", "pints", "quart", "quarts", "gallon", "gallons",
    "liter", "liters", "l", "milliliter", "milliliters", "ml",
    # Weight
    "pound", "pounds", "lb", "lbs", "ounce", "ounces", "oz",
    "gram", "grams", "g", "kilogram", "kilograms", "kg",
    # Count
    "piece", "pieces", "whole", "clove", "cloves", "head", "heads",
    "bunch", "bunches", "stalk", "stalks", "sprig", "sprigs",
    "can", "cans", "jar", "jars", "package", "packages", "box", "boxes",
    "slice", "slices", "sheet", "sheets",
    # Common descriptors
    "large", "medium", "small", "fresh", "dried", "frozen", "canned",
    "chopped", "diced", "sliced", "minced", "crushed", "ground",
    "finely", "coarsely", "roughly",
    "optional", "to taste", "as needed",
)

# Prepositions and articles to remove
STOP_WORDS = ("of", "the", "a", "an", "for", "or", "and")

_PARENTHESES_RE = re.compile(r"\([^)]*\)")
_NUMBER_RE = re.compile(r"\d+([/\-.]\d+)?")
_UNITS_RE = re.compile(r"\b(" + "|".join(re.escape(unit) for unit in UNITS) + r")\b", re.IGNORECASE)
_STOP_WORDS_RE = re.compile(r"\b(" + "|".join(STOP_WORDS) + r")\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_PUNCTUATION_RE = re.compile(r"^[,\-\s]+|[,\-\s]+$")

# Display order for shopping lists
CATEGORY_ORDER = tuple(GroceryCategory)


def normalize_ingredient_name(ingredient_text: str) -> str:
    """
    Reduce an ingredient line to its core name.

    Removes parenthesized asides, quantities (including fractions and
    ranges), units, descriptors and stop words. The passes repeat until
    nothing changes, so a removal that brings two words together (e.g.
    "to  taste" once whitespace collapses) is still caught and the result
    is a fixed point.

    Examples:
        normalize_ingredient_name("2 cloves garlic, minced") -> "garlic"
        normalize_ingredient_name("1/2 cup chopped onion (about 1 small)") -> "onion"
        normalize_ingredient_name("") -> ""
    """
    normalized = (ingredient_text or "").lower().strip()

    previous = None
    while normalized != previous:
        previous = normalized
        normalized = _strip_once(normalized)

    return normalized


def _strip_once(text: str) -> str:
    text = _WHITESPACE_RE.sub(" ", text).strip()
    text = _PARENTHESES_RE.sub("", text).strip()
    text = _NUMBER_RE.sub("", text).strip()
    text = _UNITS_RE.sub("", text).strip()
    text = _STOP_WORDS_RE.sub("", text).strip()
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return _EDGE_PUNCTUATION_RE.sub("", text).strip()


def get_ingredient_sort_key(ingredient_text: str) -> str:
    """Grouping key for an ingredient line; falls back to the lower-cased line when normalization empties it."""
    normalized = normalize_ingredient_name(ingredient_text)
    return normalized or (ingredient_text or "").lower()


@dataclass
class GroceryItem:
    """One line on a shopping list."""

    ingredient_text: str
    category: GroceryCategory
    recipe_title: str | None = None
    is_checked: bool = False

    @property
    def sort_key(self) -> str:
        return get_ingredient_sort_key(self.ingredient_text)


def split_ingredient_lines(ingredients: str) -> list[str]:
    """Split a newline-delimited ingredient blob into non-blank, stripped lines."""
    return [line.strip() for line in (ingredients or "").splitlines() if line.strip()]


def build_grocery_items(recipes: list[RecipeData]) -> list[GroceryItem]:
    """Turn recipes' ingredient lines into categorized grocery items."""
    items = []
    for recipe in recipes:
        for line in split_ingredient_lines(recipe.ingredients):
            items.append(
                GroceryItem(
                    ingredient_text=line,
                    category=categorize_ingredient(line),
                    recipe_title=recipe.title,
                )
            )
    return items


def group_grocery_items(items: list[GroceryItem]) -> dict[GroceryCategory, list[GroceryItem]]:
    """
    Group items by category in display order.

    Empty categories are omitted. Within a category, items are sorted by
    their grouping key; ties keep their input order.
    """
    grouped: dict[GroceryCategory, list[GroceryItem]] = {}
    for category in CATEGORY_ORDER:
        in_category = [item for item in items if item.category == category]
        if in_category:
            grouped[category] = sorted(in_category, key=lambda item: item.sort_key)
    return grouped


def format_shopping_list(items: list[GroceryItem]) -> str:
    """
    Render a checklist export, e.g.:

        Shopping List

        Produce
        - [ ] 2 cloves garlic

    """
    text = "Shopping List\n\n"
    for category, category_items in group_grocery_items(items).items():
        text += f"{category.value}\n"
        for item in category_items:
            checkbox = "- [x]" if item.is_checked else "- [ ]"
            text += f"{checkbox} {item.ingredient_text}\n"
        text += "\n"
    return text
