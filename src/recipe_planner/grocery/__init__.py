"""Grocery list helpers: ingredient categorization, grouping keys, and export."""

from .categories import CATEGORY_KEYWORDS, GroceryCategory, categorize_ingredient
from .grouping import (
    CATEGORY_ORDER,
    GroceryItem,
    build_grocery_items,
    format_shopping_list,
    get_ingredient_sort_key,
    group_grocery_items,
    normalize_ingredient_name,
    split_ingredient_lines,
)

__all__ = [
    "CATEGORY_KEYWORDS",
    "CATEGORY_ORDER",
    "GroceryCategory",
    "GroceryItem",
    "categorize_ingredient",
    "normalize_ingredient_name",
    "get_ingredient_sort_key",
    "split_ingredient_lines",
    "build_grocery_items",
    "group_grocery_items",
    "format_shopping_list",
]
