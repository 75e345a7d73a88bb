"""
Grocery categories and keyword-based ingredient categorization.

Matching is plain substring containment against fixed keyword lists,
checked category by category in CATEGORY_KEYWORDS order. The first
category with any hit wins, so overlaps ("pepper" is both produce and
pantry, "cream" both dairy and frozen via "ice cream") resolve by that
order, not by match length. Short keywords can match inside longer words
("rib" in "ribbon").
"""

from enum import Enum
from types import MappingProxyType


class GroceryCategory(str, Enum):
    """Grocery store sections, in display order."""

    PRODUCE = "Produce"
    MEAT_SEAFOOD = "Meat & Seafood"
    DAIRY = "Dairy & Eggs"
    BAKERY = "Bakery"
    PANTRY = "Pantry/Dry Goods"
    FROZEN = "Frozen"
    OTHER = "Other"


# Priority order matters: earlier categories win on overlapping keywords.
# OTHER has no keywords; it is the fallback.
CATEGORY_KEYWORDS = MappingProxyType({
    GroceryCategory.PRODUCE: (
        "tomato", "lettuce", "onion", "garlic", "carrot", "potato", "celery",
        "pepper", "cucumber", "spinach", "broccoli", "cauliflower", "zucchini",
        "apple", "banana", "orange", "lemon", "lime", "avocado", "mushroom",
        "corn", "bean", "pea", "herb", "parsley", "cilantro", "basil", "thyme",
        "rosemary", "oregano", "mint", "dill", "sage", "vegetable", "fruit",
        "berry", "strawberry", "blueberry", "raspberry", "grape", "melon",
        "kale", "chard", "arugula", "cabbage", "squash", "eggplant",
    ),
    GroceryCategory.MEAT_SEAFOOD: (
        "chicken", "beef", "pork", "lamb", "turkey", "duck", "bacon", "sausage",
        "ham", "steak", "ground beef", "ground turkey", "fish", "salmon",
        "tuna", "shrimp", "crab", "lobster", "scallop", "mussel", "oyster",
        "tilapia", "cod", "halibut", "sardine", "anchovy", "meat", "seafood",
        "fillet", "breast", "thigh", "wing", "rib",
    ),
    GroceryCategory.DAIRY: (
        "milk", "cheese", "cheddar", "mozzarella", "parmesan", "yogurt",
        "butter", "cream", "sour cream", "whipped cream", "half and half",
        "cottage cheese", "ricotta", "feta", "brie", "goat cheese", "egg",
        "heavy cream", "light cream", "buttermilk",
    ),
    GroceryCategory.BAKERY: (
        "bread", "baguette", "roll", "bun", "bagel", "croissant", "muffin",
        "donut", "danish", "scone", "tortilla", "pita", "naan", "ciabatta",
        "sourdough", "rye", "wheat bread", "white bread",
    ),
    GroceryCategory.PANTRY: (
        "flour", "sugar", "salt", "pepper", "rice", "pasta", "spaghetti",
        "penne", "macaroni", "oil", "olive oil", "vegetable oil", "coconut oil",
        "vinegar", "soy sauce", "sauce", "broth", "stock", "bouillon",
        "canned", "can", "jar", "tomato paste", "tomato sauce", "honey",
        "syrup", "maple syrup", "jam", "jelly", "peanut butter", "almond butter",
        "oat", "cereal", "granola", "nut", "almond", "walnut", "pecan",
        "cashew", "dried", "raisin", "date", "fig", "spice", "cumin", "paprika",
        "cinnamon", "nutmeg", "ginger", "turmeric", "curry", "chili powder",
        "baking powder", "baking soda", "yeast", "cornstarch", "vanilla",
        "extract", "chocolate chip", "cocoa", "bean", "lentil", "chickpea",
        "kidney bean", "black bean", "quinoa", "couscous", "barley",
    ),
    GroceryCategory.FROZEN: (
        "frozen", "ice cream", "sorbet", "frozen yogurt", "popsicle",
        "frozen vegetable", "frozen fruit", "frozen pizza", "frozen dinner",
        "frozen meal", "frozen french fries", "frozen chicken",
    ),
})


def categorize_ingredient(ingredient: str) -> GroceryCategory:
    """
    Categorize an ingredient line by keyword matching.

    Examples:
        categorize_ingredient("2 cups whole milk") -> GroceryCategory.DAIRY
        categorize_ingredient("boneless chicken breast") -> GroceryCategory.MEAT_SEAFOOD
        categorize_ingredient("xyz123unknownitem") -> GroceryCategory.OTHER
    """
    lowered = (ingredient or "").lower()

    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return category

    return GroceryCategory.OTHER
