"""API endpoints for grocery list building."""

from fastapi import APIRouter
from pydantic import BaseModel

from recipe_planner.grocery import (
    GroceryItem,
    build_grocery_items,
    categorize_ingredient,
    format_shopping_list,
    group_grocery_items,
)
from recipe_planner.recipe_import import RecipeData

router = APIRouter(tags=["grocery"])


class CategorizeRequest(BaseModel):
    ingredients: list[str]


class GroceryItemResponse(BaseModel):
    ingredient_text: str
    category: str
    sort_key: str
    recipe_title: str | None = None

    @classmethod
    def from_item(cls, item: GroceryItem) -> "GroceryItemResponse":
        return cls(
            ingredient_text=item.ingredient_text,
            category=item.category.value,
            sort_key=item.sort_key,
            recipe_title=item.recipe_title,
        )


class CategorizeResponse(BaseModel):
    items: list[GroceryItemResponse]


class RecipeIngredientsInput(BaseModel):
    title: str
    ingredients: str  # newline-delimited, as produced by recipe import


class GroceryListRequest(BaseModel):
    recipes: list[RecipeIngredientsInput]


class GroceryCategoryGroup(BaseModel):
    category: str
    items: list[GroceryItemResponse]


class GroceryListResponse(BaseModel):
    categories: list[GroceryCategoryGroup]
    text: str  # checklist export


@router.post("/grocery/categorize", response_model=CategorizeResponse)
async def categorize(req: CategorizeRequest) -> CategorizeResponse:
    """Categorize individual ingredient lines."""
    items = [
        GroceryItem(ingredient_text=line, category=categorize_ingredient(line))
        for line in req.ingredients
    ]
    return CategorizeResponse(items=[GroceryItemResponse.from_item(item) for item in items])


@router.post("/grocery/list", response_model=GroceryListResponse)
async def grocery_list(req: GroceryListRequest) -> GroceryListResponse:
    """Build a categorized, sorted grocery list from recipes' ingredients."""
    recipes = [
        RecipeData(title=r.title, ingredients=r.ingredients, instructions="")
        for r in req.recipes
    ]
    items = build_grocery_items(recipes)

    groups = [
        GroceryCategoryGroup(
            category=category.value,
            items=[GroceryItemResponse.from_item(item) for item in category_items],
        )
        for category, category_items in group_grocery_items(items).items()
    ]
    return GroceryListResponse(categories=groups, text=format_shopping_list(items))
