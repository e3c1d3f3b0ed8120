"""Shopping list aggregation, categorization and building."""

from grocerylist.plan.aggregation import aggregate, combine_measurements, merge_items
from grocerylist.plan.categorize import categorize, categorize_items, sort_categories
from grocerylist.plan.checked_state import CheckedStateStore, InMemoryCheckedStateStore
from grocerylist.plan.items import GroceryListItem
from grocerylist.plan.shopping_list import (
    GroceryList,
    GroceryListBuilder,
    Ingredient,
    IngredientGroup,
    Recipe,
    format_ingredients_for_grocery_list,
    group_by_category,
    prepare_for_insert,
    render_markdown,
)

__all__ = [
    "CheckedStateStore",
    "GroceryList",
    "GroceryListBuilder",
    "GroceryListItem",
    "InMemoryCheckedStateStore",
    "Ingredient",
    "IngredientGroup",
    "Recipe",
    "aggregate",
    "categorize",
    "categorize_items",
    "combine_measurements",
    "format_ingredients_for_grocery_list",
    "group_by_category",
    "merge_items",
    "prepare_for_insert",
    "render_markdown",
    "sort_categories",
]
