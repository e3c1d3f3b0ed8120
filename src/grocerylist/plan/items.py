"""Grocery list item model."""

from dataclasses import dataclass, field


@dataclass
class GroceryListItem:
    """A single entry in the shopping list."""

    item_name: str
    original_text: str
    quantity_amount: float | None = None
    quantity_unit: str | None = None
    display_unit: str | None = None
    grocery_category: str | None = None
    is_checked: bool = False
    order_index: int = 0

    # Provenance, passed through untouched
    recipe_id: int | str | None = None
    user_saved_recipe_id: str | None = None
    source_recipe_title: str = ""

    # Measurements kept as text when they could not be summed
    combined_measures: list[str] = field(default_factory=list)
