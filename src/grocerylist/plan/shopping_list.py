"""Shopping list generation from recipe ingredient groups."""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from grocerylist.logging_config import LoggingContext, get_logger
from grocerylist.normalize.names import parse_ingredient_display_name
from grocerylist.normalize.quantity import format_amount, parse_quantity
from grocerylist.normalize.units import normalize_unit, unit_display_name
from grocerylist.plan.aggregation import ORIGINAL_TEXT_SEPARATOR, aggregate
from grocerylist.plan.categorize import OTHER, categorize_items, sort_categories
from grocerylist.plan.checked_state import CheckedStateStore
from grocerylist.plan.items import GroceryListItem

logger = get_logger(__name__)

DEFAULT_RECIPE_TITLE = "Unknown Recipe"


# =============================================================================
# Recipe Input
# =============================================================================


@dataclass
class Ingredient:
    """One ingredient line as a recipe lists it."""

    name: str
    amount: str | float | None = None
    unit: str | None = None


@dataclass
class IngredientGroup:
    """A named section of a recipe's ingredients ("Sauce", "Main")."""

    name: str
    ingredients: list[Ingredient] = field(default_factory=list)


@dataclass
class Recipe:
    """A recipe contributing ingredients to the shopping list."""

    title: str
    ingredient_groups: list[IngredientGroup] = field(default_factory=list)
    id: int | str | None = None
    user_saved_recipe_id: str | None = None


# =============================================================================
# Output
# =============================================================================


@dataclass
class GroceryList:
    """Aggregated shopping list for a set of recipes."""

    items: list[GroceryListItem] = field(default_factory=list)
    source_recipe_titles: list[str] = field(default_factory=list)

    @property
    def items_by_category(self) -> dict[str, list[GroceryListItem]]:
        """Items grouped by category, sections in store walking order."""
        return group_by_category(self.items)

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.is_checked)


# =============================================================================
# Formatting
# =============================================================================


def _amount_text(amount: str | float | None) -> str:
    if amount is None:
        return ""
    if isinstance(amount, str):
        return amount.strip()
    return format_amount(amount) or ""


def format_ingredients_for_grocery_list(
    recipe: Recipe,
    default_title: str = DEFAULT_RECIPE_TITLE,
) -> list[GroceryListItem]:
    """
    Turn a recipe's ingredient groups into unaggregated grocery items.

    Ingredients marked "(removed)" are skipped, substitution notes are
    dropped from the name, and blank names are skipped with a warning.
    """
    items: list[GroceryListItem] = []
    title = recipe.title or default_title

    for group in recipe.ingredient_groups:
        for ingredient in group.ingredients:
            parsed = parse_ingredient_display_name(ingredient.name or "")
            if parsed.is_removed:
                logger.debug(f"Skipping removed ingredient {parsed.base_name!r} in {title!r}")
                continue
            if not parsed.base_name:
                logger.warning(f"Skipping ingredient without a name in {title!r} ({group.name})")
                continue

            amount = parse_quantity(ingredient.amount)
            unit = normalize_unit(ingredient.unit)
            original_text = " ".join(
                f"{_amount_text(ingredient.amount)} {ingredient.unit or ''} {ingredient.name}".split()
            )

            items.append(
                GroceryListItem(
                    item_name=parsed.base_name,
                    original_text=original_text,
                    quantity_amount=amount,
                    quantity_unit=unit,
                    display_unit=unit_display_name(unit, amount) if unit else ingredient.unit,
                    order_index=len(items),
                    recipe_id=recipe.id,
                    user_saved_recipe_id=recipe.user_saved_recipe_id,
                    source_recipe_title=title,
                )
            )

    logger.debug(f"Formatted {len(items)} items from {title!r}")
    return items


def group_by_category(items: list[GroceryListItem]) -> dict[str, list[GroceryListItem]]:
    """Group items by category, sections in store walking order."""
    groups: dict[str, list[GroceryListItem]] = {}
    for item in sorted(items, key=lambda i: i.order_index):
        groups.setdefault(item.grocery_category or OTHER, []).append(item)
    return {category: groups[category] for category in sort_categories(list(groups))}


def display_text(item: GroceryListItem) -> str:
    """Shopper-facing line, e.g. "1 ½ cups olive oil" or "2 shallot (+ ½ cup)"."""
    parts = [format_amount(item.quantity_amount), item.display_unit, item.item_name]
    text = " ".join(part for part in parts if part)
    if item.combined_measures:
        text += f" (+ {', '.join(item.combined_measures)})"
    return text


def render_markdown(
    grocery_list: GroceryList,
    title: str | None = None,
    generated_on: date | None = None,
    separator: str = ORIGINAL_TEXT_SEPARATOR,
) -> str:
    """Render the list as a markdown checklist grouped by category."""
    lines = [f"# {title or 'Grocery List'}", ""]
    lines += [f"*Generated on {(generated_on or date.today()).isoformat()}*", ""]

    for category, items in grocery_list.items_by_category.items():
        lines += [f"## {category}", ""]
        for item in items:
            checkbox = "[x]" if item.is_checked else "[ ]"
            line = f"- {checkbox} {display_text(item)}"
            source_count = len(item.original_text.split(separator))
            if source_count > 1:
                line += f" *(combined from {source_count} lines)*"
            lines.append(line)
        lines.append("")

    return "\n".join(lines)


def prepare_for_insert(items: list[GroceryListItem], shopping_list_id: str) -> list[dict[str, Any]]:
    """Shape items as storage rows; checked state always starts unchecked."""
    with LoggingContext(shopping_list_id=shopping_list_id):
        logger.info(f"Preparing {len(items)} items for storage")
    return [
        {
            "shopping_list_id": shopping_list_id,
            "item_name": item.item_name,
            "original_text": item.original_text,
            "quantity_amount": item.quantity_amount,
            "quantity_unit": item.quantity_unit,
            "display_unit": item.display_unit or item.quantity_unit,
            "grocery_category": item.grocery_category,
            "is_checked": False,
            "order_index": item.order_index,
            "recipe_id": item.recipe_id,
            "user_saved_recipe_id": item.user_saved_recipe_id,
            "source_recipe_title": item.source_recipe_title,
            "combined_measures": list(item.combined_measures),
        }
        for item in items
    ]


# =============================================================================
# Builder
# =============================================================================


class GroceryListBuilder:
    """
    Builds shopping lists from recipes with:
    - Ingredient aggregation across recipes
    - Unit conversion for compatible volumes (2 tbsp + 1/4 cup -> 6 tbsp)
    - Aisle categorization
    - Checked state restored from the store
    """

    def __init__(
        self,
        checked_store: CheckedStateStore | None = None,
        separator: str = ORIGINAL_TEXT_SEPARATOR,
        fallback_category: str = OTHER,
        default_recipe_title: str = DEFAULT_RECIPE_TITLE,
    ):
        self.checked_store = checked_store
        self.separator = separator
        self.fallback_category = fallback_category
        self.default_recipe_title = default_recipe_title

    def build(self, recipes: list[Recipe], user_id: str | None = None) -> GroceryList:
        """
        Build an aggregated, categorized shopping list.

        Args:
            recipes: Recipes whose ingredients go on the list.
            user_id: Owner of the checked state; None skips restoring it.

        Returns:
            GroceryList with ordered items and contributing recipe titles.
        """
        logger.info(f"Building grocery list from {len(recipes)} recipes")

        raw_items: list[GroceryListItem] = []
        titles: list[str] = []
        for recipe in recipes:
            recipe_items = format_ingredients_for_grocery_list(recipe, self.default_recipe_title)
            raw_items.extend(recipe_items)
            title = recipe.title or self.default_recipe_title
            if recipe_items and title not in titles:
                titles.append(title)

        aggregated = aggregate(raw_items, self.separator)
        categorized = categorize_items(aggregated, self.fallback_category)
        items = [
            self._restore_checked(replace(item, order_index=index), user_id)
            for index, item in enumerate(categorized)
        ]

        logger.info(f"Grocery list has {len(items)} items from {len(titles)} recipes")
        return GroceryList(items=items, source_recipe_titles=titles)

    def _restore_checked(self, item: GroceryListItem, user_id: str | None) -> GroceryListItem:
        if self.checked_store is None or user_id is None:
            return item
        checked = self.checked_store.get_checked(user_id, item.item_name)
        if checked is None:
            return item
        return replace(item, is_checked=checked)
