"""Aggregation of grocery list items across recipes."""

from collections.abc import Callable
from dataclasses import replace

from grocerylist.logging_config import get_logger
from grocerylist.normalize.names import normalize_name
from grocerylist.normalize.quantity import format_amount, parse_quantity
from grocerylist.normalize.units import (
    COUNT_UNIT,
    VOLUME_UNITS,
    choose_display_unit,
    convert,
    normalize_unit,
    to_milliliters,
    unit_display_name,
    units_compatible,
)
from grocerylist.plan.items import GroceryListItem

logger = get_logger(__name__)


ORIGINAL_TEXT_SEPARATOR = " | "

# Ingredients that recipes measure both by count and by volume
# ("2 shallots" and "1/2 cup diced shallots"). These are combined into one
# entry that lists both measurements instead of summing them.
COUNT_VOLUME_INGREDIENTS = frozenset(
    {
        "shallot",
        "garlic",
        "scallion",
        "onion",
        "red onion",
        "yellow onion",
        "white onion",
        "sweet onion",
        "leek",
        "celery",
        "carrot",
        "bell pepper",
        "jalapeno",
        "mushroom",
        "tomato",
        "fresh ginger",
        "fresh parsley",
        "fresh cilantro",
        "fresh basil",
    }
)


def _combine_amounts(
    amount1: float,
    unit1: str | None,
    amount2: float,
    unit2: str | None,
) -> tuple[float, str | None] | None:
    """Sum two amounts in a common unit, None if no safe conversion exists."""
    if unit1 == unit2:
        return amount1 + amount2, unit1

    # Count or tablespoon paired with an unspecified unit
    if unit1 is None or unit2 is None:
        return amount1 + amount2, unit1 or unit2

    if unit1 in VOLUME_UNITS and unit2 in VOLUME_UNITS:
        ml1 = to_milliliters(amount1, unit1)
        ml2 = to_milliliters(amount2, unit2)
        if ml1 is None or ml2 is None:
            return None
        total_ml = ml1 + ml2
        display_unit = choose_display_unit(total_ml, (unit1, unit2))
        total = convert(total_ml, "ml", display_unit)
        if total is None:
            return None
        return total, display_unit

    return None


def _prepare(item: GroceryListItem, normalized_name: str) -> GroceryListItem:
    """Copy an item with canonical name, unit and amount."""
    unit = normalize_unit(item.quantity_unit)
    amount = parse_quantity(item.quantity_amount)
    display_unit = unit_display_name(unit, amount) if unit else item.display_unit
    return replace(
        item,
        item_name=normalized_name,
        quantity_unit=unit,
        quantity_amount=amount,
        display_unit=display_unit,
        combined_measures=list(item.combined_measures),
    )


def merge_items(
    base: GroceryListItem,
    other: GroceryListItem,
    separator: str = ORIGINAL_TEXT_SEPARATOR,
) -> GroceryListItem | None:
    """
    Merge two items of the same ingredient.

    Returns the combined item, or None when the units are incompatible, only
    one of the amounts is known, or the conversion fails. Neither input is
    modified.
    """
    unit1 = normalize_unit(base.quantity_unit)
    unit2 = normalize_unit(other.quantity_unit)
    if not units_compatible(unit1, unit2):
        return None

    amount1 = parse_quantity(base.quantity_amount)
    amount2 = parse_quantity(other.quantity_amount)

    amount: float | None
    if amount1 is None and amount2 is None:
        amount, unit = None, unit1 or unit2
    elif amount1 is None or amount2 is None:
        return None
    else:
        combined = _combine_amounts(amount1, unit1, amount2, unit2)
        if combined is None:
            logger.debug(
                f"Could not combine {amount1} {unit1} with {amount2} {unit2} "
                f"for {base.item_name!r}, keeping both"
            )
            return None
        amount, unit = combined

    return replace(
        base,
        quantity_amount=amount,
        quantity_unit=unit,
        display_unit=unit_display_name(unit, amount),
        original_text=f"{base.original_text}{separator}{other.original_text}",
        combined_measures=base.combined_measures + other.combined_measures,
    )


def _sweep(
    group: list[GroceryListItem],
    merge: Callable[[GroceryListItem, GroceryListItem], GroceryListItem | None],
) -> list[GroceryListItem]:
    """
    Pairwise merge sweep over one name group.

    Each unprocessed item becomes an accumulator that absorbs every later
    item it can merge with. The scan repeats until the accumulator stops
    changing, since absorbing one item can make an earlier skipped one
    compatible (an unspecified unit becoming tablespoons).
    """
    merged_items: list[GroceryListItem] = []
    processed: set[int] = set()

    for i, item in enumerate(group):
        if i in processed:
            continue
        processed.add(i)
        base = item

        changed = True
        while changed:
            changed = False
            for j in range(i + 1, len(group)):
                if j in processed:
                    continue
                merged = merge(base, group[j])
                if merged is not None:
                    base = merged
                    processed.add(j)
                    changed = True

        merged_items.append(base)

    return merged_items


def _describe_measure(item: GroceryListItem) -> str:
    amount_text = format_amount(item.quantity_amount)
    if amount_text is None:
        return item.original_text
    unit_text = unit_display_name(item.quantity_unit, item.quantity_amount)
    return f"{amount_text} {unit_text}" if unit_text else amount_text


def _is_count_like(unit: str | None) -> bool:
    return unit is None or unit == COUNT_UNIT


def combine_measurements(
    base: GroceryListItem,
    other: GroceryListItem,
    separator: str = ORIGINAL_TEXT_SEPARATOR,
) -> GroceryListItem | None:
    """
    Combine a count entry with a volume entry of the same ingredient.

    The base keeps its own amount; the other measurement is recorded in
    combined_measures rather than summed, since count and volume cannot be
    converted.
    """
    unit1 = normalize_unit(base.quantity_unit)
    unit2 = normalize_unit(other.quantity_unit)
    count_and_volume = (_is_count_like(unit1) and unit2 in VOLUME_UNITS) or (
        unit1 in VOLUME_UNITS and _is_count_like(unit2)
    )
    if not count_and_volume:
        return None

    return replace(
        base,
        display_unit=unit_display_name(unit1, base.quantity_amount) if unit1 else base.display_unit,
        original_text=f"{base.original_text}{separator}{other.original_text}",
        combined_measures=base.combined_measures
        + [_describe_measure(other)]
        + other.combined_measures,
    )


def aggregate(
    items: list[GroceryListItem],
    separator: str = ORIGINAL_TEXT_SEPARATOR,
) -> list[GroceryListItem]:
    """
    Aggregate grocery items into a deduplicated list.

    Items are grouped by normalized name, then compatible entries in each
    group are merged with their quantities summed in a common unit. Items
    that cannot be safely combined are kept as separate entries. Input items
    are not modified.

    Args:
        items: Items built from recipe ingredient lines.
        separator: Joins the original text of merged items.

    Returns:
        Aggregated items, grouped in order of first appearance.
    """
    if not items:
        return []

    groups: dict[str, list[GroceryListItem]] = {}
    for item in items:
        key = normalize_name(item.item_name)
        groups.setdefault(key, []).append(_prepare(item, key))

    def merge(base: GroceryListItem, other: GroceryListItem) -> GroceryListItem | None:
        return merge_items(base, other, separator)

    def combine(base: GroceryListItem, other: GroceryListItem) -> GroceryListItem | None:
        return combine_measurements(base, other, separator)

    aggregated: list[GroceryListItem] = []
    for name, group in groups.items():
        merged = _sweep(group, merge)
        if name in COUNT_VOLUME_INGREDIENTS and len(merged) > 1:
            merged = _sweep(merged, combine)
        aggregated.extend(merged)

    logger.info(
        f"Aggregated {len(items)} items into {len(aggregated)} "
        f"({len(items) - len(aggregated)} combined)"
    )
    return aggregated
