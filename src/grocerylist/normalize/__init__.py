"""Normalize quantities, units and ingredient names into comparable forms."""

from grocerylist.normalize.names import (
    DisplayName,
    normalize_name,
    parse_ingredient_display_name,
)
from grocerylist.normalize.quantity import format_amount, parse_quantity
from grocerylist.normalize.units import (
    choose_display_unit,
    convert,
    normalize_unit,
    unit_display_name,
    units_compatible,
)

__all__ = [
    "DisplayName",
    "choose_display_unit",
    "convert",
    "format_amount",
    "normalize_name",
    "normalize_unit",
    "parse_ingredient_display_name",
    "parse_quantity",
    "unit_display_name",
    "units_compatible",
]
