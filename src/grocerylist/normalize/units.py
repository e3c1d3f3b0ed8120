"""Unit normalization, compatibility and conversion utilities."""

import math
from collections.abc import Iterable
from types import MappingProxyType

from grocerylist.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Canonical Units
# =============================================================================

COUNT_UNIT = "each"

VOLUME_UNITS = frozenset({"tsp", "tbsp", "cup", "ml", "liter", "fl_oz", "pint", "quart", "gallon"})
WEIGHT_UNITS = frozenset({"g", "kg", "oz", "lb"})
COUNT_UNITS = frozenset({COUNT_UNIT})
METRIC_VOLUME_UNITS = frozenset({"ml", "liter"})

CANONICAL_UNITS = VOLUME_UNITS | WEIGHT_UNITS | COUNT_UNITS

# Spellings whose meaning depends on case ("T" is a tablespoon, "t" a teaspoon)
CASE_SENSITIVE_UNITS = MappingProxyType({"T": "tbsp", "t": "tsp", "Tbsp": "tbsp", "Tsp": "tsp"})

_UNIT_SPELLINGS: dict[str, tuple[str, ...]] = {
    # Volume
    "tsp": ("tsp", "tsps", "tsp.", "teaspoon", "teaspoons"),
    "tbsp": ("tbsp", "tbsps", "tbsp.", "tbs", "tbl", "tablespoon", "tablespoons"),
    "cup": ("cup", "cups", "c", "c."),
    "fl_oz": ("fl_oz", "fl oz", "fl. oz", "fl. oz.", "fl oz.", "floz", "fluid ounce", "fluid ounces"),
    "pint": ("pint", "pints", "pt", "pts"),
    "quart": ("quart", "quarts", "qt", "qts"),
    "gallon": ("gallon", "gallons", "gal", "gals"),
    "ml": ("ml", "mls", "ml.", "milliliter", "milliliters", "millilitre", "millilitres"),
    "liter": ("liter", "liters", "litre", "litres", "l", "l."),
    # Weight
    "g": ("g", "g.", "gr", "gram", "grams", "gramme", "grammes"),
    "kg": ("kg", "kgs", "kilo", "kilos", "kilogram", "kilograms"),
    "oz": ("oz", "oz.", "ozs", "ounce", "ounces"),
    "lb": ("lb", "lb.", "lbs", "lbs.", "pound", "pounds"),
    # Count-style words all collapse to a single token
    COUNT_UNIT: (
        "each",
        "ea",
        "clove",
        "cloves",
        "head",
        "heads",
        "bunch",
        "bunches",
        "piece",
        "pieces",
        "pc",
        "pcs",
        "can",
        "cans",
        "box",
        "boxes",
        "pinch",
        "pinches",
        "dash",
        "dashes",
        "slice",
        "slices",
        "sprig",
        "sprigs",
        "stalk",
        "stalks",
        "package",
        "packages",
        "pkg",
        "pkgs",
        "jar",
        "jars",
        "bottle",
        "bottles",
        "bag",
        "bags",
        "stick",
        "sticks",
        "handful",
        "handfuls",
        "container",
        "containers",
        "whole",
    ),
}

UNIT_DICTIONARY = MappingProxyType(
    {spelling: canonical for canonical, spellings in _UNIT_SPELLINGS.items() for spelling in spellings}
)

# Milliliters per unit, exact US legal definitions
ML_PER_UNIT = MappingProxyType(
    {
        "ml": 1.0,
        "tsp": 4.92892159375,
        "tbsp": 14.78676478125,
        "fl_oz": 29.5735295625,
        "cup": 236.5882365,
        "pint": 473.176473,
        "quart": 946.352946,
        "gallon": 3785.411784,
        "liter": 1000.0,
    }
)

# Ordered (unit, low, high) ranges; the first range containing the total wins
US_VOLUME_DISPLAY_PREFERENCES: tuple[tuple[str, float, float], ...] = (
    ("cup", 0.25, 4.0),
    ("quart", 1.0, 4.0),
    ("gallon", 1.0, math.inf),
    ("tbsp", 1.0, 4.0),
    ("tsp", 0.0, 3.0),
)
METRIC_VOLUME_DISPLAY_PREFERENCES: tuple[tuple[str, float, float], ...] = (
    ("liter", 1.0, math.inf),
)
FALLBACK_VOLUME_UNIT = "ml"

_RANGE_TOLERANCE = 1e-9

UNIT_DISPLAY_FORMS = MappingProxyType(
    {
        "ml": ("ml", "ml"),
        "tsp": ("tsp", "tsp"),
        "tbsp": ("Tbsp", "Tbsp"),
        "fl_oz": ("fl oz", "fl oz"),
        "cup": ("cup", "cups"),
        "pint": ("pint", "pints"),
        "quart": ("quart", "quarts"),
        "gallon": ("gallon", "gallons"),
        "liter": ("liter", "liters"),
        "g": ("g", "g"),
        "kg": ("kg", "kg"),
        "oz": ("oz", "oz"),
        "lb": ("lb", "lbs"),
        COUNT_UNIT: ("each", "each"),
    }
)


# =============================================================================
# Normalization
# =============================================================================


def normalize_unit(unit: str | None) -> str | None:
    """
    Map a unit spelling to its canonical short form.

    Returns None when the unit is empty or not recognised; None means
    "unit not specified" and is a valid state, not an error.
    """
    if not unit:
        return None

    stripped = unit.strip()
    if stripped in CASE_SENSITIVE_UNITS:
        return CASE_SENSITIVE_UNITS[stripped]

    lowered = " ".join(stripped.lower().split())
    if not lowered:
        return None

    canonical = UNIT_DICTIONARY.get(lowered)
    if canonical is None:
        logger.debug(f"Unknown unit {unit!r}")
    return canonical


def unit_class(unit: str | None) -> str | None:
    """Return "volume", "weight" or "count" for a canonical unit."""
    if unit in VOLUME_UNITS:
        return "volume"
    if unit in WEIGHT_UNITS:
        return "weight"
    if unit in COUNT_UNITS:
        return "count"
    return None


# =============================================================================
# Compatibility & Conversion
# =============================================================================


def units_compatible(unit1: str | None, unit2: str | None) -> bool:
    """
    Check whether two units can be combined into one quantity.

    Rules, first match wins:
    1. Both unspecified.
    2. A count unit and an unspecified unit.
    3. Tablespoons and an unspecified unit (seeds and spices often omit units).
    4. Identical units.
    5. Two volume units (convertible through milliliters).
    6. Two weight units only when identical; weights are never cross-converted.
    7. Two count units.
    """
    u1 = normalize_unit(unit1)
    u2 = normalize_unit(unit2)

    if u1 is None and u2 is None:
        return True

    if {u1, u2} == {COUNT_UNIT, None}:
        return True

    if {u1, u2} == {"tbsp", None}:
        return True

    if u1 is None or u2 is None:
        return False

    if u1 == u2:
        return True

    if u1 in VOLUME_UNITS and u2 in VOLUME_UNITS:
        return True

    if u1 in WEIGHT_UNITS and u2 in WEIGHT_UNITS:
        return False

    return u1 in COUNT_UNITS and u2 in COUNT_UNITS


def to_milliliters(amount: float, unit: str | None) -> float | None:
    """Convert a volume amount to milliliters, None if the unit is not a volume."""
    factor = ML_PER_UNIT.get(normalize_unit(unit) or "")
    if factor is None:
        return None
    return amount * factor


def convert(amount: float | None, from_unit: str | None, to_unit: str | None) -> float | None:
    """
    Convert an amount between two units.

    Identical units return the amount unchanged; volume units route through
    milliliters. Anything else (unknown units, weights of different kinds,
    unrelated unit classes, negative or missing amounts) returns None.
    """
    if amount is None or math.isnan(amount) or amount < 0:
        return None

    source = normalize_unit(from_unit)
    target = normalize_unit(to_unit)

    if source is None or target is None:
        if from_unit is None and to_unit is None:
            return amount
        logger.debug(f"No conversion from {from_unit!r} to {to_unit!r}")
        return None

    if source == target:
        return amount

    if source in ML_PER_UNIT and target in ML_PER_UNIT:
        return amount * ML_PER_UNIT[source] / ML_PER_UNIT[target]

    logger.debug(f"No conversion from {from_unit!r} to {to_unit!r}")
    return None


def choose_display_unit(total_ml: float, units: Iterable[str | None] = ()) -> str:
    """
    Pick the most readable volume unit for a total in milliliters.

    Metric inputs stay metric (liters, then milliliters). Otherwise cups are
    preferred between 1/4 and 4 cups, larger totals move to quarts and
    gallons, smaller ones to tablespoons and teaspoons, falling back to
    milliliters.
    """
    normalized = {normalize_unit(u) for u in units}
    normalized.discard(None)

    if normalized and normalized <= METRIC_VOLUME_UNITS:
        preferences = METRIC_VOLUME_DISPLAY_PREFERENCES
    else:
        preferences = US_VOLUME_DISPLAY_PREFERENCES

    for unit, low, high in preferences:
        value = total_ml / ML_PER_UNIT[unit]
        if value > 0 and low - _RANGE_TOLERANCE <= value <= high + _RANGE_TOLERANCE:
            return unit

    return FALLBACK_VOLUME_UNIT


def unit_display_name(unit: str | None, amount: float | None = 1) -> str | None:
    """
    Human-friendly name for a canonical unit, pluralized for the amount.

    Amounts above one use the plural form, so half a cup reads "½ cup".
    """
    if not unit or unit == "null":
        return None

    forms = UNIT_DISPLAY_FORMS.get(unit)
    if forms is None:
        return unit

    singular, plural = forms
    if amount is not None and amount <= 1:
        return singular
    return plural
