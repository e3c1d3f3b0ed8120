"""Quantity parsing and display formatting."""

import math
import re

from grocerylist.logging_config import get_logger

logger = get_logger(__name__)


UNICODE_FRACTIONS: dict[str, float] = {
    "¼": 0.25,
    "½": 0.5,
    "¾": 0.75,
    "⅐": 1 / 7,
    "⅑": 1 / 9,
    "⅒": 0.1,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅕": 0.2,
    "⅖": 0.4,
    "⅗": 0.6,
    "⅘": 0.8,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

# Fractions a shopper reads easily, keyed by value rounded to 3 places
DISPLAY_FRACTIONS: dict[float, str] = {
    0.125: "⅛",
    0.2: "⅕",
    0.25: "¼",
    0.33: "⅓",
    0.333: "⅓",
    0.375: "⅜",
    0.4: "⅖",
    0.5: "½",
    0.6: "⅗",
    0.625: "⅝",
    0.67: "⅔",
    0.667: "⅔",
    0.75: "¾",
    0.8: "⅘",
    0.875: "⅞",
}

APPROXIMATION_PREFIXES = ("~", "approx.", "approx ", "about ")

_UNICODE_CHARS = "".join(UNICODE_FRACTIONS)
_MIXED_UNICODE = re.compile(rf"^(\d+)\s*([{_UNICODE_CHARS}])$")
_MIXED_FRACTION = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_SIMPLE_FRACTION = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_RANGE = re.compile(rf"^(.+?)\s*(?:-|–|\bto\b)\s*[\d.{_UNICODE_CHARS}]", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)")


def _strip_approximation(text: str) -> str:
    lowered = text.lower()
    for prefix in APPROXIMATION_PREFIXES:
        if lowered.startswith(prefix):
            return text[len(prefix) :].strip()
    return text


def _fraction(numerator: str, denominator: str) -> float | None:
    denom = int(denominator)
    if denom == 0:
        return None
    return int(numerator) / denom


def parse_quantity(raw: str | int | float | None) -> float | None:
    """
    Parse a free-form amount into a number.

    Handles formats like:
    - 2, 1.5 (numbers pass through)
    - "1.5", "1/2", "1 1/2"
    - "½", "1 ½", "1½"
    - "~2", "about 1/2" (approximation prefix dropped)
    - "2-3", "3/4 to 1" (range, first term)

    Returns None for anything that does not describe a number, such as
    "to taste" or "a pinch". None means "cannot aggregate by quantity",
    never zero.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
        return None if math.isnan(value) else value

    text = str(raw).strip()
    if not text:
        return None

    text = _strip_approximation(text)
    if not text:
        return None

    # Ranges resolve to their first term, which may itself be a fraction
    if match := _RANGE.match(text):
        text = match.group(1).strip()

    value = _parse_term(text)
    if value is None:
        logger.debug(f"Unparsable quantity {raw!r}, treating as unspecified")
    return value


def _parse_term(text: str) -> float | None:
    if text in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[text]

    if match := _MIXED_UNICODE.match(text):
        return int(match.group(1)) + UNICODE_FRACTIONS[match.group(2)]

    if match := _MIXED_FRACTION.match(text):
        fraction = _fraction(match.group(2), match.group(3))
        if fraction is None:
            return None
        return int(match.group(1)) + fraction

    if match := _SIMPLE_FRACTION.match(text):
        return _fraction(match.group(1), match.group(2))

    if match := _LEADING_NUMBER.match(text):
        return float(match.group(1))

    return None


def format_amount(amount: float | None) -> str | None:
    """Render an amount for a shopper, preferring common fractions over decimals."""
    if amount is None or amount == 0:
        return None

    if float(amount).is_integer():
        return str(int(amount))

    whole = math.floor(amount)
    remainder = round(amount - whole, 3)

    if remainder in DISPLAY_FRACTIONS:
        glyph = DISPLAY_FRACTIONS[remainder]
        return f"{whole} {glyph}" if whole > 0 else glyph

    for value, glyph in DISPLAY_FRACTIONS.items():
        if abs(remainder - value) < 0.01:
            return f"{whole} {glyph}" if whole > 0 else glyph

    return f"{amount:.2f}".rstrip("0").rstrip(".")
