"""Ingredient name normalization.

Turns a free-form ingredient name into the comparison key used to merge
shopping list entries. Adjective stripping is conservative: a word is only
dropped when it is not part of a preserved phrase, because over-stripping
silently merges different products ("ground pepper" and "pepper").
"""

import re
from dataclasses import dataclass
from types import MappingProxyType

from grocerylist.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Rule Tables
# =============================================================================

# Decorative words that do not change what the shopper buys
ADJECTIVES_TO_REMOVE = frozenset(
    {
        "fresh",
        "freshly",
        "dried",
        "ground",
        "chopped",
        "finely",
        "roughly",
        "coarsely",
        "thinly",
        "sliced",
        "diced",
        "cubed",
        "minced",
        "crushed",
        "grated",
        "shredded",
        "peeled",
        "seeded",
        "deseeded",
        "pitted",
        "trimmed",
        "halved",
        "quartered",
        "large",
        "medium",
        "small",
        "jumbo",
        "extra",
        "super",
        "baby",
        "thin",
        "thick",
        "whole",
        "optional",
        "cooked",
        "uncooked",
        "raw",
        "ripe",
        "unripe",
        "sweet",
        "unsweetened",
        "salted",
        "unsalted",
        "toasted",
        "softened",
        "melted",
        "canned",
        "organic",
        "boneless",
        "skinless",
        "red",
        "green",
        "yellow",
        "white",
        "black",
        "brown",
        "purple",
        "golden",
    }
)

# Adjective-noun phrases where the adjective changes the ingredient's identity.
# Matching compares singular forms, so either number may be listed.
PRESERVED_PHRASES = frozenset(
    {
        # Ground meats and spices
        "ground beef",
        "ground turkey",
        "ground chicken",
        "ground pork",
        "ground lamb",
        "ground bison",
        "ground pepper",
        "ground cinnamon",
        "ground cumin",
        "ground ginger",
        "ground nutmeg",
        "ground cloves",
        "ground coriander",
        "ground turmeric",
        "ground allspice",
        "ground cardamom",
        "ground mustard",
        # Flours and grains
        "all purpose flour",
        "whole wheat",
        "whole wheat flour",
        "whole grain",
        "whole milk",
        "brown rice",
        "white rice",
        # Toasted products
        "toasted pecan",
        "toasted pecans",
        "toasted sesame oil",
        "toasted sesame seeds",
        "toasted almond",
        "toasted coconut",
        # Varieties
        "sweet potato",
        "sweet onion",
        "sweet corn",
        "red onion",
        "yellow onion",
        "white onion",
        "green onion",
        "red potato",
        "white potato",
        "golden potato",
        "purple potato",
        "yukon gold potato",
        "green bean",
        "green beans",
        "black beans",
        "black bean",
        "black pepper",
        "white pepper",
        "red pepper",
        "green pepper",
        "yellow pepper",
        "orange pepper",
        "ground red pepper",
        "black olives",
        "green olives",
        "green chile",
        "red chile",
        "green cabbage",
        "red cabbage",
        "red bell pepper",
        "green bell pepper",
        "yellow bell pepper",
        "red pepper flakes",
        "crushed red pepper",
        "roasted red pepper",
        "red curry paste",
        "green curry paste",
        "red lentils",
        "green lentils",
        "red wine",
        "red wine vinegar",
        "white wine",
        "white wine vinegar",
        "white vinegar",
        "brown sugar",
        "dark brown sugar",
        "light brown sugar",
        "white sugar",
        "brown butter",
        "white chocolate",
        "green tea",
        "sweetened condensed milk",
        "sun dried tomato",
        "dried cranberries",
        "dried apricot",
        "dried fruit",
        "baby back ribs",
        "smoked paprika",
        # Fresh and dried herbs are bought in different aisles
        "fresh basil",
        "fresh parsley",
        "fresh cilantro",
        "fresh mint",
        "fresh dill",
        "fresh thyme",
        "fresh rosemary",
        "fresh oregano",
        "fresh sage",
        "fresh ginger",
        "dried basil",
        "dried parsley",
        "dried dill",
        "dried thyme",
        "dried rosemary",
        "dried oregano",
        "dried sage",
    }
)

# Phrases that describe usage, not the ingredient
SERVING_PHRASES = (
    "plus more for garnish",
    "plus more to taste",
    "for garnish",
    "for serving",
    "to taste",
    "or more",
    "as needed",
    "divided",
)

# Whole-name synonyms; true synonyms only
INGREDIENT_ALIASES = MappingProxyType(
    {
        "evoo": "olive oil",
        "extra virgin olive oil": "olive oil",
        "virgin olive oil": "olive oil",
        "green onion": "scallion",
        "green onions": "scallion",
        "spring onion": "scallion",
        "spring onions": "scallion",
        "coriander leaves": "cilantro",
        "garbanzo beans": "chickpeas",
        "garbanzo bean": "chickpeas",
        "confectioners sugar": "powdered sugar",
        "icing sugar": "powdered sugar",
        "bicarbonate of soda": "baking soda",
        "iodized salt": "table salt",
        "aubergine": "eggplant",
        "courgette": "zucchini",
        "capsicum": "bell pepper",
        "plain flour": "all purpose flour",
        "ap flour": "all purpose flour",
    }
)

# Per-word spelling corrections
MISSPELLINGS = MappingProxyType(
    {
        "tomatoe": "tomato",
        "tomatos": "tomatoes",
        "potatoe": "potato",
        "potatos": "potatoes",
        "avacado": "avocado",
        "brocoli": "broccoli",
        "brocolli": "broccoli",
        "zuchini": "zucchini",
        "zucchinni": "zucchini",
        "parsely": "parsley",
        "jalepeno": "jalapeno",
        "jalapeño": "jalapeno",
        "mozarella": "mozzarella",
        "parmesean": "parmesan",
        "cinammon": "cinnamon",
        "tumeric": "turmeric",
        "worchestershire": "worcestershire",
        "siracha": "sriracha",
        "vanila": "vanilla",
        "eggss": "eggs",
    }
)

GARLIC_FORMS = frozenset(
    {
        "garlic clove",
        "garlic cloves",
        "clove garlic",
        "cloves garlic",
        "clove of garlic",
        "cloves of garlic",
        "head garlic",
        "head of garlic",
        "garlic head",
    }
)

EGG_FORMS = frozenset({"egg", "eggs"})
EGG_CANONICAL = "eggs"

FLOUR_DEFAULT = "all purpose flour"

HERB_PATTERN_TARGETS = ("scallion", "cilantro", "parsley")

# Names that stay plural; also matched as substrings ("frozen blueberries")
PLURAL_EXCEPTIONS = (
    "beans",
    "peas",
    "lentils",
    "oats",
    "grits",
    "grains",
    "noodles",
    "sprouts",
    "seeds",
    "nuts",
    "almonds",
    "pecans",
    "cashews",
    "eggs",
    "berries",
    "olives",
    "capers",
    "greens",
    "herbs",
    "spices",
    "chives",
    "cloves",
    "flakes",
    "molasses",
    "leftovers",
    "chickpeas",
    "brussels",
)

_MIN_SINGULAR_LENGTH = 3

_PARENTHETICAL = re.compile(r"\([^)]*\)")
_APPROXIMATION = re.compile(
    r"^(?:~|about\s+|approx\.?\s+)\s*\d+(?:\s+\d+/\d+|/\d+|\.\d+)?\s*", re.IGNORECASE
)
_SERVING_PHRASES = re.compile(r"\b(?:" + "|".join(map(re.escape, SERVING_PHRASES)) + r")\b")
_REMOVED = re.compile(r"^(.*?)\s*\(removed\)\s*$", re.IGNORECASE)
_SUBSTITUTED = re.compile(r"^(.*?)\s*\(substituted for (.+?)\)\s*$", re.IGNORECASE)


# =============================================================================
# Helpers
# =============================================================================


def _singular_word(word: str) -> str:
    """Singular form of one word, used for phrase matching and singularization."""
    if word.endswith("oes") and len(word) > 4:
        return word[:-2]
    if word.endswith(("ss", "us", "is")) or not word.endswith("s"):
        return word
    singular = word[:-1]
    return singular if len(singular) >= _MIN_SINGULAR_LENGTH else word


def _singular_phrase(words: list[str]) -> str:
    return " ".join(words[:-1] + [_singular_word(words[-1])])


_SINGULAR_PRESERVED = frozenset(_singular_phrase(phrase.split()) for phrase in PRESERVED_PHRASES)


def _is_preserved(words: list[str], start: int, end: int) -> bool:
    """Check whether words[start:end] is a preserved phrase, ignoring a plural last word."""
    if start < 0 or end > len(words) or end - start < 2:
        return False
    return _singular_phrase(words[start:end]) in _SINGULAR_PRESERVED


def _part_of_preserved_phrase(words: list[str], index: int) -> bool:
    """Check every 2-3 word window around words[index] for a preserved phrase."""
    for size in (2, 3):
        for start in range(index - size + 1, index + 1):
            if _is_preserved(words, start, start + size):
                return True
    return False


def _clean(name: str) -> str:
    text = name.lower().strip().replace("-", " ")
    text = _PARENTHETICAL.sub(" ", text)
    text = _SERVING_PHRASES.sub(" ", text)
    text = " ".join(text.split())
    text = text.strip(", ")
    text = _APPROXIMATION.sub("", text)
    return " ".join(text.replace(",", " ").split())


def _strip_adjectives(text: str) -> str:
    words = text.split()
    kept = [
        word
        for index, word in enumerate(words)
        if word not in ADJECTIVES_TO_REMOVE or _part_of_preserved_phrase(words, index)
    ]
    return " ".join(kept)


def _apply_canonical_forms(text: str) -> str:
    text = " ".join(MISSPELLINGS.get(word, word) for word in text.split())

    if "herb" in text:
        for herb in HERB_PATTERN_TARGETS:
            if herb in text:
                return herb

    if text in GARLIC_FORMS:
        return "garlic"

    if text in EGG_FORMS:
        return EGG_CANONICAL

    if text == "flour":
        return FLOUR_DEFAULT

    return INGREDIENT_ALIASES.get(text, text)


def _singularize(text: str) -> str:
    if any(exception in text for exception in PLURAL_EXCEPTIONS):
        return text
    words = text.split()
    if not words:
        return text
    words[-1] = _singular_word(words[-1])
    return " ".join(words)


# =============================================================================
# Public API
# =============================================================================


def normalize_name(name: str | None) -> str:
    """
    Normalize an ingredient name into a merge key.

    - Lowercase, hyphens to spaces, notes and serving phrases removed
    - Decorative adjectives removed unless part of a preserved phrase
    - Herb, garlic, egg and flour forms unified; misspellings and synonyms fixed
    - Trailing plural dropped unless the name is a known plural

    The result is stable: normalizing a normalized name returns it unchanged.
    """
    if not name or not name.strip():
        return ""

    cleaned = _clean(name)
    if not cleaned:
        return " ".join(name.lower().split())

    text = INGREDIENT_ALIASES.get(cleaned, cleaned)
    text = _strip_adjectives(text) or text
    text = _apply_canonical_forms(text)
    text = _singularize(text)
    return _apply_canonical_forms(text)


@dataclass(frozen=True)
class DisplayName:
    """An ingredient name with recipe modification annotations split off."""

    base_name: str
    is_removed: bool = False
    substituted_for: str | None = None


def parse_ingredient_display_name(name: str) -> DisplayName:
    """
    Split modification annotations from an ingredient name.

    Examples:
        "bacon (removed)" -> DisplayName("bacon", is_removed=True)
        "tofu (substituted for chicken)" -> DisplayName("tofu", substituted_for="chicken")
    """
    if match := _REMOVED.match(name):
        return DisplayName(base_name=match.group(1).strip(), is_removed=True)

    if match := _SUBSTITUTED.match(name):
        return DisplayName(
            base_name=match.group(1).strip(),
            substituted_for=match.group(2).strip(),
        )

    return DisplayName(base_name=name.strip())
