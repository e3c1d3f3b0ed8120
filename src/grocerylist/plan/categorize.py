"""Rule-based grocery aisle categorization."""

import re
from dataclasses import dataclass, replace
from functools import lru_cache

from grocerylist.logging_config import get_logger
from grocerylist.plan.items import GroceryListItem

logger = get_logger(__name__)


SPICES_AND_HERBS = "Spices & Herbs"
MEAT_AND_SEAFOOD = "Meat & Seafood"
CONDIMENTS_AND_SAUCES = "Condiments & Sauces"
PANTRY = "Pantry"
DAIRY_AND_EGGS = "Dairy & Eggs"
PRODUCE = "Produce"
FROZEN = "Frozen"
BAKERY = "Bakery"
OTHER = "Other"

# Walking order through a typical store, used to sort category sections
STORE_CATEGORY_ORDER = (
    PRODUCE,
    MEAT_AND_SEAFOOD,
    DAIRY_AND_EGGS,
    PANTRY,
    BAKERY,
    FROZEN,
    SPICES_AND_HERBS,
    CONDIMENTS_AND_SAUCES,
    "Beverages",
    "Snacks",
    "Health & Personal Care",
    OTHER,
)

# Words marking an herb as fresh produce rather than a dried spice
FRESH_QUALIFIERS = ("fresh", "leaf", "leaves", "sprig", "sprigs", "bunch")

# Herbs sold both dried and fresh; without a fresh qualifier they are spices
DUAL_FORM_HERBS = ("thyme", "rosemary", "oregano", "sage", "marjoram", "tarragon", "dill")


@lru_cache(maxsize=None)
def _pattern(terms: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(term) for term in sorted(terms, key=len, reverse=True))
    return re.compile(rf"\b(?:{alternation})\b")


def _mentions(name: str, terms: tuple[str, ...]) -> bool:
    """Word-boundary match of any term, so "pea" never matches "peanut"."""
    return bool(terms) and _pattern(terms).search(name) is not None


@dataclass(frozen=True)
class CategoryRule:
    """
    One band of the categorizer.

    Matches when the name mentions any of ``terms`` and none of
    ``exclusions``. ``fresh_terms`` match only alongside a fresh qualifier;
    ``dried_terms`` match only without one.
    """

    category: str
    terms: tuple[str, ...] = ()
    exclusions: tuple[str, ...] = ()
    fresh_terms: tuple[str, ...] = ()
    dried_terms: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        if _mentions(name, self.exclusions):
            return False
        if _mentions(name, self.terms):
            return True
        is_fresh = _mentions(name, FRESH_QUALIFIERS)
        if is_fresh and _mentions(name, self.fresh_terms):
            return True
        return not is_fresh and _mentions(name, self.dried_terms)


# Evaluated top to bottom, first match wins. Spices come before produce so
# "onion powder" is never filed next to onions.
CATEGORY_RULES: tuple[CategoryRule, ...] = (
    # Colored sweet peppers, ahead of the spice band's "pepper"
    CategoryRule(
        PRODUCE,
        terms=("red pepper", "green pepper", "yellow pepper", "orange pepper"),
        exclusions=(
            "crushed red pepper",
            "ground red pepper",
            "red pepper flakes",
            "roasted red pepper",
        ),
    ),
    CategoryRule(
        SPICES_AND_HERBS,
        terms=(
            "powder",
            "dried",
            "salt",
            "pepper",
            "peppercorn",
            "peppercorns",
            "paprika",
            "smoked paprika",
            "cayenne",
            "cumin",
            "cinnamon",
            "vanilla",
            "turmeric",
            "nutmeg",
            "allspice",
            "cardamom",
            "clove",
            "cloves",
            "coriander",
            "caraway",
            "saffron",
            "sumac",
            "star anise",
            "garam masala",
            "seasoning",
            "bay leaf",
            "bay leaves",
            "fennel seed",
            "fennel seeds",
            "mustard seed",
            "mustard seeds",
            "sesame seed",
            "sesame seeds",
            "poppy seed",
            "poppy seeds",
            "red pepper flakes",
            "chili flakes",
            "crushed red pepper",
            "garlic granules",
            "onion flakes",
            "ground ginger",
            "ground mustard",
            "dry mustard",
        ),
        exclusions=(
            "bell pepper",
            "red bell pepper",
            "green bell pepper",
            "roasted red pepper",
            "jalapeno pepper",
            "poblano pepper",
            "chili pepper",
            "chile pepper",
            "pepper jack",
            "baking powder",
            "cocoa powder",
            "protein powder",
            "dried fruit",
            "dried cranberries",
            "dried apricot",
            "sun dried tomato",
        ),
        dried_terms=DUAL_FORM_HERBS,
    ),
    CategoryRule(
        MEAT_AND_SEAFOOD,
        terms=(
            "chicken",
            "beef",
            "pork",
            "veal",
            "fish",
            "salmon",
            "shrimp",
            "prawn",
            "prawns",
            "bacon",
            "turkey",
            "lamb",
            "steak",
            "roast",
            "tenderloin",
            "ribs",
            "baby back rib",
            "short rib",
            "spare rib",
            "prime rib",
            "chops",
            "ham",
            "sausage",
            "chorizo",
            "pepperoni",
            "prosciutto",
            "pancetta",
            "tuna",
            "cod",
            "halibut",
            "tilapia",
            "mahi mahi",
            "anchovy",
            "anchovies",
            "crab",
            "lobster",
            "scallop",
            "scallops",
            "mussels",
            "clams",
            "oysters",
            "duck",
            "venison",
            "bison",
        ),
        exclusions=("broth", "stock", "bouillon", "sauce"),
    ),
    CategoryRule(
        CONDIMENTS_AND_SAUCES,
        terms=(
            "sauce",
            "ketchup",
            "mustard",
            "mayo",
            "mayonnaise",
            "dressing",
            "tamari",
            "pickle",
            "pickles",
            "relish",
            "sriracha",
            "worcestershire",
            "teriyaki",
            "tahini",
            "pesto",
            "salsa",
            "hummus",
            "jam",
            "jelly",
            "honey",
            "maple syrup",
            "syrup",
            "molasses",
            "agave",
            "tomato paste",
            "marinara",
            "alfredo",
            "chili paste",
            "curry paste",
            "miso",
            "hoisin",
            "gochujang",
            "horseradish",
            "vinegar",
        ),
    ),
    CategoryRule(
        PANTRY,
        terms=(
            "flour",
            "sugar",
            "rice",
            "pasta",
            "spaghetti",
            "penne",
            "noodles",
            "oil",
            "beans",
            "lentils",
            "oats",
            "quinoa",
            "stock",
            "broth",
            "bouillon",
            "cornstarch",
            "cornmeal",
            "polenta",
            "arrowroot",
            "tapioca",
            "breadcrumb",
            "breadcrumbs",
            "bread crumbs",
            "panko",
            "crackers",
            "cereal",
            "granola",
            "nuts",
            "almonds",
            "walnuts",
            "pecans",
            "cashews",
            "peanuts",
            "pine nuts",
            "chickpeas",
            "split peas",
            "barley",
            "bulgur",
            "couscous",
            "millet",
            "baking powder",
            "baking soda",
            "cream of tartar",
            "yeast",
            "cocoa",
            "cocoa powder",
            "chocolate chips",
            "peanut butter",
            "coconut milk",
            "raisins",
            "dried fruit",
            "dried cranberries",
            "dried apricot",
            "sun dried tomato",
            "roasted red pepper",
        ),
        exclusions=(
            "green beans",
            "green bean",
            "snap peas",
            "almond milk",
            "tortilla",
            "tortillas",
        ),
    ),
    CategoryRule(
        DAIRY_AND_EGGS,
        terms=(
            "milk",
            "cheese",
            "butter",
            "cream",
            "sour cream",
            "cream cheese",
            "yogurt",
            "egg",
            "eggs",
            "ricotta",
            "mozzarella",
            "cheddar",
            "parmesan",
            "pecorino",
            "gruyere",
            "feta",
            "brie",
            "camembert",
            "mascarpone",
            "half and half",
            "half & half",
            "buttermilk",
            "kefir",
            "ghee",
            "pepper jack",
        ),
    ),
    CategoryRule(
        PRODUCE,
        terms=(
            "onion",
            "garlic",
            "tomato",
            "tomatoes",
            "bell pepper",
            "jalapeno",
            "chile",
            "chili pepper",
            "poblano",
            "lettuce",
            "spinach",
            "kale",
            "arugula",
            "carrot",
            "celery",
            "potato",
            "sweet potato",
            "broccoli",
            "cauliflower",
            "cucumber",
            "zucchini",
            "squash",
            "eggplant",
            "mushroom",
            "avocado",
            "apple",
            "banana",
            "orange",
            "lemon",
            "lime",
            "grape",
            "grapes",
            "mango",
            "pineapple",
            "peach",
            "pear",
            "strawberry",
            "strawberries",
            "blueberry",
            "blueberries",
            "raspberry",
            "raspberries",
            "blackberry",
            "blackberries",
            "cranberries",
            "basil",
            "parsley",
            "cilantro",
            "mint",
            "chives",
            "herbs",
            "scallion",
            "leek",
            "shallot",
            "ginger",
            "asparagus",
            "brussels sprouts",
            "cabbage",
            "corn",
            "peas",
            "snap peas",
            "green beans",
            "green bean",
            "artichoke",
            "radish",
            "beet",
            "fennel",
        ),
        exclusions=("tortilla", "tortillas", "chips"),
        fresh_terms=DUAL_FORM_HERBS,
    ),
    CategoryRule(FROZEN, terms=("frozen", "edamame")),
    CategoryRule(
        BAKERY,
        terms=(
            "bread",
            "bagel",
            "roll",
            "rolls",
            "bun",
            "buns",
            "baguette",
            "brioche",
            "ciabatta",
            "sourdough",
            "croissant",
            "muffin",
            "tortilla",
            "tortillas",
            "pita",
            "naan",
        ),
    ),
)


def categorize(item_name: str, fallback: str = OTHER) -> str:
    """
    Assign a grocery aisle to an ingredient name.

    Rules are checked in priority order and the first match wins; names
    matching no rule get the fallback category.
    """
    name = " ".join(item_name.lower().replace("-", " ").split())
    for rule in CATEGORY_RULES:
        if rule.matches(name):
            return rule.category
    return fallback


def categorize_items(items: list[GroceryListItem], fallback: str = OTHER) -> list[GroceryListItem]:
    """Return copies of the items with grocery_category filled in."""
    categorized = [
        replace(item, grocery_category=categorize(item.item_name, fallback)) for item in items
    ]
    logger.debug(f"Categorized {len(categorized)} items")
    return categorized


def sort_categories(categories: list[str]) -> list[str]:
    """Sort category names in store walking order; unknown ones go last, alphabetically."""
    known = {category: index for index, category in enumerate(STORE_CATEGORY_ORDER)}
    return sorted(categories, key=lambda c: (known.get(c, len(known)), c))
