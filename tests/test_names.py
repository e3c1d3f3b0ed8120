"""Unit tests for ingredient name normalization."""

import pytest

from grocerylist.normalize.names import (
    ADJECTIVES_TO_REMOVE,
    INGREDIENT_ALIASES,
    PRESERVED_PHRASES,
    normalize_name,
    parse_ingredient_display_name,
)


class TestNormalizeName:
    """Tests for normalize_name function."""

    def test_basic_normalization(self):
        """Test lowercase, trimming and hyphens."""
        assert normalize_name("  Olive Oil ") == "olive oil"
        assert normalize_name("all-purpose flour") == "all purpose flour"

    def test_decorative_adjectives_removed(self):
        """Test preparation and size words are dropped."""
        assert normalize_name("chopped onion") == "onion"
        assert normalize_name("large eggs") == "eggs"
        assert normalize_name("Finely Diced Carrots") == "carrot"

    def test_preserved_phrases_kept(self):
        """Test adjectives that change the product are kept."""
        assert normalize_name("ground beef") == "ground beef"
        assert normalize_name("toasted pecans") == "toasted pecans"
        assert normalize_name("black pepper") == "black pepper"
        assert normalize_name("red onions") == "red onion"

    def test_fresh_and_dried_herbs_stay_apart(self):
        """Test fresh and dried herbs are different products."""
        assert normalize_name("fresh basil") == "fresh basil"
        assert normalize_name("dried oregano") == "dried oregano"
        assert normalize_name("fresh basil") != normalize_name("dried basil")

    def test_notes_and_serving_phrases_removed(self):
        """Test parenthetical notes and serving phrases."""
        assert normalize_name("salt (kosher)") == "salt"
        assert normalize_name("parsley, for garnish") == "parsley"
        assert normalize_name("black pepper, to taste") == "black pepper"

    def test_approximation_prefix_removed(self):
        """Test amounts leaking into the name are removed."""
        assert normalize_name("~2 tomatoes") == "tomato"

    def test_misspellings_corrected(self):
        """Test the spelling correction table."""
        assert normalize_name("Tomatoe") == "tomato"
        assert normalize_name("brocoli") == "broccoli"

    def test_synonyms(self):
        """Test true synonyms map to one name."""
        assert normalize_name("EVOO") == "olive oil"
        assert normalize_name("extra-virgin olive oil") == "olive oil"
        assert normalize_name("green onions") == "scallion"
        assert normalize_name("spring onion") == "scallion"

    def test_canonical_forms(self):
        """Test garlic, egg, flour and herb forms."""
        assert normalize_name("garlic cloves") == "garlic"
        assert normalize_name("cloves of garlic") == "garlic"
        assert normalize_name("egg") == "eggs"
        assert normalize_name("flour") == "all purpose flour"
        assert normalize_name("fresh chopped herbs scallions") == "scallion"

    def test_singularization(self):
        """Test trailing plurals are removed."""
        assert normalize_name("onions") == "onion"
        assert normalize_name("potatoes") == "potato"
        assert normalize_name("cherry tomatoes") == "cherry tomato"

    def test_plural_exceptions(self):
        """Test names that stay plural."""
        assert normalize_name("black beans") == "black beans"
        assert normalize_name("frozen peas") == "frozen peas"
        assert normalize_name("blueberries") == "blueberries"
        assert normalize_name("molasses") == "molasses"

    def test_short_or_sibilant_words_kept(self):
        """Test words that only look plural."""
        assert normalize_name("hummus") == "hummus"
        assert normalize_name("swiss chard") == "swiss chard"

    def test_empty_input(self):
        """Test empty and blank names."""
        assert normalize_name("") == ""
        assert normalize_name("   ") == ""

    def test_never_empty_for_adjective_only_names(self):
        """Test a name made only of adjectives is kept."""
        assert normalize_name("Fresh") == "fresh"

    @pytest.mark.parametrize(
        "name",
        [
            "Tomatoe",
            "2 Large Eggs",
            "green onions",
            "Finely Diced Carrots",
            "toasted pecans",
            "garlic cloves",
            "ground black pepper",
            "chopped fresh basil",
            "all-purpose flour",
            "frozen blueberries",
            "sweet potatoes",
            "Extra Virgin Olive Oil",
        ],
    )
    def test_idempotent(self, name):
        """Test normalizing twice equals normalizing once."""
        once = normalize_name(name)
        assert normalize_name(once) == once

    @pytest.mark.parametrize(
        "name",
        sorted(
            PRESERVED_PHRASES
            | set(INGREDIENT_ALIASES)
            | set(INGREDIENT_ALIASES.values())
            | ADJECTIVES_TO_REMOVE
        ),
    )
    @pytest.mark.parametrize("prefix", ["", "chopped "])
    def test_idempotent_for_every_table_entry(self, prefix, name):
        """Test every rule table entry is stable, alone and after an adjective."""
        once = normalize_name(prefix + name)
        assert normalize_name(once) == once

    def test_plural_preserved_phrase(self):
        """Test a preserved phrase keeps its adjective in either number."""
        assert normalize_name("baby back ribs") == "baby back rib"
        assert normalize_name("baby back rib") == "baby back rib"

    def test_colored_varieties_kept(self):
        """Test color words that name a different product are kept."""
        assert normalize_name("green peppers") == "green pepper"
        assert normalize_name("Red Pepper") == "red pepper"
        assert normalize_name("ground red pepper") == "ground red pepper"
        assert normalize_name("white chocolate") == "white chocolate"
        assert normalize_name("green tea") == "green tea"
        assert normalize_name("pepper") == "pepper"


class TestParseIngredientDisplayName:
    """Tests for parse_ingredient_display_name function."""

    def test_plain_name(self):
        """Test names without annotations."""
        parsed = parse_ingredient_display_name(" chicken thighs ")
        assert parsed.base_name == "chicken thighs"
        assert not parsed.is_removed
        assert parsed.substituted_for is None

    def test_removed(self):
        """Test removed ingredients."""
        parsed = parse_ingredient_display_name("bacon (removed)")
        assert parsed.base_name == "bacon"
        assert parsed.is_removed

    def test_substituted(self):
        """Test substituted ingredients."""
        parsed = parse_ingredient_display_name("tofu (substituted for chicken)")
        assert parsed.base_name == "tofu"
        assert parsed.substituted_for == "chicken"
        assert not parsed.is_removed
