"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from grocerylist.main import app
from grocerylist.plan.checked_state import InMemoryCheckedStateStore
from grocerylist.plan.items import GroceryListItem
from grocerylist.plan.shopping_list import Ingredient, IngredientGroup, Recipe
from grocerylist.routers.grocery import get_checked_store

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Item Fixtures
# =============================================================================


def make_item(name: str, amount=None, unit=None, **kwargs) -> GroceryListItem:
    """Build an unaggregated item the way the list builder would."""
    text = " ".join(str(part) for part in (amount, unit, name) if part)
    return GroceryListItem(
        item_name=name,
        original_text=text,
        quantity_amount=amount,
        quantity_unit=unit,
        **kwargs,
    )


@pytest.fixture
def item_factory():
    """Factory for grocery items."""
    return make_item


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def pasta_recipe():
    """Recipe with garlic, olive oil and herbs."""
    return Recipe(
        id=1,
        title="Garlic Pasta",
        ingredient_groups=[
            IngredientGroup(
                name="Main",
                ingredients=[
                    Ingredient(name="spaghetti", amount="1", unit="lb"),
                    Ingredient(name="garlic cloves", amount="2", unit="cloves"),
                    Ingredient(name="olive oil", amount="2", unit="tbsp"),
                    Ingredient(name="fresh basil", amount=None, unit=None),
                ],
            ),
            IngredientGroup(
                name="Topping",
                ingredients=[
                    Ingredient(name="parmesan cheese", amount="1/2", unit="cup"),
                    Ingredient(name="bacon (removed)", amount="4", unit="slices"),
                ],
            ),
        ],
    )


@pytest.fixture
def stir_fry_recipe():
    """Recipe overlapping the pasta recipe on garlic and olive oil."""
    return Recipe(
        id="r-2",
        title="Veggie Stir Fry",
        user_saved_recipe_id="saved-9",
        ingredient_groups=[
            IngredientGroup(
                name="Main",
                ingredients=[
                    Ingredient(name="garlic", amount="1", unit=None),
                    Ingredient(name="olive oil", amount="1/4", unit="cup"),
                    Ingredient(name="tofu (substituted for chicken)", amount="14", unit="oz"),
                    Ingredient(name="onion powder", amount="1", unit="tsp"),
                    Ingredient(name="   ", amount="1", unit="cup"),
                ],
            ),
        ],
    )


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def checked_store():
    """Fresh in-memory checked-state store."""
    return InMemoryCheckedStateStore()


@pytest.fixture
def client(checked_store):
    """Test client with an isolated checked-state store."""
    app.dependency_overrides[get_checked_store] = lambda: checked_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
