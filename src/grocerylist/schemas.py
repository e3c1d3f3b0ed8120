"""Request and response schemas for the grocery API."""

from pydantic import BaseModel, ConfigDict, Field

from grocerylist.plan.items import GroceryListItem
from grocerylist.plan.shopping_list import GroceryList, Ingredient, IngredientGroup, Recipe


class IngredientSchema(BaseModel):
    """One ingredient line of a recipe."""

    name: str
    amount: str | float | None = None
    unit: str | None = None


class IngredientGroupSchema(BaseModel):
    """A named section of a recipe's ingredients."""

    name: str = "Main"
    ingredients: list[IngredientSchema] = Field(default_factory=list)


class RecipeSchema(BaseModel):
    """Recipe contributing to the shopping list."""

    title: str = ""
    id: int | str | None = None
    user_saved_recipe_id: str | None = None
    ingredient_groups: list[IngredientGroupSchema] = Field(default_factory=list)

    def to_recipe(self) -> Recipe:
        return Recipe(
            title=self.title,
            id=self.id,
            user_saved_recipe_id=self.user_saved_recipe_id,
            ingredient_groups=[
                IngredientGroup(
                    name=group.name,
                    ingredients=[
                        Ingredient(name=i.name, amount=i.amount, unit=i.unit)
                        for i in group.ingredients
                    ],
                )
                for group in self.ingredient_groups
            ],
        )


class GroceryListRequest(BaseModel):
    """Request to build a shopping list from recipes."""

    user_id: str = Field(default="default-user")
    recipes: list[RecipeSchema] = Field(default_factory=list)
    title: str | None = Field(None, description="Heading for exported lists")


class GroceryListItemSchema(BaseModel):
    """Single aggregated item in the shopping list."""

    model_config = ConfigDict(from_attributes=True)

    item_name: str
    original_text: str
    quantity_amount: float | None = None
    quantity_unit: str | None = None
    display_unit: str | None = None
    grocery_category: str | None = None
    is_checked: bool = False
    order_index: int = 0
    recipe_id: int | str | None = None
    user_saved_recipe_id: str | None = None
    source_recipe_title: str = ""
    combined_measures: list[str] = Field(default_factory=list)


class GroceryListResponse(BaseModel):
    """Aggregated shopping list."""

    items: list[GroceryListItemSchema]
    source_recipe_titles: list[str]
    items_by_category: dict[str, list[GroceryListItemSchema]]
    total_items: int
    checked_items: int

    @classmethod
    def from_grocery_list(cls, grocery_list: GroceryList) -> "GroceryListResponse":
        def to_schema(item: GroceryListItem) -> GroceryListItemSchema:
            return GroceryListItemSchema.model_validate(item)

        return cls(
            items=[to_schema(item) for item in grocery_list.items],
            source_recipe_titles=grocery_list.source_recipe_titles,
            items_by_category={
                category: [to_schema(item) for item in items]
                for category, items in grocery_list.items_by_category.items()
            },
            total_items=len(grocery_list.items),
            checked_items=grocery_list.checked_count,
        )


class CategorizeRequest(BaseModel):
    """Ingredient names to assign to grocery aisles."""

    ingredients: list[str] = Field(default_factory=list)


class CategorizeResponse(BaseModel):
    """Aisle per ingredient name, keyed by the name as sent."""

    categories: dict[str, str]


class CheckedStateUpdate(BaseModel):
    """Set the checked state of one shopping list entry."""

    user_id: str = Field(default="default-user")
    item_name: str = Field(min_length=1)
    is_checked: bool


class CheckedStateResponse(BaseModel):
    """Saved checked state, keyed by normalized name."""

    user_id: str
    item_name: str
    is_checked: bool
