"""API routes for building and managing grocery lists."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from grocerylist.config import Settings, get_settings
from grocerylist.logging_config import LoggingContext, get_logger
from grocerylist.normalize.names import normalize_name
from grocerylist.plan.categorize import categorize
from grocerylist.plan.checked_state import CheckedStateStore, InMemoryCheckedStateStore
from grocerylist.plan.shopping_list import GroceryListBuilder, render_markdown
from grocerylist.schemas import (
    CategorizeRequest,
    CategorizeResponse,
    CheckedStateResponse,
    CheckedStateUpdate,
    GroceryListRequest,
    GroceryListResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery", tags=["grocery"])

_checked_store = InMemoryCheckedStateStore()


# =============================================================================
# Dependencies
# =============================================================================


def get_checked_store() -> CheckedStateStore:
    """Shared checked-state store."""
    return _checked_store


def get_builder(
    store: CheckedStateStore = Depends(get_checked_store),
    settings: Settings = Depends(get_settings),
) -> GroceryListBuilder:
    return GroceryListBuilder(
        checked_store=store,
        separator=settings.original_text_separator,
        fallback_category=settings.fallback_category,
        default_recipe_title=settings.default_recipe_title,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/lists", response_model=GroceryListResponse)
async def build_grocery_list(
    request: GroceryListRequest,
    builder: GroceryListBuilder = Depends(get_builder),
) -> GroceryListResponse:
    """Build an aggregated, categorized shopping list from recipes."""
    with LoggingContext(request_id=str(uuid.uuid4()), user_id=request.user_id):
        grocery_list = builder.build(
            [recipe.to_recipe() for recipe in request.recipes],
            user_id=request.user_id,
        )
        return GroceryListResponse.from_grocery_list(grocery_list)


@router.post("/lists/export", response_class=PlainTextResponse)
async def export_grocery_list(
    request: GroceryListRequest,
    builder: GroceryListBuilder = Depends(get_builder),
    settings: Settings = Depends(get_settings),
) -> PlainTextResponse:
    """Build a shopping list and render it as a markdown checklist."""
    with LoggingContext(request_id=str(uuid.uuid4()), user_id=request.user_id):
        grocery_list = builder.build(
            [recipe.to_recipe() for recipe in request.recipes],
            user_id=request.user_id,
        )
        logger.info(f"Exporting {len(grocery_list.items)} items as markdown")
        markdown = render_markdown(
            grocery_list,
            title=request.title,
            separator=settings.original_text_separator,
        )
        return PlainTextResponse(markdown, media_type="text/markdown")


@router.post("/categorize", response_model=CategorizeResponse)
async def categorize_ingredients(
    request: CategorizeRequest,
    settings: Settings = Depends(get_settings),
) -> CategorizeResponse:
    """Assign a grocery aisle to each ingredient name."""
    names = [name for name in request.ingredients if name.strip()]
    if not names:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ingredients list is required and must not be empty",
        )

    categories = {
        name: categorize(normalize_name(name), settings.fallback_category) for name in names
    }
    logger.info(f"Categorized {len(categories)} ingredients")
    return CategorizeResponse(categories=categories)


@router.put("/checked", response_model=CheckedStateResponse)
async def set_checked_state(
    update: CheckedStateUpdate,
    store: CheckedStateStore = Depends(get_checked_store),
) -> CheckedStateResponse:
    """Save whether an item is checked off, keyed by its normalized name."""
    item_name = normalize_name(update.item_name)
    if not item_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Item name must not be blank",
        )

    with LoggingContext(user_id=update.user_id):
        store.set_checked(update.user_id, item_name, update.is_checked)
        logger.info(f"Marked {item_name!r} as {'checked' if update.is_checked else 'unchecked'}")

    return CheckedStateResponse(
        user_id=update.user_id,
        item_name=item_name,
        is_checked=update.is_checked,
    )
