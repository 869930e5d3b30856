"""Ingredient catalog endpoints."""

from fastapi import APIRouter, Depends

from whats_cookin.api.deps import get_container, require_user
from whats_cookin.api.schemas import IngredientOut, IngredientsEnvelope
from whats_cookin.containers import AppContainer

router = APIRouter(
    prefix="/ingredients", tags=["ingredients"], dependencies=[Depends(require_user)]
)


@router.get("")
def search_ingredients(
    q: str | None = None, container: AppContainer = Depends(get_container)
) -> IngredientsEnvelope:
    """Search the catalog, or list recently used ingredients."""
    ingredients = container.ingredient_service.search(q)
    return IngredientsEnvelope(
        ingredients=[IngredientOut.from_domain(item) for item in ingredients]
    )
