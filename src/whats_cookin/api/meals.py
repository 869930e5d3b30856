"""Meal catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from whats_cookin.api.deps import get_container, require_user
from whats_cookin.api.schemas import (
    MealCreateRequest,
    MealDetailOut,
    MealEnvelope,
    MealOut,
    MealsEnvelope,
    MealUpdateRequest,
    SuccessResponse,
)
from whats_cookin.containers import AppContainer

router = APIRouter(prefix="/meals", tags=["meals"], dependencies=[Depends(require_user)])


@router.get("")
def list_meals(container: AppContainer = Depends(get_container)) -> MealsEnvelope:
    """Return every logged meal."""
    meals = container.meal_service.list_meals()
    return MealsEnvelope(meals=[MealOut.from_domain(meal) for meal in meals])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_meal(
    body: MealCreateRequest, container: AppContainer = Depends(get_container)
) -> MealEnvelope:
    """Log a new meal with its ingredients."""
    detail = container.meal_service.create_meal(body.to_draft())
    return MealEnvelope(meal=MealDetailOut.from_detail(detail))


@router.get("/autocomplete")
def autocomplete(
    q: str | None = None,
    include_hidden: bool = Query(default=False, alias="includeHidden"),
    container: AppContainer = Depends(get_container),
) -> MealsEnvelope:
    """Search meals by name, cuisine, restaurant or friend."""
    meals = container.meal_service.autocomplete(q, include_hidden=include_hidden)
    return MealsEnvelope(meals=[MealOut.from_domain(meal) for meal in meals])


@router.get("/{meal_id}")
def get_meal(meal_id: str, container: AppContainer = Depends(get_container)) -> MealEnvelope:
    detail = container.meal_service.get_meal(meal_id)
    return MealEnvelope(meal=MealDetailOut.from_detail(detail))


@router.put("/{meal_id}")
def update_meal(
    meal_id: str,
    body: MealUpdateRequest,
    container: AppContainer = Depends(get_container),
) -> MealEnvelope:
    """Apply a partial update to a meal."""
    detail = container.meal_service.update_meal(
        meal_id, body.changes(), body.ingredient_entries()
    )
    return MealEnvelope(meal=MealDetailOut.from_detail(detail))


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: str, container: AppContainer = Depends(get_container)
) -> SuccessResponse:
    container.meal_service.delete_meal(meal_id)
    return SuccessResponse()
