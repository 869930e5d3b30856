"""Services for the ingredient catalog."""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from whats_cookin.domain.ingredients import Ingredient, IngredientLine
from whats_cookin.services.search import fuzzy_search

RECENT_LIMIT = 20
SEARCH_LIMIT = 15
SEARCH_THRESHOLD = 70.0


class IngredientRepository(Protocol):
    """Persistence interface for the ingredient catalog."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return the whole catalog."""

    def create_ingredient(self, ingredient: Ingredient) -> None:
        """Persist a new catalog entry."""

    def touch_last_used(self, ingredient_ids: Collection[str], used_at: datetime) -> None:
        """Stamp the last-used time on each referenced ingredient."""


class IngredientLineRepository(Protocol):
    """Persistence interface for meals' ingredient lines."""

    def list_for_meals(self, meal_ids: Collection[str]) -> list[IngredientLine]:
        """Return every line belonging to any of the meals."""

    def create_line(self, line: IngredientLine) -> None:
        """Persist a new ingredient line."""

    def delete_for_meal(self, meal_id: str) -> int:
        """Delete all lines of a meal and return how many were removed."""


@dataclass
class IngredientService:
    """Application service for ingredient lookups."""

    repository: IngredientRepository

    def search(self, query: str | None) -> list[Ingredient]:
        """Fuzzy search the catalog, falling back to recently used ingredients."""
        ingredients = self.repository.list_ingredients()
        cleaned = (query or "").strip()
        if not cleaned:
            return _most_recent(ingredients)[:RECENT_LIMIT]
        return fuzzy_search(
            cleaned,
            ingredients,
            keys=lambda item: [item.name, item.display_name],
            threshold=SEARCH_THRESHOLD,
            limit=SEARCH_LIMIT,
        )


def _most_recent(ingredients: list[Ingredient]) -> list[Ingredient]:
    never = datetime.min.replace(tzinfo=UTC)
    # Stable sort keeps sheet order among never-used ingredients.
    return sorted(
        ingredients,
        key=lambda item: item.last_used or never,
        reverse=True,
    )
