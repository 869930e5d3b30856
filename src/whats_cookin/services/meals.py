"""Meal catalog service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import uuid4

from whats_cookin.domain.errors import NotFoundError, ValidationError
from whats_cookin.domain.ingredients import Ingredient, IngredientLine
from whats_cookin.domain.meals import (
    IngredientEntry,
    Meal,
    MealDetail,
    MealDraft,
    MealIngredientDetail,
)
from whats_cookin.services.ingredients import (
    IngredientLineRepository,
    IngredientRepository,
)
from whats_cookin.services.search import fuzzy_search

logger = logging.getLogger(__name__)

AUTOCOMPLETE_LIMIT = 20
AUTOCOMPLETE_THRESHOLD = 60.0
HIDDEN_AFTER = timedelta(days=365)
SCALE_MIN = 1
SCALE_MAX = 5

_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "cuisine_type",
        "chef",
        "is_leftovers",
        "is_favorite",
        "is_quick",
        "notes",
        "ian_rating",
        "hanna_rating",
        "meal_type",
        "restaurant_name",
        "friend_name",
        "effort",
        "leftover_notes",
    }
)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def list_meals(self) -> list[Meal]:
        """Return every meal."""

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""

    def create_meal(self, meal: Meal) -> None:
        """Persist a new meal."""

    def update_meal(self, meal: Meal) -> None:
        """Overwrite an existing meal."""

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal; return false when it did not exist."""


@dataclass
class MealService:
    """Application service for meal CRUD and search."""

    repository: MealRepository
    ingredient_repository: IngredientRepository
    line_repository: IngredientLineRepository

    def list_meals(self) -> list[Meal]:
        """Return all meals."""
        return self.repository.list_meals()

    def get_meal(self, meal_id: str) -> MealDetail:
        """Return a meal with its ingredient lines."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        lines = self.line_repository.list_for_meals([meal_id])
        catalog = {item.id: item for item in self.ingredient_repository.list_ingredients()}
        return MealDetail(
            meal=meal,
            ingredients=[
                MealIngredientDetail(line=line, ingredient=catalog.get(line.ingredient_id))
                for line in lines
            ],
        )

    def create_meal(self, draft: MealDraft) -> MealDetail:
        """Create a meal and its ingredient lines."""
        name = draft.name.strip()
        if not name:
            raise ValidationError("Meal name is required")
        _check_scale("ianRating", draft.ian_rating)
        _check_scale("hannaRating", draft.hanna_rating)
        _check_scale("effort", draft.effort)
        _check_entries(draft.ingredients)

        now = datetime.now(tz=UTC)
        meal = Meal(
            id=str(uuid4()),
            name=name,
            cuisine_type=_clean_tags(draft.cuisine_type),
            chef=draft.chef,
            is_leftovers=draft.is_leftovers,
            is_favorite=draft.is_favorite,
            is_quick=draft.is_quick,
            notes=draft.notes,
            ian_rating=draft.ian_rating,
            hanna_rating=draft.hanna_rating,
            meal_type=draft.meal_type,
            restaurant_name=draft.restaurant_name.strip(),
            friend_name=draft.friend_name.strip(),
            created_at=now,
            last_used=None,
            use_count=0,
            effort=draft.effort,
            leftover_notes=draft.leftover_notes,
        )
        self.repository.create_meal(meal)
        details = self._attach_ingredients(meal.id, draft.ingredients, now)
        logger.info("Created meal %s with %d ingredients", meal.id, len(details))
        return MealDetail(meal=meal, ingredients=details)

    def update_meal(
        self,
        meal_id: str,
        changes: dict[str, object],
        ingredients: list[IngredientEntry] | None = None,
    ) -> MealDetail:
        """Apply a partial update; replace ingredient lines when given."""
        existing = self.repository.get_meal(meal_id)
        if existing is None:
            raise NotFoundError("Meal not found")
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown meal fields: {', '.join(sorted(unknown))}")
        if "name" in changes:
            name = str(changes["name"] or "").strip()
            if not name:
                raise ValidationError("Meal name is required")
            changes = {**changes, "name": name}
        if "cuisine_type" in changes:
            tags = changes["cuisine_type"]
            changes = {
                **changes,
                "cuisine_type": _clean_tags(tags if isinstance(tags, list) else []),
            }
        for field_name, label in (
            ("ian_rating", "ianRating"),
            ("hanna_rating", "hannaRating"),
            ("effort", "effort"),
        ):
            value = changes.get(field_name)
            _check_scale(label, value if isinstance(value, int) else None)
        if ingredients is not None:
            _check_entries(ingredients)

        updated = replace(existing, **changes)
        self.repository.update_meal(updated)
        if ingredients is None:
            return self.get_meal(meal_id)
        self.line_repository.delete_for_meal(meal_id)
        details = self._attach_ingredients(meal_id, ingredients, datetime.now(tz=UTC))
        return MealDetail(meal=updated, ingredients=details)

    def delete_meal(self, meal_id: str) -> None:
        """Delete a meal and its ingredient lines."""
        if self.repository.get_meal(meal_id) is None:
            raise NotFoundError("Meal not found")
        self.line_repository.delete_for_meal(meal_id)
        self.repository.delete_meal(meal_id)

    def autocomplete(
        self,
        query: str | None,
        include_hidden: bool = False,
        now: datetime | None = None,
    ) -> list[Meal]:
        """Search meals; without a query return the most recently used ones.

        Meals not used for a year are hidden from the recent list unless
        ``include_hidden`` is set. A search always covers every meal.
        """
        meals = self.repository.list_meals()
        cleaned = (query or "").strip()
        if cleaned:
            return fuzzy_search(
                cleaned,
                meals,
                keys=lambda meal: [
                    meal.name,
                    *meal.cuisine_type,
                    meal.restaurant_name,
                    meal.friend_name,
                ],
                threshold=AUTOCOMPLETE_THRESHOLD,
                limit=AUTOCOMPLETE_LIMIT,
            )
        if not include_hidden:
            cutoff = (now or datetime.now(tz=UTC)) - HIDDEN_AFTER
            meals = [
                meal for meal in meals if meal.last_used is None or meal.last_used > cutoff
            ]
        never = datetime.min.replace(tzinfo=UTC)
        recent = sorted(meals, key=lambda meal: meal.last_used or never, reverse=True)
        return recent[:AUTOCOMPLETE_LIMIT]

    def _attach_ingredients(
        self, meal_id: str, entries: list[IngredientEntry], now: datetime
    ) -> list[MealIngredientDetail]:
        if not entries:
            return []
        catalog = {item.id: item for item in self.ingredient_repository.list_ingredients()}
        details: list[MealIngredientDetail] = []
        reused: set[str] = set()
        for entry in entries:
            label = entry.name.strip()
            if not label:
                continue
            if entry.ingredient_id:
                ingredient = catalog.get(entry.ingredient_id)
                reused.add(entry.ingredient_id)
                ingredient_id = entry.ingredient_id
            else:
                ingredient = Ingredient(
                    id=str(uuid4()),
                    name=label.lower(),
                    display_name=label,
                    store_section=entry.store_section,
                    default_unit=entry.unit.strip(),
                    is_common_item=entry.is_common_item,
                    created_at=now,
                    last_used=now,
                )
                self.ingredient_repository.create_ingredient(ingredient)
                catalog[ingredient.id] = ingredient
                ingredient_id = ingredient.id
            line = IngredientLine(
                id=str(uuid4()),
                meal_id=meal_id,
                ingredient_id=ingredient_id,
                quantity=entry.quantity,
                unit=entry.unit.strip(),
                notes=entry.notes.strip(),
            )
            self.line_repository.create_line(line)
            details.append(MealIngredientDetail(line=line, ingredient=ingredient))
        if reused:
            self.ingredient_repository.touch_last_used(reused, now)
        return details


def _check_scale(label: str, value: int | None) -> None:
    if value is None:
        return
    if not SCALE_MIN <= value <= SCALE_MAX:
        raise ValidationError(f"{label} must be between {SCALE_MIN} and {SCALE_MAX}")


def _check_entries(entries: list[IngredientEntry]) -> None:
    for entry in entries:
        if entry.quantity is not None and entry.quantity < 0:
            raise ValidationError(f"Quantity for {entry.name} must not be negative")


def _clean_tags(tags: list[object]) -> list[str]:
    cleaned: list[str] = []
    for tag in tags:
        value = str(tag).strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned
