"""Shopping list generation and item state."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import uuid4

from whats_cookin.domain.errors import NotFoundError, ValidationError
from whats_cookin.domain.shopping import ShoppingList, ShoppingListItem
from whats_cookin.services.consolidator import consolidate, resolve_amounts
from whats_cookin.services.ingredients import (
    IngredientLineRepository,
    IngredientRepository,
)
from whats_cookin.services.meals import MealRepository

logger = logging.getLogger(__name__)

MAX_MEALS_PER_LIST = 4
LIST_LIFETIME = timedelta(weeks=4)
UNKNOWN_INGREDIENT = "Unknown"
NO_INGREDIENTS_MESSAGE = (
    "Selected meals have no ingredients. Add ingredients to your meals first."
)


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists and their items."""

    def create_list(self, shopping_list: ShoppingList) -> None:
        """Persist a list header."""

    def create_items(self, items: list[ShoppingListItem]) -> None:
        """Persist list items."""

    def list_lists(self) -> list[ShoppingList]:
        """Return all list headers without items."""

    def get_list(self, list_id: str) -> ShoppingList | None:
        """Return a list header, if present."""

    def list_items(self, list_id: str | None = None) -> list[ShoppingListItem]:
        """Return items of one list, or of all lists."""

    def get_item(self, list_id: str, item_id: str) -> ShoppingListItem | None:
        """Return an item of a list, if present."""

    def update_item(self, item: ShoppingListItem) -> None:
        """Overwrite an item."""

    def delete_list(self, list_id: str) -> bool:
        """Delete a list with its items; false when absent."""


def validate_meal_ids(meal_ids: Iterable[str]) -> list[str]:
    """Return trimmed, de-duplicated meal ids or raise ``ValidationError``."""
    cleaned: list[str] = []
    for meal_id in meal_ids:
        value = meal_id.strip() if isinstance(meal_id, str) else ""
        if not value:
            raise ValidationError("Meal ids must be non-empty strings")
        if value not in cleaned:
            cleaned.append(value)
    if not cleaned:
        raise ValidationError("Select at least one meal")
    if len(cleaned) > MAX_MEALS_PER_LIST:
        raise ValidationError(f"Select at most {MAX_MEALS_PER_LIST} meals")
    return cleaned


@dataclass
class ShoppingListService:
    """Builds consolidated shopping lists from selected meals."""

    repository: ShoppingListRepository
    meal_repository: MealRepository
    ingredient_repository: IngredientRepository
    line_repository: IngredientLineRepository

    def generate(
        self,
        meal_ids: Iterable[str],
        created_by: str,
        exclude_common_items: bool = False,
        name: str = "",
        now: datetime | None = None,
    ) -> ShoppingList:
        """Consolidate the meals' ingredients into a new persisted list.

        Every item is built in memory before the first write, so a failure
        while reading leaves no partial list behind.
        """
        selected = validate_meal_ids(meal_ids)
        known = {meal.id for meal in self.meal_repository.list_meals()}
        missing = [meal_id for meal_id in selected if meal_id not in known]
        if missing:
            raise NotFoundError(f"Meal not found: {', '.join(missing)}")

        lines = self.line_repository.list_for_meals(selected)
        catalog = {item.id: item for item in self.ingredient_repository.list_ingredients()}
        amounts = resolve_amounts(lines, catalog)
        if not amounts:
            raise ValidationError(NO_INGREDIENTS_MESSAGE)
        consolidated = consolidate(amounts, exclude_common_items=exclude_common_items)
        if not consolidated:
            raise ValidationError(NO_INGREDIENTS_MESSAGE)

        created_at = now or datetime.now(tz=UTC)
        list_id = str(uuid4())
        items = [
            ShoppingListItem(
                id=str(uuid4()),
                list_id=list_id,
                ingredient_id=entry.ingredient_id,
                combined_quantity=entry.combined_quantity,
                store_section=entry.store_section,
                is_checked=False,
                display_order=order,
                ingredient_name=entry.display_name,
            )
            for order, entry in enumerate(consolidated)
        ]
        shopping_list = ShoppingList(
            id=list_id,
            name=name.strip(),
            meal_ids=selected,
            created_at=created_at,
            expires_at=created_at + LIST_LIFETIME,
            created_by=created_by,
            items=items,
        )
        self.repository.create_list(shopping_list)
        self.repository.create_items(items)
        logger.info(
            "Generated shopping list %s with %d items from %d meals",
            list_id,
            len(items),
            len(selected),
        )
        return shopping_list

    def list_active(self, now: datetime | None = None) -> list[ShoppingList]:
        """Return unexpired lists, newest first, with their items."""
        current = now or datetime.now(tz=UTC)
        active: list[ShoppingList] = []
        for header in self.repository.list_lists():
            if header.is_expired(current):
                logger.info("Skipping expired shopping list %s", header.id)
                continue
            active.append(header)
        if not active:
            return []

        grouped: dict[str, list[ShoppingListItem]] = {}
        for item in self.repository.list_items():
            grouped.setdefault(item.list_id, []).append(item)
        names = self._catalog_names()
        active.sort(key=lambda header: header.created_at, reverse=True)
        return [
            replace(header, items=_ordered(grouped.get(header.id, []), names))
            for header in active
        ]

    def get(self, list_id: str) -> ShoppingList:
        """Return one list with its items."""
        header = self.repository.get_list(list_id)
        if header is None:
            raise NotFoundError("Shopping list not found")
        items = self.repository.list_items(list_id)
        return replace(header, items=_ordered(items, self._catalog_names()))

    def set_item_checked(
        self, list_id: str, item_id: str, is_checked: bool
    ) -> ShoppingListItem:
        """Set an item's checked flag; repeating the call changes nothing."""
        if not isinstance(is_checked, bool):
            raise ValidationError("isChecked must be a boolean")
        item = self.repository.get_item(list_id, item_id)
        if item is None:
            raise NotFoundError("Item not found")
        updated = replace(item, is_checked=is_checked)
        self.repository.update_item(updated)
        return updated

    def delete(self, list_id: str) -> None:
        """Delete a list and its items."""
        if not self.repository.delete_list(list_id):
            raise NotFoundError("Shopping list not found")
        logger.info("Deleted shopping list %s", list_id)

    def _catalog_names(self) -> dict[str, str]:
        return {
            item.id: item.display_name
            for item in self.ingredient_repository.list_ingredients()
        }


def _ordered(
    items: list[ShoppingListItem], names: dict[str, str]
) -> list[ShoppingListItem]:
    named = [
        item
        if item.ingredient_name
        else replace(
            item,
            ingredient_name=names.get(item.ingredient_id) or UNKNOWN_INGREDIENT,
        )
        for item in items
    ]
    return sorted(named, key=lambda item: item.display_order)
