"""Tests for shopping list generation and item state."""

from datetime import UTC, datetime, timedelta

import pytest

from whats_cookin.adapters.sheets_client import Sheet
from whats_cookin.domain.errors import NotFoundError, ValidationError
from whats_cookin.domain.ingredients import StoreSection
from whats_cookin.domain.meals import IngredientEntry, MealDraft
from whats_cookin.services.meals import MealService
from whats_cookin.services.shopping_lists import (
    LIST_LIFETIME,
    ShoppingListService,
    validate_meal_ids,
)
from tests.conftest import InMemoryRowStore


def _seed_baking_meals(meal_service: MealService) -> tuple[str, str]:
    pancakes = meal_service.create_meal(
        MealDraft(
            name="Pancakes",
            ingredients=[
                IngredientEntry(name="Flour", quantity=2, unit="cup"),
                IngredientEntry(name="Salt", quantity=1, unit="tsp", is_common_item=True),
            ],
        )
    )
    flour_id = pancakes.ingredients[0].line.ingredient_id
    omelette = meal_service.create_meal(
        MealDraft(
            name="Omelette",
            ingredients=[
                IngredientEntry(name="Flour", quantity=1, unit="cup", ingredient_id=flour_id),
                IngredientEntry(
                    name="Eggs", quantity=2, store_section=StoreSection.DAIRY
                ),
            ],
        )
    )
    return pancakes.meal.id, omelette.meal.id


def test_generate_consolidates_and_excludes_common_items(
    meal_service: MealService,
    shopping_list_service: ShoppingListService,
    row_store: InMemoryRowStore,
) -> None:
    meal_a, meal_b = _seed_baking_meals(meal_service)
    now = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

    shopping_list = shopping_list_service.generate(
        [meal_a, meal_b],
        created_by="ian@example.com",
        exclude_common_items=True,
        now=now,
    )

    assert [(item.ingredient_name, item.combined_quantity) for item in shopping_list.items] == [
        ("Eggs", "2"),
        ("Flour", "3 cup"),
    ]
    assert [item.display_order for item in shopping_list.items] == [0, 1]
    assert shopping_list.expires_at == now + LIST_LIFETIME
    assert shopping_list.meal_ids == [meal_a, meal_b]
    assert len(row_store.data(Sheet.SHOPPING_LISTS)) == 1
    assert len(row_store.data(Sheet.SHOPPING_LIST_ITEMS)) == 2


def test_generate_keeps_common_items_by_default(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal_a, _ = _seed_baking_meals(meal_service)

    shopping_list = shopping_list_service.generate([meal_a], created_by="ian@example.com")

    names = [item.ingredient_name for item in shopping_list.items]
    assert names == ["Flour", "Salt"]


def test_generate_rejects_too_many_meals_before_store_access(
    shopping_list_service: ShoppingListService, row_store: InMemoryRowStore
) -> None:
    with pytest.raises(ValidationError):
        shopping_list_service.generate(["a", "b", "c", "d", "e"], created_by="ian@example.com")

    assert row_store.reads == 0
    assert row_store.writes == 0


def test_validate_meal_ids_collapses_duplicates() -> None:
    assert validate_meal_ids([" a ", "b", "a"]) == ["a", "b"]


@pytest.mark.parametrize("meal_ids", [[], [""], ["a", "  "]])
def test_validate_meal_ids_rejects_blank_or_empty(meal_ids: list[str]) -> None:
    with pytest.raises(ValidationError):
        validate_meal_ids(meal_ids)


def test_generate_unknown_meal_is_not_found(
    shopping_list_service: ShoppingListService,
) -> None:
    with pytest.raises(NotFoundError):
        shopping_list_service.generate(["missing"], created_by="ian@example.com")


def test_generate_without_ingredients_fails_validation(
    meal_service: MealService,
    shopping_list_service: ShoppingListService,
    row_store: InMemoryRowStore,
) -> None:
    meal = meal_service.create_meal(MealDraft(name="Takeout night"))

    with pytest.raises(ValidationError, match="no ingredients"):
        shopping_list_service.generate([meal.meal.id], created_by="ian@example.com")

    assert row_store.data(Sheet.SHOPPING_LISTS) == []


def test_generate_only_common_items_excluded_fails_validation(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal = meal_service.create_meal(
        MealDraft(
            name="Seasoning",
            ingredients=[IngredientEntry(name="Salt", quantity=1, is_common_item=True)],
        )
    )

    with pytest.raises(ValidationError, match="no ingredients"):
        shopping_list_service.generate(
            [meal.meal.id], created_by="ian@example.com", exclude_common_items=True
        )


def test_generate_uses_fallback_for_missing_catalog_entry(
    meal_service: MealService,
    shopping_list_service: ShoppingListService,
    row_store: InMemoryRowStore,
) -> None:
    meal = meal_service.create_meal(
        MealDraft(
            name="Mystery stew",
            ingredients=[IngredientEntry(name="Stock", quantity=1, unit="qt")],
        )
    )
    row_store.sheets[Sheet.INGREDIENTS] = row_store.sheets[Sheet.INGREDIENTS][:1]
    ingredient_id = meal.ingredients[0].line.ingredient_id

    shopping_list = shopping_list_service.generate([meal.meal.id], created_by="ian@example.com")

    item = shopping_list.items[0]
    assert item.ingredient_name == ingredient_id
    assert item.store_section == StoreSection.PANTRY
    assert item.combined_quantity == "1 qt"


def test_toggle_twice_restores_original_state(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal_a, meal_b = _seed_baking_meals(meal_service)
    shopping_list = shopping_list_service.generate(
        [meal_a, meal_b], created_by="ian@example.com"
    )
    item = shopping_list.items[0]

    checked = shopping_list_service.set_item_checked(shopping_list.id, item.id, True)
    unchecked = shopping_list_service.set_item_checked(shopping_list.id, item.id, False)

    assert checked.is_checked is True
    assert unchecked.is_checked is False
    stored = shopping_list_service.get(shopping_list.id)
    assert stored.items[0].is_checked is False


def test_toggle_is_idempotent(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal_a, _ = _seed_baking_meals(meal_service)
    shopping_list = shopping_list_service.generate([meal_a], created_by="ian@example.com")
    item = shopping_list.items[1]

    shopping_list_service.set_item_checked(shopping_list.id, item.id, True)
    shopping_list_service.set_item_checked(shopping_list.id, item.id, True)

    stored = shopping_list_service.get(shopping_list.id)
    assert [entry.is_checked for entry in stored.items] == [False, True]


def test_toggle_rejects_non_boolean(shopping_list_service: ShoppingListService) -> None:
    with pytest.raises(ValidationError):
        shopping_list_service.set_item_checked("list", "item", "yes")  # type: ignore[arg-type]


def test_toggle_unknown_item_is_not_found(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal_a, _ = _seed_baking_meals(meal_service)
    shopping_list = shopping_list_service.generate([meal_a], created_by="ian@example.com")

    with pytest.raises(NotFoundError):
        shopping_list_service.set_item_checked(shopping_list.id, "missing", True)
    with pytest.raises(NotFoundError):
        shopping_list_service.set_item_checked("other-list", shopping_list.items[0].id, True)


def test_list_active_skips_expired_and_sorts_newest_first(
    meal_service: MealService, shopping_list_service: ShoppingListService
) -> None:
    meal_a, meal_b = _seed_baking_meals(meal_service)
    now = datetime(2026, 3, 1, tzinfo=UTC)
    stale = shopping_list_service.generate(
        [meal_a], created_by="ian@example.com", now=now - timedelta(weeks=5)
    )
    older = shopping_list_service.generate(
        [meal_a], created_by="ian@example.com", now=now - timedelta(days=2)
    )
    newer = shopping_list_service.generate(
        [meal_b], created_by="hanna@example.com", now=now - timedelta(days=1)
    )

    active = shopping_list_service.list_active(now=now)

    assert [item.id for item in active] == [newer.id, older.id]
    assert stale.id not in {item.id for item in active}
    assert [item.display_order for item in active[0].items] == [0, 1]


def test_get_falls_back_to_catalog_name_when_snapshot_missing(
    meal_service: MealService,
    shopping_list_service: ShoppingListService,
    row_store: InMemoryRowStore,
) -> None:
    meal_a, _ = _seed_baking_meals(meal_service)
    shopping_list = shopping_list_service.generate([meal_a], created_by="ian@example.com")
    for row in row_store.sheets[Sheet.SHOPPING_LIST_ITEMS][1:]:
        del row[7:]

    stored = shopping_list_service.get(shopping_list.id)

    assert [item.ingredient_name for item in stored.items] == ["Flour", "Salt"]


def test_delete_removes_list_and_items(
    meal_service: MealService,
    shopping_list_service: ShoppingListService,
    row_store: InMemoryRowStore,
) -> None:
    meal_a, meal_b = _seed_baking_meals(meal_service)
    keep = shopping_list_service.generate([meal_b], created_by="ian@example.com")
    doomed = shopping_list_service.generate([meal_a, meal_b], created_by="ian@example.com")

    shopping_list_service.delete(doomed.id)

    assert [row[0] for row in row_store.data(Sheet.SHOPPING_LISTS)] == [keep.id]
    assert {row[1] for row in row_store.data(Sheet.SHOPPING_LIST_ITEMS)} == {keep.id}
    with pytest.raises(NotFoundError):
        shopping_list_service.get(doomed.id)
    with pytest.raises(NotFoundError):
        shopping_list_service.delete(doomed.id)
