"""Sheets-backed repositories for ingredients and meal ingredient lines."""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime

from whats_cookin.adapters.cells import (
    cell,
    data_rows,
    format_bool,
    format_datetime,
    format_number,
    parse_bool,
    parse_datetime,
    parse_float,
)
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.domain.ingredients import Ingredient, IngredientLine, StoreSection
from whats_cookin.services.ingredients import (
    IngredientLineRepository,
    IngredientRepository,
)

_ID = 0
_NAME = 1
_DISPLAY_NAME = 2
_STORE_SECTION = 3
_DEFAULT_UNIT = 4
_CREATED_AT = 5
_LAST_USED = 6
_IS_COMMON_ITEM = 7

_LINE_ID = 0
_LINE_MEAL_ID = 1
_LINE_INGREDIENT_ID = 2
_LINE_QUANTITY = 3
_LINE_UNIT = 4
_LINE_NOTES = 5


@dataclass
class SheetsIngredientRepository(IngredientRepository):
    """Ingredient catalog stored in the Ingredients sheet."""

    store: RowStore

    def list_ingredients(self) -> list[Ingredient]:
        """Return the whole catalog."""
        rows = self.store.read_rows(Sheet.INGREDIENTS)
        return [_parse_ingredient(row) for _, row in data_rows(rows) if cell(row, _ID)]

    def create_ingredient(self, ingredient: Ingredient) -> None:
        """Append a new catalog entry."""
        self.store.append_row(Sheet.INGREDIENTS, _ingredient_to_row(ingredient))

    def touch_last_used(self, ingredient_ids: Collection[str], used_at: datetime) -> None:
        """Stamp the last-used time on each referenced ingredient."""
        wanted = set(ingredient_ids)
        if not wanted:
            return
        rows = self.store.read_rows(Sheet.INGREDIENTS)
        for row_index, row in data_rows(rows):
            if cell(row, _ID) not in wanted:
                continue
            current = _parse_ingredient(row)
            updated = Ingredient(
                id=current.id,
                name=current.name,
                display_name=current.display_name,
                store_section=current.store_section,
                default_unit=current.default_unit,
                is_common_item=current.is_common_item,
                created_at=current.created_at,
                last_used=used_at,
            )
            self.store.update_row(
                Sheet.INGREDIENTS, row_index, _ingredient_to_row(updated)
            )


@dataclass
class SheetsIngredientLineRepository(IngredientLineRepository):
    """Meal ingredient lines stored in the MealIngredients sheet."""

    store: RowStore

    def list_for_meals(self, meal_ids: Collection[str]) -> list[IngredientLine]:
        """Return every line belonging to any of the meals, in sheet order."""
        wanted = set(meal_ids)
        rows = self.store.read_rows(Sheet.MEAL_INGREDIENTS)
        return [
            _parse_line(row)
            for _, row in data_rows(rows)
            if cell(row, _LINE_MEAL_ID) in wanted
        ]

    def create_line(self, line: IngredientLine) -> None:
        """Append a new ingredient line."""
        self.store.append_row(Sheet.MEAL_INGREDIENTS, _line_to_row(line))

    def delete_for_meal(self, meal_id: str) -> int:
        """Delete all lines of a meal and return how many were removed."""
        rows = self.store.read_rows(Sheet.MEAL_INGREDIENTS)
        doomed = [
            row_index
            for row_index, row in data_rows(rows)
            if cell(row, _LINE_MEAL_ID) == meal_id
        ]
        # Bottom-up so earlier row numbers stay valid.
        for row_index in reversed(doomed):
            self.store.delete_row(Sheet.MEAL_INGREDIENTS, row_index)
        return len(doomed)


def _parse_ingredient(row: list[str]) -> Ingredient:
    """Parse an Ingredients row into a domain model."""
    name = cell(row, _NAME)
    return Ingredient(
        id=cell(row, _ID),
        name=name,
        display_name=cell(row, _DISPLAY_NAME) or name,
        store_section=StoreSection.parse(cell(row, _STORE_SECTION)),
        default_unit=cell(row, _DEFAULT_UNIT),
        is_common_item=parse_bool(cell(row, _IS_COMMON_ITEM)),
        created_at=parse_datetime(cell(row, _CREATED_AT)),
        last_used=parse_datetime(cell(row, _LAST_USED)),
    )


def _ingredient_to_row(ingredient: Ingredient) -> list[str]:
    return [
        ingredient.id,
        ingredient.name,
        ingredient.display_name,
        ingredient.store_section.value,
        ingredient.default_unit,
        format_datetime(ingredient.created_at),
        format_datetime(ingredient.last_used),
        format_bool(ingredient.is_common_item),
    ]


def _parse_line(row: list[str]) -> IngredientLine:
    return IngredientLine(
        id=cell(row, _LINE_ID),
        meal_id=cell(row, _LINE_MEAL_ID),
        ingredient_id=cell(row, _LINE_INGREDIENT_ID),
        quantity=parse_float(cell(row, _LINE_QUANTITY)),
        unit=cell(row, _LINE_UNIT),
        notes=cell(row, _LINE_NOTES),
    )


def _line_to_row(line: IngredientLine) -> list[str]:
    return [
        line.id,
        line.meal_id,
        line.ingredient_id,
        format_number(line.quantity),
        line.unit,
        line.notes,
    ]
