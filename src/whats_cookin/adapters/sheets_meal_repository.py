"""Sheets-backed repository for meals."""

from dataclasses import dataclass

from whats_cookin.adapters.cells import (
    cell,
    data_rows,
    format_bool,
    format_datetime,
    format_list,
    format_number,
    parse_bool,
    parse_datetime,
    parse_int,
    parse_list,
)
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.domain.errors import NotFoundError
from whats_cookin.domain.meals import Chef, Meal, MealType
from whats_cookin.services.meals import MealRepository

_ID = 0
_NAME = 1
_CUISINE_TYPE = 2
_CHEF = 3
_IS_LEFTOVERS = 4
_IS_FAVORITE = 5
_IS_QUICK = 6
_NOTES = 7
_IAN_RATING = 8
_HANNA_RATING = 9
_MEAL_TYPE = 10
_RESTAURANT_NAME = 11
_FRIEND_NAME = 12
_CREATED_AT = 13
_LAST_USED = 14
_USE_COUNT = 15
_EFFORT = 16
_LEFTOVER_NOTES = 17


@dataclass
class SheetsMealRepository(MealRepository):
    """Meals stored in the Meals sheet."""

    store: RowStore

    def list_meals(self) -> list[Meal]:
        """Return every meal."""
        rows = self.store.read_rows(Sheet.MEALS)
        return [_parse_meal(row) for _, row in data_rows(rows) if cell(row, _ID)]

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""
        match = self.store.find_row_by_column(Sheet.MEALS, _ID, meal_id)
        if match is None:
            return None
        return _parse_meal(match.values)

    def create_meal(self, meal: Meal) -> None:
        """Append a new meal row."""
        self.store.append_row(Sheet.MEALS, _meal_to_row(meal))

    def update_meal(self, meal: Meal) -> None:
        """Overwrite an existing meal row."""
        match = self.store.find_row_by_column(Sheet.MEALS, _ID, meal.id)
        if match is None:
            raise NotFoundError("Meal not found")
        self.store.update_row(Sheet.MEALS, match.row_index, _meal_to_row(meal))

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal row; return false when it did not exist."""
        match = self.store.find_row_by_column(Sheet.MEALS, _ID, meal_id)
        if match is None:
            return False
        self.store.delete_row(Sheet.MEALS, match.row_index)
        return True


def _parse_meal(row: list[str]) -> Meal:
    """Parse a Meals row into a domain model."""
    return Meal(
        id=cell(row, _ID),
        name=cell(row, _NAME),
        cuisine_type=parse_list(cell(row, _CUISINE_TYPE)),
        chef=_parse_chef(cell(row, _CHEF)),
        is_leftovers=parse_bool(cell(row, _IS_LEFTOVERS)),
        is_favorite=parse_bool(cell(row, _IS_FAVORITE)),
        is_quick=parse_bool(cell(row, _IS_QUICK)),
        notes=cell(row, _NOTES),
        ian_rating=parse_int(cell(row, _IAN_RATING)),
        hanna_rating=parse_int(cell(row, _HANNA_RATING)),
        meal_type=_parse_meal_type(cell(row, _MEAL_TYPE)),
        restaurant_name=cell(row, _RESTAURANT_NAME),
        friend_name=cell(row, _FRIEND_NAME),
        created_at=parse_datetime(cell(row, _CREATED_AT)),
        last_used=parse_datetime(cell(row, _LAST_USED)),
        use_count=parse_int(cell(row, _USE_COUNT)) or 0,
        effort=parse_int(cell(row, _EFFORT)),
        leftover_notes=cell(row, _LEFTOVER_NOTES),
    )


def _meal_to_row(meal: Meal) -> list[str]:
    return [
        meal.id,
        meal.name,
        format_list(meal.cuisine_type),
        meal.chef.value,
        format_bool(meal.is_leftovers),
        format_bool(meal.is_favorite),
        format_bool(meal.is_quick),
        meal.notes,
        format_number(meal.ian_rating),
        format_number(meal.hanna_rating),
        meal.meal_type.value,
        meal.restaurant_name,
        meal.friend_name,
        format_datetime(meal.created_at),
        format_datetime(meal.last_used),
        format_number(meal.use_count),
        format_number(meal.effort),
        meal.leftover_notes,
    ]


def _parse_chef(raw: str) -> Chef:
    try:
        return Chef(raw)
    except ValueError:
        return Chef.IAN


def _parse_meal_type(raw: str) -> MealType:
    try:
        return MealType(raw)
    except ValueError:
        return MealType.HOMEMADE
