"""Sheets-backed repository for shopping lists and their items."""

from dataclasses import dataclass
from datetime import UTC, datetime

from whats_cookin.adapters.cells import (
    cell,
    data_rows,
    format_bool,
    format_datetime,
    format_id_list,
    format_number,
    parse_bool,
    parse_datetime,
    parse_id_list,
    parse_int,
)
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.domain.errors import NotFoundError
from whats_cookin.domain.ingredients import StoreSection
from whats_cookin.domain.shopping import ShoppingList, ShoppingListItem
from whats_cookin.services.shopping_lists import ShoppingListRepository

_LIST_ID = 0
_LIST_NAME = 1
_LIST_MEAL_IDS = 2
_LIST_CREATED_AT = 3
_LIST_EXPIRES_AT = 4
_LIST_CREATED_BY = 5

_ITEM_ID = 0
_ITEM_LIST_ID = 1
_ITEM_INGREDIENT_ID = 2
_ITEM_COMBINED_QUANTITY = 3
_ITEM_STORE_SECTION = 4
_ITEM_IS_CHECKED = 5
_ITEM_DISPLAY_ORDER = 6
_ITEM_INGREDIENT_NAME = 7


@dataclass
class SheetsShoppingListRepository(ShoppingListRepository):
    """Shopping lists in the ShoppingLists and ShoppingListItems sheets."""

    store: RowStore

    def create_list(self, shopping_list: ShoppingList) -> None:
        """Append the list header row."""
        self.store.append_row(Sheet.SHOPPING_LISTS, _list_to_row(shopping_list))

    def create_items(self, items: list[ShoppingListItem]) -> None:
        """Append one row per item, in display order."""
        for item in items:
            self.store.append_row(Sheet.SHOPPING_LIST_ITEMS, _item_to_row(item))

    def list_lists(self) -> list[ShoppingList]:
        """Return all list headers without items."""
        rows = self.store.read_rows(Sheet.SHOPPING_LISTS)
        return [
            _parse_list(row) for _, row in data_rows(rows) if cell(row, _LIST_ID)
        ]

    def get_list(self, list_id: str) -> ShoppingList | None:
        """Return a list header by id, if present."""
        match = self.store.find_row_by_column(Sheet.SHOPPING_LISTS, _LIST_ID, list_id)
        if match is None:
            return None
        return _parse_list(match.values)

    def list_items(self, list_id: str | None = None) -> list[ShoppingListItem]:
        """Return items for one list, or for every list when no id is given."""
        rows = self.store.read_rows(Sheet.SHOPPING_LIST_ITEMS)
        return [
            _parse_item(row)
            for _, row in data_rows(rows)
            if cell(row, _ITEM_ID)
            and (list_id is None or cell(row, _ITEM_LIST_ID) == list_id)
        ]

    def get_item(self, list_id: str, item_id: str) -> ShoppingListItem | None:
        """Return an item of a specific list, if present."""
        located = self._locate_item(list_id, item_id)
        if located is None:
            return None
        return _parse_item(located[1])

    def update_item(self, item: ShoppingListItem) -> None:
        """Overwrite an item row in place."""
        located = self._locate_item(item.list_id, item.id)
        if located is None:
            raise NotFoundError("Item not found")
        row_index, _ = located
        self.store.update_row(Sheet.SHOPPING_LIST_ITEMS, row_index, _item_to_row(item))

    def delete_list(self, list_id: str) -> bool:
        """Delete a list's items, then its header; false if the list is absent."""
        match = self.store.find_row_by_column(Sheet.SHOPPING_LISTS, _LIST_ID, list_id)
        if match is None:
            return False
        item_rows = self.store.read_rows(Sheet.SHOPPING_LIST_ITEMS)
        doomed = [
            row_index
            for row_index, row in data_rows(item_rows)
            if cell(row, _ITEM_LIST_ID) == list_id
        ]
        for row_index in reversed(doomed):
            self.store.delete_row(Sheet.SHOPPING_LIST_ITEMS, row_index)
        self.store.delete_row(Sheet.SHOPPING_LISTS, match.row_index)
        return True

    def _locate_item(self, list_id: str, item_id: str) -> tuple[int, list[str]] | None:
        rows = self.store.read_rows(Sheet.SHOPPING_LIST_ITEMS)
        for row_index, row in data_rows(rows):
            if cell(row, _ITEM_ID) == item_id and cell(row, _ITEM_LIST_ID) == list_id:
                return row_index, row
        return None


def _parse_list(row: list[str]) -> ShoppingList:
    """Parse a ShoppingLists row into a header without items."""
    epoch = datetime.fromtimestamp(0, tz=UTC)
    return ShoppingList(
        id=cell(row, _LIST_ID),
        name=cell(row, _LIST_NAME),
        meal_ids=parse_id_list(cell(row, _LIST_MEAL_IDS)),
        created_at=parse_datetime(cell(row, _LIST_CREATED_AT)) or epoch,
        # Unparseable expiry is treated as already expired.
        expires_at=parse_datetime(cell(row, _LIST_EXPIRES_AT)) or epoch,
        created_by=cell(row, _LIST_CREATED_BY),
    )


def _list_to_row(shopping_list: ShoppingList) -> list[str]:
    return [
        shopping_list.id,
        shopping_list.name,
        format_id_list(shopping_list.meal_ids),
        format_datetime(shopping_list.created_at),
        format_datetime(shopping_list.expires_at),
        shopping_list.created_by,
    ]


def _parse_item(row: list[str]) -> ShoppingListItem:
    return ShoppingListItem(
        id=cell(row, _ITEM_ID),
        list_id=cell(row, _ITEM_LIST_ID),
        ingredient_id=cell(row, _ITEM_INGREDIENT_ID),
        combined_quantity=cell(row, _ITEM_COMBINED_QUANTITY),
        store_section=StoreSection.parse(cell(row, _ITEM_STORE_SECTION)),
        is_checked=parse_bool(cell(row, _ITEM_IS_CHECKED)),
        display_order=parse_int(cell(row, _ITEM_DISPLAY_ORDER)) or 0,
        ingredient_name=cell(row, _ITEM_INGREDIENT_NAME),
    )


def _item_to_row(item: ShoppingListItem) -> list[str]:
    return [
        item.id,
        item.list_id,
        item.ingredient_id,
        item.combined_quantity,
        item.store_section.value,
        format_bool(item.is_checked),
        format_number(item.display_order),
        item.ingredient_name,
    ]
