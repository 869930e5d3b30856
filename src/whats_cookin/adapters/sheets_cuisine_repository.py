"""Sheets-backed cuisine tag lookup."""

from dataclasses import dataclass

from whats_cookin.adapters.cells import cell, data_rows
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.services.cuisines import CuisineRepository

_NAME = 1


@dataclass
class SheetsCuisineRepository(CuisineRepository):
    """Cuisine tags stored in the CuisineTags sheet."""

    store: RowStore

    def list_names(self) -> list[str]:
        """Return every non-empty tag name."""
        rows = self.store.read_rows(Sheet.CUISINE_TAGS)
        return [cell(row, _NAME) for _, row in data_rows(rows) if cell(row, _NAME)]
