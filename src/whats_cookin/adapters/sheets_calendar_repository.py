"""Sheets-backed repository for calendar entries."""

from dataclasses import dataclass

from whats_cookin.adapters.cells import (
    cell,
    data_rows,
    format_bool,
    format_datetime,
    format_number,
    parse_bool,
    parse_date,
    parse_datetime,
    parse_int,
)
from whats_cookin.adapters.sheets_client import RowStore, Sheet
from whats_cookin.domain.calendar import CalendarEntry
from whats_cookin.services.calendar import CalendarRepository

_ID = 0
_DATE = 1
_MEAL_ID = 2
_SLOT = 3
_CREATED_AT = 4
_CREATED_BY = 5
_IS_LEFTOVER_ENTRY = 6


@dataclass
class SheetsCalendarRepository(CalendarRepository):
    """Calendar entries stored in the CalendarEntries sheet."""

    store: RowStore

    def list_entries(self) -> list[CalendarEntry]:
        """Return every entry with a readable date."""
        rows = self.store.read_rows(Sheet.CALENDAR_ENTRIES)
        entries = []
        for _, row in data_rows(rows):
            entry = _parse_entry(row)
            if entry is not None:
                entries.append(entry)
        return entries

    def create_entry(self, entry: CalendarEntry) -> None:
        """Append a new entry row."""
        self.store.append_row(Sheet.CALENDAR_ENTRIES, _entry_to_row(entry))

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry; return false when it did not exist."""
        match = self.store.find_row_by_column(Sheet.CALENDAR_ENTRIES, _ID, entry_id)
        if match is None:
            return False
        self.store.delete_row(Sheet.CALENDAR_ENTRIES, match.row_index)
        return True


def _parse_entry(row: list[str]) -> CalendarEntry | None:
    entry_date = parse_date(cell(row, _DATE))
    if not cell(row, _ID) or entry_date is None:
        return None
    return CalendarEntry(
        id=cell(row, _ID),
        date=entry_date,
        meal_id=cell(row, _MEAL_ID),
        slot=parse_int(cell(row, _SLOT)) or 1,
        created_at=parse_datetime(cell(row, _CREATED_AT)),
        created_by=cell(row, _CREATED_BY),
        is_leftover_entry=parse_bool(cell(row, _IS_LEFTOVER_ENTRY)),
    )


def _entry_to_row(entry: CalendarEntry) -> list[str]:
    return [
        entry.id,
        entry.date.isoformat(),
        entry.meal_id,
        format_number(entry.slot),
        format_datetime(entry.created_at),
        entry.created_by,
        format_bool(entry.is_leftover_entry),
    ]
