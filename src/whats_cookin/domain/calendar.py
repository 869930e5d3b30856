"""Domain models for calendar placement."""

from dataclasses import dataclass
from datetime import date, datetime

from whats_cookin.domain.meals import Meal


@dataclass(frozen=True)
class CalendarEntry:
    """A meal placed into one of a day's two slots."""

    id: str
    date: date
    meal_id: str
    slot: int
    created_at: datetime | None
    created_by: str
    is_leftover_entry: bool = False


@dataclass(frozen=True)
class CalendarEntryView:
    """Calendar entry joined with its meal."""

    entry: CalendarEntry
    meal: Meal
