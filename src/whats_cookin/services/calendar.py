"""Calendar placement of meals."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import uuid4

from whats_cookin.domain.calendar import CalendarEntry, CalendarEntryView
from whats_cookin.domain.errors import NotFoundError, ValidationError
from whats_cookin.domain.meals import Chef, Meal, MealType
from whats_cookin.services.meals import MealRepository

logger = logging.getLogger(__name__)

SLOTS = (1, 2)
UNKNOWN_MEAL_NAME = "Unknown Meal"


class CalendarRepository(Protocol):
    """Persistence interface for calendar entries."""

    def list_entries(self) -> list[CalendarEntry]:
        """Return every calendar entry."""

    def create_entry(self, entry: CalendarEntry) -> None:
        """Persist a new entry."""

    def delete_entry(self, entry_id: str) -> bool:
        """Delete an entry; false when it did not exist."""


@dataclass
class CalendarService:
    """Places meals on days and reads the plan back."""

    repository: CalendarRepository
    meal_repository: MealRepository

    def list_entries(self, start: date, end: date) -> list[CalendarEntryView]:
        """Return entries between two dates, inclusive, joined with meals."""
        if end < start:
            raise ValidationError("end must not be before start")
        entries = [
            entry for entry in self.repository.list_entries() if start <= entry.date <= end
        ]
        if not entries:
            return []
        meals = {meal.id: meal for meal in self.meal_repository.list_meals()}
        entries.sort(key=lambda entry: (entry.date, entry.slot))
        return [
            CalendarEntryView(
                entry=entry,
                meal=meals.get(entry.meal_id) or _placeholder_meal(entry.meal_id),
            )
            for entry in entries
        ]

    def create_entry(
        self,
        entry_date: date,
        meal_id: str,
        slot: int,
        created_by: str,
        is_leftover_entry: bool = False,
        now: datetime | None = None,
    ) -> CalendarEntryView:
        """Place a meal into a free slot and record the meal as used."""
        if slot not in SLOTS:
            raise ValidationError("slot must be 1 or 2")
        meal = self.meal_repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found")
        taken = any(
            entry.date == entry_date and entry.slot == slot
            for entry in self.repository.list_entries()
        )
        if taken:
            raise ValidationError(f"Slot {slot} on {entry_date.isoformat()} is already taken")

        created_at = now or datetime.now(tz=UTC)
        entry = CalendarEntry(
            id=str(uuid4()),
            date=entry_date,
            meal_id=meal_id,
            slot=slot,
            created_at=created_at,
            created_by=created_by,
            is_leftover_entry=is_leftover_entry,
        )
        self.repository.create_entry(entry)
        used = replace(meal, last_used=created_at, use_count=meal.use_count + 1)
        self.meal_repository.update_meal(used)
        logger.info("Placed meal %s on %s slot %d", meal_id, entry_date, slot)
        return CalendarEntryView(entry=entry, meal=used)

    def delete_entry(self, entry_id: str) -> None:
        """Remove an entry from the calendar."""
        if not self.repository.delete_entry(entry_id):
            raise NotFoundError("Calendar entry not found")


def _placeholder_meal(meal_id: str) -> Meal:
    return Meal(
        id=meal_id,
        name=UNKNOWN_MEAL_NAME,
        cuisine_type=[],
        chef=Chef.OTHER,
        is_leftovers=False,
        is_favorite=False,
        is_quick=False,
        notes="",
        ian_rating=None,
        hanna_rating=None,
        meal_type=MealType.HOMEMADE,
        restaurant_name="",
        friend_name="",
        created_at=None,
        last_used=None,
        use_count=0,
    )
