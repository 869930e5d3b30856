"""Domain models for the ingredient catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class StoreSection(StrEnum):
    """Store section used to group a shopping trip."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    PANTRY = "pantry"
    FROZEN = "frozen"
    BAKERY = "bakery"
    BEVERAGES = "beverages"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str | None) -> "StoreSection":
        """Parse a stored section, defaulting blanks to pantry and unknowns to other."""
        value = (raw or "").strip().lower()
        if not value:
            return cls.PANTRY
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


# Walking order through the store.
SECTION_ORDER: tuple[StoreSection, ...] = (
    StoreSection.PRODUCE,
    StoreSection.MEAT,
    StoreSection.DAIRY,
    StoreSection.BAKERY,
    StoreSection.FROZEN,
    StoreSection.PANTRY,
    StoreSection.BEVERAGES,
    StoreSection.OTHER,
)


@dataclass(frozen=True)
class Ingredient:
    """An ingredient in the shared catalog."""

    id: str
    name: str
    display_name: str
    store_section: StoreSection
    default_unit: str
    is_common_item: bool
    created_at: datetime | None
    last_used: datetime | None


@dataclass(frozen=True)
class IngredientLine:
    """A meal's use of an ingredient."""

    id: str
    meal_id: str
    ingredient_id: str
    quantity: float | None
    unit: str
    notes: str
