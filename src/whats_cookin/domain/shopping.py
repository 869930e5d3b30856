"""Domain models for shopping lists."""

from dataclasses import dataclass, field
from datetime import datetime

from whats_cookin.domain.ingredients import StoreSection


@dataclass(frozen=True)
class IngredientAmount:
    """One ingredient line resolved against the catalog."""

    ingredient_id: str
    name: str
    display_name: str
    store_section: StoreSection
    is_common_item: bool
    quantity: float | None
    unit: str
    notes: str


@dataclass(frozen=True)
class ConsolidatedIngredient:
    """A single merged shopping entry, before persistence."""

    ingredient_id: str
    display_name: str
    combined_quantity: str
    store_section: StoreSection


@dataclass(frozen=True)
class ShoppingListItem:
    """A line on a shopping list."""

    id: str
    list_id: str
    ingredient_id: str
    combined_quantity: str
    store_section: StoreSection
    is_checked: bool
    display_order: int
    ingredient_name: str


@dataclass(frozen=True)
class ShoppingList:
    """A generated shopping list header with its items."""

    id: str
    name: str
    meal_ids: list[str]
    created_at: datetime
    expires_at: datetime
    created_by: str
    items: list[ShoppingListItem] = field(default_factory=list)

    def is_expired(self, now: datetime) -> bool:
        """Return true once the list is past its expiration time."""
        return self.expires_at <= now
