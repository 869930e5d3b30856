"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from whats_cookin.domain.ingredients import Ingredient, IngredientLine, StoreSection


class MealType(StrEnum):
    """Where a meal was eaten."""

    HOMEMADE = "homemade"
    RESTAURANT = "restaurant"
    FRIENDS_HOUSE = "friends_house"
    LEFTOVERS = "leftovers"


class Chef(StrEnum):
    """Who cooked the meal."""

    IAN = "Ian"
    HANNA = "Hanna"
    OTHER = "Other"


@dataclass(frozen=True)
class Meal:
    """A meal record."""

    id: str
    name: str
    cuisine_type: list[str]
    chef: Chef
    is_leftovers: bool
    is_favorite: bool
    is_quick: bool
    notes: str
    ian_rating: int | None
    hanna_rating: int | None
    meal_type: MealType
    restaurant_name: str
    friend_name: str
    created_at: datetime | None
    last_used: datetime | None
    use_count: int
    effort: int | None = None
    leftover_notes: str = ""


@dataclass(frozen=True)
class MealIngredientDetail:
    """Ingredient line joined with its catalog entry."""

    line: IngredientLine
    ingredient: Ingredient | None


@dataclass(frozen=True)
class MealDetail:
    """Meal with its ingredient lines."""

    meal: Meal
    ingredients: list[MealIngredientDetail] = field(default_factory=list)


@dataclass(frozen=True)
class IngredientEntry:
    """Ingredient as entered on the meal form."""

    name: str
    quantity: float | None = None
    unit: str = ""
    store_section: StoreSection = StoreSection.PANTRY
    is_common_item: bool = False
    notes: str = ""
    ingredient_id: str | None = None


@dataclass(frozen=True)
class MealDraft:
    """Input for creating a meal."""

    name: str
    cuisine_type: list[str] = field(default_factory=list)
    chef: Chef = Chef.IAN
    is_leftovers: bool = False
    is_favorite: bool = False
    is_quick: bool = False
    notes: str = ""
    ian_rating: int | None = None
    hanna_rating: int | None = None
    meal_type: MealType = MealType.HOMEMADE
    restaurant_name: str = ""
    friend_name: str = ""
    effort: int | None = None
    leftover_notes: str = ""
    ingredients: list[IngredientEntry] = field(default_factory=list)
