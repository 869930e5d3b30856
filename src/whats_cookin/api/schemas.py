"""Pydantic models for the JSON API.

Request and response bodies use camelCase field names; Python attributes
stay snake_case through the alias generator.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel

from whats_cookin.domain.calendar import CalendarEntryView
from whats_cookin.domain.ingredients import Ingredient, StoreSection
from whats_cookin.domain.meals import (
    Chef,
    IngredientEntry,
    Meal,
    MealDetail,
    MealDraft,
    MealIngredientDetail,
    MealType,
)
from whats_cookin.domain.shopping import ShoppingList, ShoppingListItem
from whats_cookin.domain.users import SessionUser
from whats_cookin.services.shopping_lists import UNKNOWN_INGREDIENT

# Fields that may be explicitly cleared by sending null.
NULLABLE_MEAL_FIELDS = frozenset({"ian_rating", "hanna_rating", "effort"})


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(CamelModel):
    """Identity-provider access token from the sign-in button."""

    credential: str = Field(min_length=1)


class UserOut(CamelModel):
    email: str
    name: str
    role: str

    @classmethod
    def from_domain(cls, user: SessionUser) -> "UserOut":
        return cls(email=user.email, name=user.name, role=user.role)


class UserEnvelope(CamelModel):
    user: UserOut


class SuccessResponse(CamelModel):
    success: bool = True


class IngredientInput(CamelModel):
    """Ingredient line entered on the meal form."""

    name: str = Field(min_length=1)
    quantity: float | None = Field(default=None, ge=0)
    unit: str = ""
    store_section: str = ""
    is_common_item: StrictBool = False
    notes: str = ""
    ingredient_id: str | None = None

    def to_entry(self) -> IngredientEntry:
        return IngredientEntry(
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            store_section=StoreSection.parse(self.store_section),
            is_common_item=self.is_common_item,
            notes=self.notes,
            ingredient_id=self.ingredient_id or None,
        )


class MealCreateRequest(CamelModel):
    name: str
    cuisine_type: list[str] = Field(default_factory=list)
    chef: Chef = Chef.IAN
    is_leftovers: StrictBool = False
    is_favorite: StrictBool = False
    is_quick: StrictBool = False
    notes: str = ""
    ian_rating: int | None = Field(default=None, ge=1, le=5)
    hanna_rating: int | None = Field(default=None, ge=1, le=5)
    meal_type: MealType = MealType.HOMEMADE
    restaurant_name: str = ""
    friend_name: str = ""
    effort: int | None = Field(default=None, ge=1, le=5)
    leftover_notes: str = ""
    ingredients: list[IngredientInput] = Field(default_factory=list)

    def to_draft(self) -> MealDraft:
        fields = self.model_dump(exclude={"ingredients"})
        return MealDraft(
            **fields,
            ingredients=[item.to_entry() for item in self.ingredients],
        )


class MealUpdateRequest(CamelModel):
    """Partial meal update; omitted fields keep their stored values."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    cuisine_type: list[str] | None = None
    chef: Chef | None = None
    is_leftovers: StrictBool | None = None
    is_favorite: StrictBool | None = None
    is_quick: StrictBool | None = None
    notes: str | None = None
    ian_rating: int | None = Field(default=None, ge=1, le=5)
    hanna_rating: int | None = Field(default=None, ge=1, le=5)
    meal_type: MealType | None = None
    restaurant_name: str | None = None
    friend_name: str | None = None
    effort: int | None = Field(default=None, ge=1, le=5)
    leftover_notes: str | None = None
    ingredients: list[IngredientInput] | None = None

    def changes(self) -> dict[str, object]:
        """Return the fields the caller actually sent."""
        sent = self.model_dump(exclude_unset=True, exclude={"ingredients"})
        return {
            key: value
            for key, value in sent.items()
            if value is not None or key in NULLABLE_MEAL_FIELDS
        }

    def ingredient_entries(self) -> list[IngredientEntry] | None:
        if self.ingredients is None:
            return None
        return [item.to_entry() for item in self.ingredients]


class MealOut(CamelModel):
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
    effort: int | None
    leftover_notes: str

    @classmethod
    def from_domain(cls, meal: Meal) -> "MealOut":
        return cls(
            id=meal.id,
            name=meal.name,
            cuisine_type=list(meal.cuisine_type),
            chef=meal.chef,
            is_leftovers=meal.is_leftovers,
            is_favorite=meal.is_favorite,
            is_quick=meal.is_quick,
            notes=meal.notes,
            ian_rating=meal.ian_rating,
            hanna_rating=meal.hanna_rating,
            meal_type=meal.meal_type,
            restaurant_name=meal.restaurant_name,
            friend_name=meal.friend_name,
            created_at=meal.created_at,
            last_used=meal.last_used,
            use_count=meal.use_count,
            effort=meal.effort,
            leftover_notes=meal.leftover_notes,
        )


class MealIngredientOut(CamelModel):
    id: str
    ingredient_id: str
    name: str
    store_section: StoreSection
    quantity: float | None
    unit: str
    notes: str

    @classmethod
    def from_domain(cls, detail: MealIngredientDetail) -> "MealIngredientOut":
        ingredient = detail.ingredient
        return cls(
            id=detail.line.id,
            ingredient_id=detail.line.ingredient_id,
            name=ingredient.display_name if ingredient else UNKNOWN_INGREDIENT,
            store_section=ingredient.store_section if ingredient else StoreSection.OTHER,
            quantity=detail.line.quantity,
            unit=detail.line.unit,
            notes=detail.line.notes,
        )


class MealDetailOut(MealOut):
    ingredients: list[MealIngredientOut]

    @classmethod
    def from_detail(cls, detail: MealDetail) -> "MealDetailOut":
        base = MealOut.from_domain(detail.meal)
        return cls(
            **base.model_dump(),
            ingredients=[MealIngredientOut.from_domain(item) for item in detail.ingredients],
        )


class MealsEnvelope(CamelModel):
    meals: list[MealOut]


class MealEnvelope(CamelModel):
    meal: MealDetailOut


class IngredientOut(CamelModel):
    id: str
    name: str
    display_name: str
    store_section: StoreSection
    default_unit: str
    is_common_item: bool
    created_at: datetime | None
    last_used: datetime | None

    @classmethod
    def from_domain(cls, ingredient: Ingredient) -> "IngredientOut":
        return cls(
            id=ingredient.id,
            name=ingredient.name,
            display_name=ingredient.display_name,
            store_section=ingredient.store_section,
            default_unit=ingredient.default_unit,
            is_common_item=ingredient.is_common_item,
            created_at=ingredient.created_at,
            last_used=ingredient.last_used,
        )


class IngredientsEnvelope(CamelModel):
    ingredients: list[IngredientOut]


class CalendarEntryRequest(CamelModel):
    entry_date: date = Field(alias="date")
    meal_id: str = Field(min_length=1)
    slot: int
    is_leftover_entry: StrictBool = False


class CalendarEntryOut(CamelModel):
    id: str
    entry_date: date = Field(alias="date")
    meal_id: str
    slot: int
    created_at: datetime | None
    created_by: str
    is_leftover_entry: bool
    meal: MealOut

    @classmethod
    def from_view(cls, view: CalendarEntryView) -> "CalendarEntryOut":
        entry = view.entry
        return cls(
            id=entry.id,
            entry_date=entry.date,
            meal_id=entry.meal_id,
            slot=entry.slot,
            created_at=entry.created_at,
            created_by=entry.created_by,
            is_leftover_entry=entry.is_leftover_entry,
            meal=MealOut.from_domain(view.meal),
        )


class CalendarEnvelope(CamelModel):
    entries: list[CalendarEntryOut]


class CalendarEntryEnvelope(CamelModel):
    entry: CalendarEntryOut


class CuisinesEnvelope(CamelModel):
    cuisines: list[str]


class GenerateShoppingListRequest(CamelModel):
    meal_ids: list[str] = Field(min_length=1, max_length=4)
    exclude_common_items: StrictBool = False
    name: str = ""


class ItemCheckRequest(CamelModel):
    is_checked: StrictBool


class ShoppingListItemOut(CamelModel):
    id: str
    list_id: str
    ingredient_id: str
    ingredient_name: str
    combined_quantity: str
    store_section: StoreSection
    is_checked: bool
    display_order: int

    @classmethod
    def from_domain(cls, item: ShoppingListItem) -> "ShoppingListItemOut":
        return cls(
            id=item.id,
            list_id=item.list_id,
            ingredient_id=item.ingredient_id,
            ingredient_name=item.ingredient_name or UNKNOWN_INGREDIENT,
            combined_quantity=item.combined_quantity,
            store_section=item.store_section,
            is_checked=item.is_checked,
            display_order=item.display_order,
        )


class ShoppingListOut(CamelModel):
    id: str
    name: str
    meal_ids: list[str]
    created_at: datetime
    expires_at: datetime
    created_by: str
    items: list[ShoppingListItemOut]

    @classmethod
    def from_domain(cls, shopping_list: ShoppingList) -> "ShoppingListOut":
        return cls(
            id=shopping_list.id,
            name=shopping_list.name,
            meal_ids=list(shopping_list.meal_ids),
            created_at=shopping_list.created_at,
            expires_at=shopping_list.expires_at,
            created_by=shopping_list.created_by,
            items=[ShoppingListItemOut.from_domain(item) for item in shopping_list.items],
        )


class ShoppingListEnvelope(CamelModel):
    shopping_list: ShoppingListOut = Field(alias="list")


class ShoppingListsEnvelope(CamelModel):
    lists: list[ShoppingListOut]


class ShoppingListItemEnvelope(CamelModel):
    item: ShoppingListItemOut
