"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from whats_cookin.adapters.google_identity_client import HttpxGoogleIdentityClient
from whats_cookin.adapters.sheets_calendar_repository import SheetsCalendarRepository
from whats_cookin.adapters.sheets_client import (
    GoogleSheetsRowStore,
    ServiceAccountTokenProvider,
)
from whats_cookin.adapters.sheets_cuisine_repository import SheetsCuisineRepository
from whats_cookin.adapters.sheets_ingredient_repository import (
    SheetsIngredientLineRepository,
    SheetsIngredientRepository,
)
from whats_cookin.adapters.sheets_meal_repository import SheetsMealRepository
from whats_cookin.adapters.sheets_shopping_list_repository import (
    SheetsShoppingListRepository,
)
from whats_cookin.adapters.sheets_user_repository import SheetsAllowedUserRepository
from whats_cookin.config import Settings, parse_allowed_emails
from whats_cookin.services.auth import AuthService
from whats_cookin.services.calendar import CalendarService
from whats_cookin.services.cuisines import CuisineService
from whats_cookin.services.ingredients import IngredientService
from whats_cookin.services.meals import MealService
from whats_cookin.services.shopping_lists import ShoppingListService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    meal_service: MealService
    ingredient_service: IngredientService
    calendar_service: CalendarService
    cuisine_service: CuisineService
    shopping_list_service: ShoppingListService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    token_provider = ServiceAccountTokenProvider(
        client_email=resolved_settings.google_service_account_email,
        private_key=resolved_settings.private_key_pem,
    )
    row_store = GoogleSheetsRowStore.create(
        spreadsheet_id=resolved_settings.google_spreadsheet_id,
        token_provider=token_provider,
        base_url=resolved_settings.sheets_base_url,
    )
    identity_client = HttpxGoogleIdentityClient.create(
        resolved_settings.google_userinfo_url
    )
    meal_repository = SheetsMealRepository(row_store)
    ingredient_repository = SheetsIngredientRepository(row_store)
    line_repository = SheetsIngredientLineRepository(row_store)

    auth_service = AuthService(
        identity_client=identity_client,
        repository=SheetsAllowedUserRepository(row_store),
        allowed_emails=parse_allowed_emails(resolved_settings.allowed_emails),
    )
    meal_service = MealService(
        repository=meal_repository,
        ingredient_repository=ingredient_repository,
        line_repository=line_repository,
    )
    ingredient_service = IngredientService(ingredient_repository)
    calendar_service = CalendarService(
        repository=SheetsCalendarRepository(row_store),
        meal_repository=meal_repository,
    )
    cuisine_service = CuisineService(SheetsCuisineRepository(row_store))
    shopping_list_service = ShoppingListService(
        repository=SheetsShoppingListRepository(row_store),
        meal_repository=meal_repository,
        ingredient_repository=ingredient_repository,
        line_repository=line_repository,
    )

    async def close_resources() -> None:
        row_store.close()
        await identity_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        meal_service=meal_service,
        ingredient_service=ingredient_service,
        calendar_service=calendar_service,
        cuisine_service=cuisine_service,
        shopping_list_service=shopping_list_service,
        close_resources=close_resources,
    )
