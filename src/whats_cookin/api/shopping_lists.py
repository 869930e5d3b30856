"""Shopping list endpoints."""

from fastapi import APIRouter, Depends, status

from whats_cookin.api.deps import get_container, require_user
from whats_cookin.api.schemas import (
    GenerateShoppingListRequest,
    ItemCheckRequest,
    ShoppingListEnvelope,
    ShoppingListItemEnvelope,
    ShoppingListItemOut,
    ShoppingListOut,
    ShoppingListsEnvelope,
    SuccessResponse,
)
from whats_cookin.containers import AppContainer
from whats_cookin.domain.users import SessionUser

router = APIRouter(prefix="/shopping-lists", tags=["shopping-lists"])


@router.post("/generate", status_code=status.HTTP_201_CREATED)
def generate_list(
    body: GenerateShoppingListRequest,
    user: SessionUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> ShoppingListEnvelope:
    """Build a consolidated shopping list from up to four meals."""
    shopping_list = container.shopping_list_service.generate(
        body.meal_ids,
        created_by=user.email,
        exclude_common_items=body.exclude_common_items,
        name=body.name,
    )
    return ShoppingListEnvelope(shopping_list=ShoppingListOut.from_domain(shopping_list))


@router.get("", dependencies=[Depends(require_user)])
def list_active(container: AppContainer = Depends(get_container)) -> ShoppingListsEnvelope:
    """Return lists that have not expired yet, newest first."""
    lists = container.shopping_list_service.list_active()
    return ShoppingListsEnvelope(lists=[ShoppingListOut.from_domain(item) for item in lists])


@router.get("/{list_id}", dependencies=[Depends(require_user)])
def get_list(
    list_id: str, container: AppContainer = Depends(get_container)
) -> ShoppingListEnvelope:
    shopping_list = container.shopping_list_service.get(list_id)
    return ShoppingListEnvelope(shopping_list=ShoppingListOut.from_domain(shopping_list))


@router.patch("/{list_id}/items/{item_id}", dependencies=[Depends(require_user)])
def set_item_checked(
    list_id: str,
    item_id: str,
    body: ItemCheckRequest,
    container: AppContainer = Depends(get_container),
) -> ShoppingListItemEnvelope:
    """Check or uncheck a list item."""
    item = container.shopping_list_service.set_item_checked(
        list_id, item_id, body.is_checked
    )
    return ShoppingListItemEnvelope(item=ShoppingListItemOut.from_domain(item))


@router.delete("/{list_id}", dependencies=[Depends(require_user)])
def delete_list(
    list_id: str, container: AppContainer = Depends(get_container)
) -> SuccessResponse:
    container.shopping_list_service.delete(list_id)
    return SuccessResponse()
