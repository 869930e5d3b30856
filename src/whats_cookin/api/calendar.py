"""Calendar endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, status

from whats_cookin.api.deps import get_container, require_user
from whats_cookin.api.schemas import (
    CalendarEntryEnvelope,
    CalendarEntryOut,
    CalendarEntryRequest,
    CalendarEnvelope,
    SuccessResponse,
)
from whats_cookin.containers import AppContainer
from whats_cookin.domain.users import SessionUser

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", dependencies=[Depends(require_user)])
def list_entries(
    start: date, end: date, container: AppContainer = Depends(get_container)
) -> CalendarEnvelope:
    """Return planned meals between two dates, inclusive."""
    views = container.calendar_service.list_entries(start, end)
    return CalendarEnvelope(entries=[CalendarEntryOut.from_view(view) for view in views])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_entry(
    body: CalendarEntryRequest,
    user: SessionUser = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> CalendarEntryEnvelope:
    """Place a meal into a day's slot."""
    view = container.calendar_service.create_entry(
        entry_date=body.entry_date,
        meal_id=body.meal_id,
        slot=body.slot,
        created_by=user.email,
        is_leftover_entry=body.is_leftover_entry,
    )
    return CalendarEntryEnvelope(entry=CalendarEntryOut.from_view(view))


@router.delete("/{entry_id}", dependencies=[Depends(require_user)])
def delete_entry(
    entry_id: str, container: AppContainer = Depends(get_container)
) -> SuccessResponse:
    container.calendar_service.delete_entry(entry_id)
    return SuccessResponse()
