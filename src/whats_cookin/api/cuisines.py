"""Cuisine tag endpoints."""

from fastapi import APIRouter, Depends

from whats_cookin.api.deps import get_container, require_user
from whats_cookin.api.schemas import CuisinesEnvelope
from whats_cookin.containers import AppContainer

router = APIRouter(prefix="/cuisines", tags=["cuisines"], dependencies=[Depends(require_user)])


@router.get("")
def list_cuisines(container: AppContainer = Depends(get_container)) -> CuisinesEnvelope:
    return CuisinesEnvelope(cuisines=container.cuisine_service.list_cuisines())
