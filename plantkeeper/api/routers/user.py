"""User router - profile, preferences and full state snapshot."""

from fastapi import APIRouter, Depends, HTTPException

from plantkeeper.api.deps import get_garden
from plantkeeper.api.schemas import PreferencesUpdate
from plantkeeper.core.garden import GardenService
from plantkeeper.models.garden import AppState, User

router = APIRouter()


@router.get("/user", response_model=User)
async def get_user(garden: GardenService = Depends(get_garden)):
    user = garden.get_user()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/user/preferences", response_model=User)
async def update_preferences(
    body: PreferencesUpdate,
    garden: GardenService = Depends(get_garden),
):
    user = garden.update_preferences(body.model_dump(exclude_none=True))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/state", response_model=AppState)
async def get_state(garden: GardenService = Depends(get_garden)):
    """Everything a client needs at startup in one response."""
    return garden.snapshot()
