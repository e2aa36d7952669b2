"""PlantKeeper API - dependency injection."""

from fastapi import Depends, HTTPException, Request

from plantkeeper.core.garden import GardenService
from plantkeeper.models.garden import Plant, Site


def get_garden(request: Request) -> GardenService:
    """Get the garden service from app state."""
    return request.app.state.garden


def get_site_or_404(site_id: str, garden: GardenService = Depends(get_garden)) -> Site:
    """Resolve the ``site_id`` path parameter to a stored site."""
    site = garden.get_site(site_id)
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")
    return site


def get_plant_or_404(plant_id: str, garden: GardenService = Depends(get_garden)) -> Plant:
    """Resolve the ``plant_id`` path parameter to a stored plant."""
    plant = garden.get_plant(plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant
