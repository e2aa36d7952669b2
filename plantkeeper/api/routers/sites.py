"""Sites router - site CRUD and adding plants to a site."""

from fastapi import APIRouter, Depends, HTTPException

from plantkeeper.api.deps import get_garden, get_site_or_404
from plantkeeper.api.schemas import (
    PlantCreate,
    SiteCreate,
    SiteResponse,
    SiteUpdate,
    SunExposureOption,
)
from plantkeeper.core.garden import GardenService
from plantkeeper.models.garden import Plant, Site, SunExposure, get_sun_exposure_label

router = APIRouter()


def _site_response(site: Site) -> SiteResponse:
    return SiteResponse(
        id=site.id,
        name=site.name,
        location=site.location,
        description=site.description,
        sun_exposure=site.sun_exposure,
        sun_exposure_label=get_sun_exposure_label(site.sun_exposure),
        plants=site.plants,
        created_at=site.created_at,
        updated_at=site.updated_at,
    )


@router.get("/sun-exposure", response_model=list[SunExposureOption])
async def list_sun_exposure_options():
    """Exposure levels a site can be given, with display labels."""
    return [SunExposureOption(key=option, label=get_sun_exposure_label(option)) for option in SunExposure]


@router.post("", response_model=SiteResponse, status_code=201)
async def create_site(
    body: SiteCreate,
    garden: GardenService = Depends(get_garden),
):
    """Register a new site."""
    site = garden.create_site(body.model_dump())
    return _site_response(site)


@router.get("", response_model=list[SiteResponse])
async def list_sites(garden: GardenService = Depends(get_garden)):
    """List all sites in stored order."""
    return [_site_response(s) for s in garden.list_sites()]


@router.get("/{site_id}", response_model=SiteResponse)
async def get_site(site: Site = Depends(get_site_or_404)):
    return _site_response(site)


@router.put("/{site_id}", response_model=SiteResponse)
async def update_site(
    site_id: str,
    body: SiteUpdate,
    garden: GardenService = Depends(get_garden),
):
    """Update site details."""
    site = garden.update_site(site_id, body.model_dump(exclude_unset=True))
    if not site:
        raise HTTPException(status_code=404, detail="Site not found")
    return _site_response(site)


@router.post("/{site_id}/plants", response_model=Plant, status_code=201)
async def add_plant(
    site_id: str,
    body: PlantCreate,
    garden: GardenService = Depends(get_garden),
):
    """Add a plant to a site. Missing schedules come from presets or preferences."""
    plant = garden.add_plant(site_id, body.model_dump())
    if not plant:
        raise HTTPException(status_code=404, detail="Site not found")
    return plant
