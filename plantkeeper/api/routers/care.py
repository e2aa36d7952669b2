"""Care router - plants needing care now, and presets."""

from fastapi import APIRouter, Depends

from plantkeeper.api.deps import get_garden
from plantkeeper.api.schemas import CareCountResponse, PresetResponse
from plantkeeper.core.care import PlantWithCareNeeds
from plantkeeper.core.garden import GardenService

router = APIRouter()


@router.get("/needed", response_model=list[PlantWithCareNeeds])
async def get_plants_needing_care(garden: GardenService = Depends(get_garden)):
    """Plants that need water or fertilizer today."""
    return garden.plants_needing_care()


@router.get("/count", response_model=CareCountResponse)
async def get_plants_needing_care_count(garden: GardenService = Depends(get_garden)):
    return CareCountResponse(count=garden.plants_needing_care_count())


@router.get("/presets", response_model=list[PresetResponse])
async def list_presets(garden: GardenService = Depends(get_garden)):
    """Species with bundled default schedules."""
    presets = []
    for species in garden.presets.get_supported_species():
        watering, fertilizing = garden.presets.get_schedules(species)
        presets.append(PresetResponse(
            species=species,
            watering_schedule=watering,
            fertilizing_schedule=fertilizing,
        ))
    return presets
