"""Plants router - plant details, edits, care records and status."""

from fastapi import APIRouter, Depends, HTTPException

from plantkeeper.api.deps import get_garden, get_plant_or_404
from plantkeeper.api.schemas import CareRecordRequest, PlantUpdate
from plantkeeper.core.care import CareStatus
from plantkeeper.core.garden import GardenService
from plantkeeper.models.garden import CareLog, Plant

router = APIRouter()


@router.get("", response_model=list[Plant])
async def list_plants(garden: GardenService = Depends(get_garden)):
    """List all plants across all sites."""
    return garden.list_plants()


@router.get("/{plant_id}", response_model=Plant)
async def get_plant(plant: Plant = Depends(get_plant_or_404)):
    return plant


@router.put("/{plant_id}", response_model=Plant)
async def update_plant(
    plant_id: str,
    body: PlantUpdate,
    garden: GardenService = Depends(get_garden),
):
    """Update plant details. Setting ``site_id`` moves the plant to that site."""
    update_data = body.model_dump(exclude_unset=True)
    if "site_id" in update_data and not garden.get_site(update_data["site_id"]):
        raise HTTPException(status_code=400, detail=f"Unknown site: {update_data['site_id']}")

    plant = garden.update_plant(plant_id, update_data)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return plant


@router.post("/{plant_id}/care", response_model=CareLog, status_code=201)
async def record_care(
    plant_id: str,
    body: CareRecordRequest,
    garden: GardenService = Depends(get_garden),
):
    """Record a watering or fertilizing."""
    log = garden.record_care(plant_id, body.type, when=body.date, notes=body.notes, amount=body.amount)
    if not log:
        raise HTTPException(status_code=404, detail="Plant not found")
    return log


@router.get("/{plant_id}/care-logs", response_model=list[CareLog])
async def get_care_logs(
    plant: Plant = Depends(get_plant_or_404),
    garden: GardenService = Depends(get_garden),
):
    """Care history for a plant, newest first."""
    return garden.get_care_logs(plant.id)


@router.get("/{plant_id}/status", response_model=CareStatus)
async def get_care_status(
    plant: Plant = Depends(get_plant_or_404),
    garden: GardenService = Depends(get_garden),
):
    """Care flags, or when nothing is due, the next upcoming care."""
    return garden.care_status(plant.id)
