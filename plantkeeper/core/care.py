"""PlantKeeper Care Engine - classifies which plants need water or fertilizer.

Pure functions over a snapshot of sites. Nothing here reads storage or
mutates its input; "now" is captured once per call so every plant in one
result is judged against the same day.
"""

from datetime import datetime
from typing import Iterable, NamedTuple

from pydantic import BaseModel

from plantkeeper.core.dates import day_difference, days_between
from plantkeeper.models.garden import CareSchedule, CareType, Plant, Site


class PlantWithCareNeeds(BaseModel):
    """A plant paired with its care flags at evaluation time. Never persisted."""

    plant: Plant
    needs_water: bool
    needs_fertilizer: bool

    model_config = {"frozen": True}


class CareStatus(BaseModel):
    needs_water: bool
    needs_fertilizer: bool
    status_text: str | None = None

    model_config = {"frozen": True}


class UpcomingCare(NamedTuple):
    type: CareType
    days_until: int | None  # None when the last care date does not parse


def is_due(schedule: CareSchedule, last_care, now) -> bool:
    """True if care is due: never performed, or at least ``frequency_days`` have elapsed."""
    if last_care is None:
        return True
    return days_between(now, last_care) >= schedule.frequency_days


def evaluate_plant(plant: Plant, now) -> tuple[bool, bool]:
    """Return ``(needs_water, needs_fertilizer)`` for one plant."""
    needs_water = is_due(plant.watering_schedule, plant.last_watered, now)
    needs_fertilizer = False
    if plant.fertilizing_schedule.is_active:
        needs_fertilizer = is_due(plant.fertilizing_schedule, plant.last_fertilized, now)
    return needs_water, needs_fertilizer


def plants_needing_care(sites: Iterable[Site], now: datetime | None = None) -> list[PlantWithCareNeeds]:
    """List every plant needing water or fertilizer, in site then plant order."""
    if now is None:
        now = datetime.now()

    result: list[PlantWithCareNeeds] = []
    for site in sites:
        for plant in site.plants:
            needs_water, needs_fertilizer = evaluate_plant(plant, now)
            if needs_water or needs_fertilizer:
                result.append(PlantWithCareNeeds(
                    plant=plant,
                    needs_water=needs_water,
                    needs_fertilizer=needs_fertilizer,
                ))
    return result


def plants_needing_care_count(sites: Iterable[Site], now: datetime | None = None) -> int:
    return len(plants_needing_care(sites, now))


def _days_until(schedule: CareSchedule, last_care, now) -> int | None:
    if last_care is None:
        return 0
    diff = day_difference(now, last_care)
    if not diff.valid:
        return None
    return schedule.frequency_days - diff.days


def upcoming_care(plant: Plant, now) -> list[UpcomingCare]:
    """Days until each evaluated schedule falls due, most urgent first.

    Watering is always evaluated, fertilizing only when active. Unparseable
    dates sort ahead of everything else; ties keep watering first.
    """
    items = [UpcomingCare(CareType.WATER, _days_until(plant.watering_schedule, plant.last_watered, now))]
    if plant.fertilizing_schedule.is_active:
        items.append(UpcomingCare(
            CareType.FERTILIZER,
            _days_until(plant.fertilizing_schedule, plant.last_fertilized, now),
        ))
    return sorted(items, key=lambda item: (item.days_until is not None, item.days_until or 0))


def format_upcoming(item: UpcomingCare) -> str:
    if item.days_until is None:
        return "Care schedule unavailable"
    if item.days_until <= 0:
        return f"{item.type.label} overdue"
    if item.days_until == 1:
        return f"{item.type.label} tomorrow"
    return f"{item.type.label} in {item.days_until} days"


def care_status(plant: Plant, now: datetime | None = None) -> CareStatus:
    """Care flags for one plant, plus a "next due" text when nothing is due now."""
    if now is None:
        now = datetime.now()

    needs_water, needs_fertilizer = evaluate_plant(plant, now)
    if needs_water or needs_fertilizer:
        return CareStatus(needs_water=needs_water, needs_fertilizer=needs_fertilizer)

    most_urgent = upcoming_care(plant, now)[0]
    return CareStatus(needs_water=False, needs_fertilizer=False, status_text=format_upcoming(most_urgent))
