"""Garden domain models - sites, plants, care schedules and care logs.

These are the persisted aggregates. A Site owns its plants; there is no
plant store independent of the site that holds it.
"""

import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SunExposure(str, Enum):
    FULL_SUN = "full_sun"
    PARTIAL_SUN = "partial_sun"
    PARTIAL_SHADE = "partial_shade"
    FULL_SHADE = "full_shade"

    @property
    def label(self) -> str:
        return SUN_EXPOSURE_LABELS[self]


SUN_EXPOSURE_LABELS: dict[SunExposure, str] = {
    SunExposure.FULL_SUN: "Full Sun",
    SunExposure.PARTIAL_SUN: "Partial Sun",
    SunExposure.PARTIAL_SHADE: "Partial Shade",
    SunExposure.FULL_SHADE: "Full Shade",
}


def get_sun_exposure_label(key: str) -> str:
    """Display label for an exposure key; unknown keys get their first underscore spaced out."""
    try:
        return SunExposure(key).label
    except ValueError:
        return key.replace("_", " ", 1)


class CareType(str, Enum):
    WATER = "water"
    FERTILIZER = "fertilizer"

    @property
    def label(self) -> str:
        return "Water" if self is CareType.WATER else "Fertilizer"


class CareSchedule(BaseModel):
    frequency_days: int = Field(..., ge=0, description="Days between care; 0 means every day")
    is_active: bool = True
    notes: str | None = None


class Plant(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    species: str | None = None
    variety: str | None = None
    site_id: str
    planted_date: date | None = None
    image_uri: str | None = None
    watering_schedule: CareSchedule
    fertilizing_schedule: CareSchedule
    last_watered: datetime | None = None
    last_fertilized: datetime | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Site(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    location: str
    description: str | None = None
    sun_exposure: SunExposure
    plants: list[Plant] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class CareLog(BaseModel):
    id: str = Field(default_factory=new_id)
    plant_id: str
    type: CareType
    date: datetime
    notes: str | None = None
    amount: str | None = Field(None, description="Free text, e.g. '500ml' or '2 cups'")


class UserPreferences(BaseModel):
    theme: Literal["light", "dark", "system"] = "system"
    notifications: bool = True
    reminder_time: str = Field("09:00", pattern=r"^\d{2}:\d{2}$")
    default_watering_frequency: int = Field(7, ge=0)
    default_fertilizing_frequency: int = Field(30, ge=0)


class User(BaseModel):
    id: str
    name: str
    email: str | None = None
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    created_at: datetime = Field(default_factory=utcnow)


class AppState(BaseModel):
    user: User | None = None
    sites: list[Site] = Field(default_factory=list)
    care_logs: list[CareLog] = Field(default_factory=list)
    is_loading: bool = False
    error: str | None = None
