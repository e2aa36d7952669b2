"""PlantKeeper API - Pydantic request/response schemas."""

from datetime import date, datetime
from typing import ClassVar, Literal

from pydantic import BaseModel, Field, model_validator

from plantkeeper.models.garden import CareSchedule, CareType, Plant, SunExposure


class PartialUpdate(BaseModel):
    """Omitted fields are left alone; an explicit null clears an optional field."""

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.required_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"'{name}' cannot be cleared")
        return self


# ── Site schemas ──────────────────────────────────────────────────────────────

class SiteCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., description="e.g. 'Front yard', 'Kitchen window', 'Greenhouse'")
    description: str | None = None
    sun_exposure: SunExposure


class SiteUpdate(PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("name", "location", "sun_exposure")

    name: str | None = Field(None, min_length=1, max_length=100)
    location: str | None = None
    description: str | None = None
    sun_exposure: SunExposure | None = None


class SiteResponse(BaseModel):
    id: str
    name: str
    location: str
    description: str | None
    sun_exposure: SunExposure
    sun_exposure_label: str
    plants: list[Plant]
    created_at: datetime
    updated_at: datetime


class SunExposureOption(BaseModel):
    key: SunExposure
    label: str


# ── Plant schemas ─────────────────────────────────────────────────────────────

class PlantCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    species: str | None = None
    variety: str | None = None
    planted_date: date | None = None
    image_uri: str | None = None
    notes: str | None = None
    watering_schedule: CareSchedule | None = Field(None, description="Defaults from species preset or user preferences")
    fertilizing_schedule: CareSchedule | None = None
    last_watered: datetime | None = None
    last_fertilized: datetime | None = None


class PlantUpdate(PartialUpdate):
    required_fields: ClassVar[tuple[str, ...]] = ("name", "site_id", "watering_schedule", "fertilizing_schedule")

    name: str | None = Field(None, min_length=1, max_length=100)
    species: str | None = None
    variety: str | None = None
    site_id: str | None = None
    planted_date: date | None = None
    image_uri: str | None = None
    notes: str | None = None
    watering_schedule: CareSchedule | None = None
    fertilizing_schedule: CareSchedule | None = None
    last_watered: datetime | None = None
    last_fertilized: datetime | None = None


# ── Care schemas ──────────────────────────────────────────────────────────────

class CareRecordRequest(BaseModel):
    type: CareType
    date: datetime | None = Field(None, description="Defaults to now")
    notes: str | None = None
    amount: str | None = None


class CareCountResponse(BaseModel):
    count: int


class PresetResponse(BaseModel):
    species: str
    watering_schedule: CareSchedule
    fertilizing_schedule: CareSchedule


# ── User schemas ──────────────────────────────────────────────────────────────

class PreferencesUpdate(BaseModel):
    theme: Literal["light", "dark", "system"] | None = None
    notifications: bool | None = None
    reminder_time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    default_watering_frequency: int | None = Field(None, ge=0)
    default_fertilizing_frequency: int | None = Field(None, ge=0)
