"""Models package - SQLAlchemy tables and pydantic garden aggregates."""

from plantkeeper.models.base import Base, create_session_factory
from plantkeeper.models.garden import (
    AppState,
    CareLog,
    CareSchedule,
    CareType,
    Plant,
    Site,
    SunExposure,
    User,
    UserPreferences,
)
from plantkeeper.models.store import StoredValue

__all__ = [
    "Base",
    "create_session_factory",
    "StoredValue",
    "AppState",
    "CareLog",
    "CareSchedule",
    "CareType",
    "Plant",
    "Site",
    "SunExposure",
    "User",
    "UserPreferences",
]
