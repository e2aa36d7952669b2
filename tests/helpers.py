"""Plant and site factories for PlantKeeper tests."""

from datetime import datetime

from plantkeeper.models.garden import CareSchedule, Plant, Site, SunExposure

# Every engine test is judged against this day
NOW = datetime(2023, 6, 15)


def make_plant(**overrides) -> Plant:
    data = {
        "id": "plant-1",
        "name": "Test Plant",
        "species": "Test Species",
        "site_id": "site-1",
        "watering_schedule": CareSchedule(frequency_days=7),
        "fertilizing_schedule": CareSchedule(frequency_days=14),
        "created_at": datetime(2023, 1, 1),
        "updated_at": datetime(2023, 1, 1),
    }
    data.update(overrides)
    return Plant(**data)


def make_site(plants=None, **overrides) -> Site:
    data = {
        "id": "site-1",
        "name": "Test Site",
        "location": "Test Location",
        "sun_exposure": SunExposure.FULL_SUN,
        "plants": plants or [],
        "created_at": datetime(2023, 1, 1),
        "updated_at": datetime(2023, 1, 1),
    }
    data.update(overrides)
    return Site(**data)
