from datetime import datetime, timedelta, timezone

import pytest

from plantkeeper.core.garden import GardenService
from plantkeeper.models.garden import CareSchedule, CareType, SunExposure


def _site(garden, name="Kitchen window"):
    return garden.create_site({
        "name": name,
        "location": "Indoors",
        "sun_exposure": SunExposure.PARTIAL_SUN,
    })


def test_initialize_creates_default_user(garden):
    user = garden.get_user()

    assert user.name == "Plant Lover"
    assert garden.list_sites() == []


def test_create_and_get_site(garden):
    first = _site(garden)
    second = _site(garden, "Greenhouse")

    assert [s.name for s in garden.list_sites()] == ["Kitchen window", "Greenhouse"]
    assert garden.get_site(second.id).name == "Greenhouse"
    assert garden.get_site("missing") is None
    assert first.created_at == first.updated_at
    assert first.created_at.tzinfo is not None


def test_update_site_bumps_updated_at(garden):
    site = _site(garden)

    updated = garden.update_site(site.id, {"name": "Sunroom", "sun_exposure": SunExposure.FULL_SUN})

    assert updated.name == "Sunroom"
    assert updated.sun_exposure is SunExposure.FULL_SUN
    assert updated.updated_at >= site.updated_at
    assert garden.get_site(site.id).name == "Sunroom"
    assert garden.update_site("missing", {"name": "x"}) is None


def test_add_plant_uses_species_preset(garden):
    site = _site(garden)

    plant = garden.add_plant(site.id, {"name": "Big leaf", "species": "Monstera"})

    assert plant.site_id == site.id
    assert plant.watering_schedule.frequency_days == 7
    assert plant.fertilizing_schedule.frequency_days == 30
    assert garden.get_site(site.id).plants == [plant]


def test_add_plant_falls_back_to_preferences(garden):
    garden.update_preferences({"default_watering_frequency": 4, "default_fertilizing_frequency": 21})
    site = _site(garden)

    plant = garden.add_plant(site.id, {"name": "Mystery", "species": "Unknownia"})

    assert plant.watering_schedule.frequency_days == 4
    assert plant.fertilizing_schedule.frequency_days == 21


def test_add_plant_keeps_explicit_schedules(garden):
    site = _site(garden)

    plant = garden.add_plant(site.id, {
        "name": "Herb",
        "species": "basil",
        "watering_schedule": CareSchedule(frequency_days=1),
        "fertilizing_schedule": None,
    })

    assert plant.watering_schedule.frequency_days == 1
    assert plant.fertilizing_schedule.frequency_days == 14


def test_add_plant_to_missing_site(garden):
    assert garden.add_plant("missing", {"name": "Orphan"}) is None


def test_update_plant_in_place(garden):
    site = _site(garden)
    plant = garden.add_plant(site.id, {"name": "Fern"})

    updated = garden.update_plant(plant.id, {"name": "Boston fern", "notes": "Likes humidity"})

    assert updated.name == "Boston fern"
    assert updated.created_at == plant.created_at
    assert updated.updated_at >= plant.updated_at
    assert garden.get_plant(plant.id).notes == "Likes humidity"
    assert garden.update_plant("missing", {"name": "x"}) is None


def test_update_plant_moves_between_sites(garden):
    kitchen = _site(garden)
    balcony = _site(garden, "Balcony")
    plant = garden.add_plant(kitchen.id, {"name": "Tomato", "species": "tomato"})

    moved = garden.update_plant(plant.id, {"site_id": balcony.id})

    assert moved.site_id == balcony.id
    assert garden.get_site(kitchen.id).plants == []
    assert [p.id for p in garden.get_site(balcony.id).plants] == [plant.id]
    site, found = garden.find_plant(plant.id)
    assert site.id == found.site_id == balcony.id


def test_update_plant_to_unknown_site_raises(garden):
    plant = garden.add_plant(_site(garden).id, {"name": "Fern"})

    with pytest.raises(ValueError):
        garden.update_plant(plant.id, {"site_id": "nowhere"})


def test_record_care_updates_plant_and_logs(garden):
    plant = garden.add_plant(_site(garden).id, {"name": "Pothos", "species": "pothos"})

    log = garden.record_care(plant.id, CareType.WATER, amount="500ml")

    assert log.plant_id == plant.id
    assert log.type is CareType.WATER
    assert garden.get_plant(plant.id).last_watered == log.date
    assert garden.get_plant(plant.id).last_fertilized is None
    assert garden.get_care_logs(plant.id) == [log]
    assert garden.record_care("missing", CareType.WATER) is None


def test_backdated_care_keeps_latest_date(garden):
    plant = garden.add_plant(_site(garden).id, {"name": "Pothos"})
    recent = datetime(2023, 6, 14, tzinfo=timezone.utc)
    garden.record_care(plant.id, CareType.FERTILIZER, when=recent)

    garden.record_care(plant.id, CareType.FERTILIZER, when=datetime(2023, 6, 1))

    assert garden.get_plant(plant.id).last_fertilized == recent
    logs = garden.get_care_logs(plant.id)
    assert len(logs) == 2
    assert logs[0].date == recent


def test_care_queries(garden):
    site = _site(garden)
    thirsty = garden.add_plant(site.id, {"name": "Thirsty", "species": "basil"})
    happy = garden.add_plant(site.id, {"name": "Happy", "species": "succulent"})
    garden.record_care(happy.id, CareType.WATER)

    needing = garden.plants_needing_care()

    assert [entry.plant.id for entry in needing] == [thirsty.id]
    assert needing[0].needs_water and needing[0].needs_fertilizer
    assert garden.plants_needing_care_count() == 1
    assert garden.care_status(happy.id).status_text == "Water in 14 days"
    assert garden.care_status(thirsty.id).status_text is None
    assert garden.care_status("missing") is None


def test_watered_yesterday_in_configured_zone(garden):
    plant = garden.add_plant(_site(garden).id, {
        "name": "Daily",
        "watering_schedule": CareSchedule(frequency_days=1),
        "fertilizing_schedule": CareSchedule(frequency_days=1, is_active=False),
    })
    garden.record_care(plant.id, CareType.WATER, when=garden.now() - timedelta(days=1))

    assert garden.plants_needing_care_count() == 1


def test_snapshot(garden):
    plant = garden.add_plant(_site(garden).id, {"name": "Fern"})
    garden.record_care(plant.id, CareType.WATER)

    state = garden.snapshot()

    assert state.user.name == "Plant Lover"
    assert len(state.sites) == 1
    assert len(state.care_logs) == 1


def test_malformed_preset_does_not_block_startup(settings, session_factory, tmp_path):
    presets_dir = tmp_path / "knowledge" / "presets"
    presets_dir.mkdir(parents=True)
    (presets_dir / "empty_aliases.yaml").write_text("species: Boston fern\naliases:\nwatering:\n  frequency_days: 3\n")
    (presets_dir / "list.yaml").write_text("- a\n- b\n")
    custom = settings.model_copy(update={"knowledge_dir": str(tmp_path / "knowledge")})

    service = GardenService(custom, session_factory)
    service.initialize()

    plant = service.add_plant(_site(service).id, {"name": "Fernanda", "species": "boston fern"})
    assert plant.watering_schedule.frequency_days == 3
