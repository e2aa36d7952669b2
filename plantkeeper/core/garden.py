"""PlantKeeper Garden Service - CRUD over the site snapshot plus care queries."""

import logging
from datetime import datetime

from plantkeeper.core.care import (
    CareStatus,
    PlantWithCareNeeds,
    care_status,
    plants_needing_care,
    plants_needing_care_count,
)
from plantkeeper.core.config import Settings
from plantkeeper.core.presets import CarePresets
from plantkeeper.core.storage import Storage
from plantkeeper.models.garden import (
    AppState,
    CareLog,
    CareSchedule,
    CareType,
    Plant,
    Site,
    User,
    UserPreferences,
)

logger = logging.getLogger("plantkeeper.garden")


class GardenService:
    """Owns the persisted garden and answers care questions about it.

    Every mutation is a read-modify-write of the whole ``sites`` key, so
    the stored snapshot is always the one the care engine sees next.
    """

    def __init__(self, settings: Settings, session_factory):
        self.settings = settings
        self.storage = Storage(session_factory)
        self.presets = CarePresets(settings.knowledge_dir)
        logger.info("Garden service initialized")

    def now(self) -> datetime:
        return datetime.now(self.settings.get_tzinfo())

    def localize(self, moment: datetime) -> datetime:
        """Read naive datetimes as wall time in the configured zone."""
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.settings.get_tzinfo())
        return moment

    def initialize(self) -> None:
        self.storage.initialize_default_data(
            self.settings.default_user_name,
            UserPreferences(
                default_watering_frequency=self.settings.default_watering_frequency,
                default_fertilizing_frequency=self.settings.default_fertilizing_frequency,
            ),
        )

    # ── User ──────────────────────────────────────────────────────────────────

    def get_user(self) -> User | None:
        return self.storage.user.get()

    def update_preferences(self, data: dict) -> User | None:
        user = self.get_user()
        if not user:
            return None
        preferences = UserPreferences.model_validate({**user.preferences.model_dump(), **data})
        user = user.model_copy(update={"preferences": preferences})
        self.storage.user.set(user)
        logger.info(f"Updated preferences for user {user.id}")
        return user

    # ── Sites ─────────────────────────────────────────────────────────────────

    def list_sites(self) -> list[Site]:
        return self.storage.sites.get() or []

    def get_site(self, site_id: str) -> Site | None:
        for site in self.list_sites():
            if site.id == site_id:
                return site
        return None

    def create_site(self, data: dict) -> Site:
        now = self.now()
        site = Site(**data, created_at=now, updated_at=now)
        sites = self.list_sites()
        sites.append(site)
        self.storage.sites.set(sites)
        logger.info(f"Created site: {site.id} ({site.name})")
        return site

    def update_site(self, site_id: str, data: dict) -> Site | None:
        sites = self.list_sites()
        for i, site in enumerate(sites):
            if site.id == site_id:
                updated = Site.model_validate({
                    **site.model_dump(),
                    **data,
                    "updated_at": self.now(),
                })
                sites[i] = updated
                self.storage.sites.set(sites)
                return updated
        return None

    # ── Plants ────────────────────────────────────────────────────────────────

    def list_plants(self) -> list[Plant]:
        return [plant for site in self.list_sites() for plant in site.plants]

    def find_plant(self, plant_id: str) -> tuple[Site, Plant] | None:
        for site in self.list_sites():
            for plant in site.plants:
                if plant.id == plant_id:
                    return site, plant
        return None

    def get_plant(self, plant_id: str) -> Plant | None:
        found = self.find_plant(plant_id)
        return found[1] if found else None

    def default_schedules(self, species: str | None) -> tuple[CareSchedule, CareSchedule]:
        """Preset for the species, else the user's preferred frequencies."""
        schedules = self.presets.get_schedules(species)
        if schedules:
            return schedules
        user = self.get_user()
        if user:
            prefs = user.preferences
            watering, fertilizing = prefs.default_watering_frequency, prefs.default_fertilizing_frequency
        else:
            watering = self.settings.default_watering_frequency
            fertilizing = self.settings.default_fertilizing_frequency
        return CareSchedule(frequency_days=watering), CareSchedule(frequency_days=fertilizing)

    def add_plant(self, site_id: str, data: dict) -> Plant | None:
        sites = self.list_sites()
        site_index = next((i for i, s in enumerate(sites) if s.id == site_id), None)
        if site_index is None:
            return None

        data = dict(data)
        data.pop("site_id", None)
        if data.get("watering_schedule") is None or data.get("fertilizing_schedule") is None:
            watering, fertilizing = self.default_schedules(data.get("species"))
            if data.get("watering_schedule") is None:
                data["watering_schedule"] = watering
            if data.get("fertilizing_schedule") is None:
                data["fertilizing_schedule"] = fertilizing

        now = self.now()
        plant = Plant(**data, site_id=site_id, created_at=now, updated_at=now)
        site = sites[site_index]
        sites[site_index] = site.model_copy(update={"plants": [*site.plants, plant], "updated_at": now})
        self.storage.sites.set(sites)
        logger.info(f"Added plant {plant.id} ({plant.name}) to site {site_id}")
        return plant

    def update_plant(self, plant_id: str, data: dict) -> Plant | None:
        """Update a plant in place. A changed ``site_id`` moves it to that site."""
        sites = self.list_sites()
        found = next(
            ((i, j) for i, s in enumerate(sites) for j, p in enumerate(s.plants) if p.id == plant_id),
            None,
        )
        if found is None:
            return None
        site_index, plant_index = found
        site = sites[site_index]
        now = self.now()

        updated = Plant.model_validate({
            **site.plants[plant_index].model_dump(),
            **data,
            "updated_at": now,
        })

        if updated.site_id == site.id:
            plants = list(site.plants)
            plants[plant_index] = updated
            sites[site_index] = site.model_copy(update={"plants": plants})
        else:
            target_index = next((i for i, s in enumerate(sites) if s.id == updated.site_id), None)
            if target_index is None:
                raise ValueError(f"Unknown site: {updated.site_id}")
            remaining = [p for p in site.plants if p.id != plant_id]
            sites[site_index] = site.model_copy(update={"plants": remaining, "updated_at": now})
            target = sites[target_index]
            sites[target_index] = target.model_copy(update={"plants": [*target.plants, updated], "updated_at": now})
            logger.info(f"Moved plant {plant_id} from site {site.id} to {updated.site_id}")

        self.storage.sites.set(sites)
        return updated

    # ── Care logs ─────────────────────────────────────────────────────────────

    def record_care(
        self,
        plant_id: str,
        care_type: CareType,
        when: datetime | None = None,
        notes: str | None = None,
        amount: str | None = None,
    ) -> CareLog | None:
        """Log a watering or fertilizing and move the plant's last-care date forward."""
        plant = self.get_plant(plant_id)
        if not plant:
            return None
        when = self.localize(when) if when else self.now()

        field = "last_watered" if care_type is CareType.WATER else "last_fertilized"
        current = getattr(plant, field)
        # A back-dated entry never rewinds a more recent last-care date
        if current is None or when >= self.localize(current):
            self.update_plant(plant_id, {field: when})

        log = CareLog(plant_id=plant_id, type=care_type, date=when, notes=notes, amount=amount)
        logs = self.storage.care_logs.get() or []
        logs.append(log)
        self.storage.care_logs.set(logs)
        logger.info(f"Recorded {care_type.value} for plant {plant_id}")
        return log

    def get_care_logs(self, plant_id: str | None = None) -> list[CareLog]:
        logs = self.storage.care_logs.get() or []
        if plant_id is not None:
            logs = [log for log in logs if log.plant_id == plant_id]
        return sorted(logs, key=lambda log: log.date, reverse=True)

    # ── Care queries ──────────────────────────────────────────────────────────

    def plants_needing_care(self) -> list[PlantWithCareNeeds]:
        return plants_needing_care(self.list_sites(), self.now())

    def plants_needing_care_count(self) -> int:
        return plants_needing_care_count(self.list_sites(), self.now())

    def care_status(self, plant_id: str) -> CareStatus | None:
        plant = self.get_plant(plant_id)
        if not plant:
            return None
        return care_status(plant, self.now())

    def snapshot(self) -> AppState:
        """The full persisted state, as a client would load it at startup."""
        return AppState(
            user=self.get_user(),
            sites=self.list_sites(),
            care_logs=self.storage.care_logs.get() or [],
        )
