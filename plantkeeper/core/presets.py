"""PlantKeeper Care Presets - loads species care defaults from YAML files."""

import logging
from pathlib import Path

import yaml

from plantkeeper.models.garden import CareSchedule

logger = logging.getLogger("plantkeeper.presets")

_DEFAULT_KNOWLEDGE_DIR = Path(__file__).parent.parent / "knowledge"


def _schedules_from(data: dict) -> tuple[CareSchedule, CareSchedule]:
    watering = data.get("watering") or {}
    fertilizing = data.get("fertilizing") or {}
    if not isinstance(watering, dict) or not isinstance(fertilizing, dict):
        raise ValueError("'watering' and 'fertilizing' must be mappings")
    return (
        CareSchedule(
            frequency_days=watering.get("frequency_days", 7),
            notes=watering.get("notes"),
        ),
        CareSchedule(
            frequency_days=fertilizing.get("frequency_days", 30),
            is_active=fertilizing.get("active", True),
            notes=fertilizing.get("notes"),
        ),
    )


class CarePresets:
    """Loads and queries per-species watering and fertilizing defaults."""

    def __init__(self, knowledge_dir: str | Path | None = None):
        self.knowledge_dir = Path(knowledge_dir) if knowledge_dir else _DEFAULT_KNOWLEDGE_DIR
        self._presets: dict[str, dict] = {}
        self._schedules: dict[str, tuple[CareSchedule, CareSchedule]] = {}
        self._aliases: dict[str, str] = {}
        self._load_all()

    def _load_all(self) -> None:
        """Load every preset file under ``presets/``. Malformed files are logged and skipped."""
        presets_dir = self.knowledge_dir / "presets"
        if presets_dir.exists():
            for path in sorted(presets_dir.glob("*.yaml")):
                try:
                    data = yaml.safe_load(path.read_text())
                    if not isinstance(data, dict) or not isinstance(data.get("species"), str):
                        logger.error(f"Skipping care preset without a species name: {path.name}")
                        continue
                    aliases = data.get("aliases") or []
                    if isinstance(aliases, str):
                        aliases = [aliases]
                    schedules = _schedules_from(data)
                    key = data["species"].lower()
                    self._presets[key] = data
                    self._schedules[key] = schedules
                    for alias in aliases:
                        self._aliases[str(alias).lower()] = key
                    logger.debug(f"Loaded care preset: {data['species']}")
                except Exception as e:
                    logger.error(f"Failed to load care preset {path}: {e}")

        logger.info(f"Care presets loaded: {len(self._presets)} species")

    def _key(self, species: str | None) -> str | None:
        if not species:
            return None
        key = species.strip().lower()
        return self._aliases.get(key, key)

    def get_supported_species(self) -> list[str]:
        return [p["species"] for p in self._presets.values()]

    def get_preset(self, species: str | None) -> dict | None:
        """Case-insensitive lookup by species name or alias."""
        key = self._key(species)
        return self._presets.get(key) if key else None

    def get_schedules(self, species: str | None) -> tuple[CareSchedule, CareSchedule] | None:
        """Return ``(watering, fertilizing)`` schedules for a species, if known."""
        key = self._key(species)
        return self._schedules.get(key) if key else None
