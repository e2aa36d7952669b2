"""PlantKeeper configuration using Pydantic Settings."""

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage
    database_url: str = "sqlite:///plantkeeper.db"

    # Calendar zone used to decide what "today" is
    timezone: str = "UTC"

    # Defaults for a fresh install
    default_user_name: str = "Plant Lover"
    default_watering_frequency: int = 7
    default_fertilizing_frequency: int = 30

    # Care presets (defaults to the bundled knowledge directory)
    knowledge_dir: str | None = None

    # General
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {
        "env_file": ".env",
        "env_prefix": "PLANTKEEPER_",
        "extra": "ignore",
    }

    def get_tzinfo(self) -> tzinfo:
        """Return the configured calendar zone."""
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
