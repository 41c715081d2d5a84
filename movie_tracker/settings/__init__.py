"""Configuration for Movie Tracker.

Values come from environment variables or a ``.env`` file. Every setting
has a default that runs the tracker against a local SQLite file; OMDb
lookups additionally need OMDB_API_KEY.

Usage:
    from movie_tracker.settings import settings

    settings.database.sync_url
    settings.omdb.api_key
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from movie_tracker.settings.base import LoggingSettings
from movie_tracker.settings.database import DatabaseSettings
from movie_tracker.settings.sources import OMDbSettings

__all__ = [
    "Settings",
    "settings",
    "LoggingSettings",
    "DatabaseSettings",
    "OMDbSettings",
    "get_masked_settings",
]

_MASK = "***MASKED***"

# (section, field) pairs that may carry credentials
_SECRET_FIELDS = (
    ("omdb", "api_key"),
    ("database", "url"),
)


class Settings(BaseSettings):
    """Application settings, one attribute per configuration section."""

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    omdb: OMDbSettings = Field(default_factory=OMDbSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower


settings = Settings()


def get_masked_settings() -> dict[str, Any]:
    """Dump the settings with credentials replaced, for logging.

    Unset credentials are left as they are.
    """
    config = settings.model_dump()
    for section, key in _SECRET_FIELDS:
        if config.get(section, {}).get(key):
            config[section][key] = _MASK
    return config
