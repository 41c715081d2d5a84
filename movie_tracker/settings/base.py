"""Project root detection and logging settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# movie_tracker/settings/base.py -> repository root
_PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_project_root() -> Path:
    """Directory relative paths in settings are resolved against."""
    return _PROJECT_ROOT


def resolve_path(value: str) -> Path:
    """Return ``value`` as an absolute path, anchored at the project root."""
    path = Path(value).expanduser()
    return path if path.is_absolute() else _PROJECT_ROOT / path


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        to_file: Also write dated log files under log_dir.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper

    @property
    def log_path(self) -> Path:
        """Absolute log directory."""
        return resolve_path(self.log_dir)
