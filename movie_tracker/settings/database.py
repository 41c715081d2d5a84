"""Database configuration settings.

SQLite by default; any SQLAlchemy URL can be supplied via DATABASE_URL.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from movie_tracker.settings.base import resolve_path


class DatabaseSettings(BaseSettings):
    """Movie database configuration.

    Attributes:
        url: Full SQLAlchemy connection URL (overrides sqlite_path).
        sqlite_path: SQLite file used when no URL is given.
        connect_timeout: Seconds to wait when acquiring a connection.
        pool_size: Pool size for server databases.
        pool_overflow: Extra connections allowed above pool_size.
    """

    url: str | None = Field(default=None, alias="DATABASE_URL")
    sqlite_path: str = Field(default="data/movies.db", alias="MOVIE_DB_PATH")
    connect_timeout: float = Field(default=10.0, alias="DB_CONNECT_TIMEOUT")

    # Pool settings
    pool_size: int = Field(default=5, alias="DB_POOL_SIZE")
    pool_overflow: int = Field(default=10, alias="DB_POOL_OVERFLOW")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("connect_timeout")
    @classmethod
    def validate_connect_timeout(cls, v: float) -> float:
        """Validate the timeout is positive."""
        if v <= 0:
            raise ValueError("DB_CONNECT_TIMEOUT must be > 0")
        return v

    @property
    def sqlite_file(self) -> Path:
        """Absolute path of the default SQLite database file."""
        return resolve_path(self.sqlite_path)

    @property
    def sync_url(self) -> str:
        """Connection URL used by the store."""
        if self.url:
            return self.url
        return f"sqlite:///{self.sqlite_file}"

    @property
    def is_file_sqlite(self) -> bool:
        """Check if the configured URL points at an on-disk SQLite file."""
        return is_file_sqlite_url(self.sync_url)


def is_file_sqlite_url(url: str) -> bool:
    """Check if a URL is a file-backed SQLite database.

    Args:
        url: SQLAlchemy URL string.

    Returns:
        True for sqlite URLs with a database file path.
    """
    parsed = make_url(url)
    database = parsed.database or ""
    return (
        parsed.get_backend_name() == "sqlite"
        and database not in ("", ":memory:")
        and not database.startswith("file:")
    )
