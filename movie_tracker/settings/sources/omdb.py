"""OMDb API configuration settings.

REST API used to look up movie metadata by IMDb id or title.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OMDbSettings(BaseSettings):
    """OMDb API configuration.

    Attributes:
        api_key: OMDb API key (required for lookups).
        base_url: OMDb API base URL.
        timeout: HTTP timeout in seconds.
        max_retries: Attempts for timeouts and rate-limited requests.
        plot: Plot length requested ('short' or 'full').
    """

    api_key: str = Field(default="", alias="OMDB_API_KEY")
    base_url: str = Field(default="https://www.omdbapi.com/", alias="OMDB_BASE_URL")
    timeout: float = Field(default=10.0, alias="OMDB_TIMEOUT")
    max_retries: int = Field(default=3, alias="OMDB_MAX_RETRIES")
    plot: str = Field(default="short", alias="OMDB_PLOT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if OMDb API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")

    @field_validator("plot")
    @classmethod
    def validate_plot(cls, v: str) -> str:
        """Validate plot length value."""
        v_lower = v.lower()
        if v_lower not in {"short", "full"}:
            raise ValueError("OMDB_PLOT must be 'short' or 'full'")
        return v_lower

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate at least one attempt is made."""
        if v < 1:
            raise ValueError("OMDB_MAX_RETRIES must be >= 1")
        return v
