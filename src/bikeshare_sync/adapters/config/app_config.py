"""12-factor configuration adapter using environment variables and an optional .env file."""

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Files
    data_dir: str = Field(
        default="data_results", description="Directory holding one sub-directory per system"
    )
    systems_file: str = Field(
        default="bikeshare_systems.json", description="JSON list of configured bike-share systems"
    )

    # GBFS feed
    gbfs_timeout_seconds: int = Field(
        default=30, description="Timeout for GBFS feed requests in seconds"
    )

    # Overpass API
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="Overpass API interpreter endpoint",
    )
    overpass_timeout_seconds: int = Field(
        default=180, description="Timeout for Overpass queries in seconds"
    )
    overpass_min_delay_seconds: float = Field(
        default=1.0, description="Minimum delay between Overpass requests in seconds"
    )

    # MapRoulette API
    maproulette_api_url: str = Field(
        default="https://maproulette.org/api/v2", description="MapRoulette API base URL"
    )
    maproulette_api_key: str | None = Field(
        default=None, description="MapRoulette API key (MAPROULETTE_API_KEY)"
    )
    maproulette_task_delay_seconds: float = Field(
        default=0.1, description="Delay between task uploads in seconds"
    )

    # Git
    git_executable: str = Field(default="git", description="git binary used to read history")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_requests: bool = Field(
        default=False,
        validation_alias=AliasChoices("log_requests", "bikeshare_log_requests"),
        description="Log outgoing API requests (BIKESHARE_LOG_REQUESTS)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @field_validator("overpass_min_delay_seconds", "maproulette_task_delay_seconds")
    @classmethod
    def validate_delay(cls, v: float) -> float:
        """Validate delays are not negative."""
        if v < 0:
            raise ValueError("delays must be >= 0")
        return v
