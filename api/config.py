"""Configuration management for the segment codec API service.

Settings are loaded with pydantic-settings from environment variables
(and an optional ``.env`` file), with defaults suitable for local use.

Example:
    >>> from api.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    Segment Codec Service
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Environment variables use uppercase names matching the attribute names.

    Attributes:
        app_name: Name of the application for OpenAPI docs.
        app_version: API version string.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        max_duration_sec: Maximum accepted upload duration in seconds.
        max_channels: Maximum accepted channel count.
        output_subtype: PCM subtype of the WAV files returned.
        batch_size: Segments assembled between cooperative yields.
        default_interval_sec: Interval used when a request omits one.
        default_parts: Part count used for split when a request omits one.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Segment Codec Service"
    app_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Audio settings
    max_duration_sec: float = Field(default=600.0, gt=0)
    max_channels: int = Field(default=8, ge=1)
    output_subtype: Literal["PCM_16", "PCM_24", "FLOAT"] = "PCM_16"

    # Codec settings
    batch_size: int = Field(default=50, ge=1)
    default_interval_sec: float = Field(default=1.0, ge=0.001, le=10.0)
    default_parts: int = Field(default=2, ge=2, le=10)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
