"""Request-independent dependencies derived from settings."""

from audioio import AudioConfig

from .config import Settings, get_settings


def get_audio_config(settings: Settings | None = None) -> AudioConfig:
    """Audio limits and output format for the codec endpoints."""
    settings = settings or get_settings()
    return AudioConfig(
        max_duration_sec=settings.max_duration_sec,
        max_channels=settings.max_channels,
        output_subtype=settings.output_subtype,
    )
