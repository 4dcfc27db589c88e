"""Application configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for the astrological core loaded from environment variables."""

    # Ephemeris
    swisseph_ephe_path: str = Field(default="", alias="SWISSEPH_EPHE_PATH")

    # Observer used when the caller has no location yet (Berlin)
    default_latitude: float = Field(default=52.52, ge=-90.0, le=90.0, alias="DEFAULT_LATITUDE")
    default_longitude: float = Field(default=13.405, ge=-180.0, le=180.0, alias="DEFAULT_LONGITUDE")

    # Aspects
    aspect_max_orb: float = Field(default=3.0, gt=0.0, alias="ASPECT_MAX_ORB")
    exact_aspect_orb: float = Field(default=8.0, gt=0.0, alias="EXACT_ASPECT_ORB")

    # Event horizon
    event_horizon_years: int = Field(default=5, ge=1, alias="EVENT_HORIZON_YEARS")

    # Potency
    stasis_window_minutes: int = Field(default=60, ge=0, alias="STASIS_WINDOW_MINUTES")
    gnosis_window_hours: int = Field(default=6, ge=0, alias="GNOSIS_WINDOW_HOURS")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (useful in tests)."""
    get_settings.cache_clear()
