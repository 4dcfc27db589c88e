"""Integration test configuration."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from aeonis.config import reset_settings_cache
from aeonis.schemas.chart import Location

from astrocore.provider import SwissEphemeris

SETTINGS_ENV = (
    "SWISSEPH_EPHE_PATH",
    "DEFAULT_LATITUDE",
    "DEFAULT_LONGITUDE",
    "ASPECT_MAX_ORB",
    "EXACT_ASPECT_ORB",
    "EVENT_HORIZON_YEARS",
    "STASIS_WINDOW_MINUTES",
    "GNOSIS_WINDOW_HOURS",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def ephemeris():
    """Swiss Ephemeris adapter on the built-in Moshier theory."""
    return SwissEphemeris(ephe_path="")


@pytest.fixture
def berlin():
    return Location(latitude=52.52, longitude=13.405)


@pytest.fixture
def midsummer_noon():
    """Friday 2024-06-21, 12:00 Berlin summer time."""
    return datetime(2024, 6, 21, 12, tzinfo=ZoneInfo("Europe/Berlin"))
