"""Shared fixtures for astrocore tests."""

from __future__ import annotations

import pytest
from aeonis.config import reset_settings_cache
from aeonis.schemas.chart import Location
from fakes import FakeEphemeris


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for name in (
        "ASPECT_MAX_ORB",
        "EXACT_ASPECT_ORB",
        "EVENT_HORIZON_YEARS",
        "STASIS_WINDOW_MINUTES",
        "GNOSIS_WINDOW_HOURS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def fake_ephemeris() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture
def berlin() -> Location:
    return Location(latitude=52.52, longitude=13.405)
