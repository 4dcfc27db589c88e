"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from aeonis.config import Settings, get_settings, reset_settings_cache


class TestSettingsDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.swisseph_ephe_path == ""
        assert s.default_latitude == 52.52
        assert s.default_longitude == 13.405
        assert s.aspect_max_orb == 3.0
        assert s.exact_aspect_orb == 8.0
        assert s.event_horizon_years == 5
        assert s.stasis_window_minutes == 60
        assert s.gnosis_window_hours == 6

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestSettingsFromEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ASPECT_MAX_ORB", "5.5")
        monkeypatch.setenv("EVENT_HORIZON_YEARS", "2")
        reset_settings_cache()
        s = get_settings()
        assert s.aspect_max_orb == 5.5
        assert s.event_horizon_years == 2
        assert s.exact_aspect_orb == 8.0  # unchanged default

    def test_reset_picks_up_changes(self, monkeypatch):
        before = get_settings()
        monkeypatch.setenv("GNOSIS_WINDOW_HOURS", "12")
        assert get_settings() is before
        reset_settings_cache()
        assert get_settings().gnosis_window_hours == 12

    def test_latitude_out_of_range(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_LATITUDE", "100")
        with pytest.raises(ValidationError):
            Settings()

    def test_orb_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("ASPECT_MAX_ORB", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_variables_are_ignored(self, monkeypatch):
        monkeypatch.setenv("SOME_OTHER_SERVICE_URL", "http://localhost")
        assert Settings().aspect_max_orb == 3.0
