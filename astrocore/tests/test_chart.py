"""Tests for the chart engine."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from aeonis.config import reset_settings_cache
from aeonis.schemas.chart import Location, Planet, PlanetCondition, Sect, ZodiacSign
from fakes import DEFAULT_MOTION, EPOCH, FakeEphemeris

from astrocore.bodies import J2000, normalize_longitude
from astrocore.chart import (
    LILITH_SPEED,
    NODE_SPEED,
    calculate_chart,
    calculate_condition,
    mean_lilith,
    mean_lunar_node,
)
from astrocore.provider import SwissEphemeris


def test_chart_has_thirteen_positions(fake_ephemeris, berlin):
    chart = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)

    assert len(chart.planets) == 13
    assert [p.planet for p in chart.planets] == list(Planet)
    for pos in chart.planets:
        assert 0.0 <= pos.longitude < 360.0
        assert 0 <= pos.sign_degree < 30
    assert set(chart.dignities) == set(Planet)
    assert set(chart.conditions) == set(Planet)
    assert chart.warnings == []


def test_chart_is_deterministic(fake_ephemeris, berlin):
    first = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)
    second = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_fake_positions_flow_into_chart(fake_ephemeris, berlin):
    chart = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)

    sun = chart.position(Planet.SUN)
    assert sun.longitude == pytest.approx(280.0)
    assert sun.sign == ZodiacSign.CAPRICORN
    assert sun.sign_degree == 10
    assert sun.speed == pytest.approx(1.0)
    assert sun.is_retrograde is False
    assert sun.azimuth == 180.0
    assert sun.altitude == 10.0


def test_sun_condition_is_always_clear(berlin):
    # Every body sitting on the Sun would be cazimi
    tracks = {planet: (lambda days: 123.0) for planet in DEFAULT_MOTION}
    chart = calculate_chart(EPOCH, berlin, provider=FakeEphemeris(tracks=tracks))

    assert chart.conditions[Planet.SUN] == PlanetCondition(
        is_retrograde=False, is_combust=False, is_cazimi=False, is_under_beams=False
    )
    assert chart.conditions[Planet.MERCURY].is_cazimi is True


def test_sun_condition_explicit_rule():
    assert calculate_condition(Planet.SUN, 10.0, 10.0, -1.0) == PlanetCondition()


@pytest.mark.parametrize(
    ("distance", "cazimi", "combust", "beams"),
    [
        (0.2, True, False, False),
        (0.28, True, False, False),
        (0.3, False, True, False),
        (8.0, False, True, False),
        (8.1, False, False, True),
        (17.0, False, False, True),
        (17.1, False, False, False),
    ],
)
def test_solar_proximity(distance, cazimi, combust, beams):
    condition = calculate_condition(Planet.VENUS, normalize_longitude(355.0 + distance), 355.0, 1.2)
    assert condition.is_cazimi is cazimi
    assert condition.is_combust is combust
    assert condition.is_under_beams is beams
    assert condition.is_retrograde is False


def test_retrograde_from_negative_speed():
    assert calculate_condition(Planet.MERCURY, 100.0, 200.0, -0.4).is_retrograde is True


def test_calculated_points(fake_ephemeris, berlin):
    chart = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)
    north = chart.position(Planet.NORTH_NODE)
    south = chart.position(Planet.SOUTH_NODE)
    lilith = chart.position(Planet.LILITH)

    assert north.speed == NODE_SPEED
    assert north.is_retrograde is True
    assert south.is_retrograde is True
    assert normalize_longitude(south.longitude - north.longitude) == pytest.approx(180.0)
    assert lilith.speed == LILITH_SPEED
    assert lilith.is_retrograde is False
    for pos in (north, south, lilith):
        assert pos.azimuth is None
        assert pos.altitude is None
        assert chart.dignities[pos.planet].peregrine is True


def test_mean_points_at_j2000():
    assert mean_lunar_node(J2000) == pytest.approx(125.04452)
    assert mean_lilith(J2000) == pytest.approx(83.3532465)


@pytest.mark.parametrize(("altitude", "sect"), [(10.0, Sect.DAY), (0.0, Sect.DAY), (-0.5, Sect.NIGHT)])
def test_sect_from_sun_altitude(berlin, altitude, sect):
    provider = FakeEphemeris(altitudes={Planet.SUN: altitude})
    assert calculate_chart(EPOCH, berlin, provider=provider).sect == sect


@pytest.mark.parametrize("altitude", [10.0, -10.0])
def test_arabic_parts_follow_sect(berlin, altitude):
    chart = calculate_chart(EPOCH, berlin, provider=FakeEphemeris(altitudes={Planet.SUN: altitude}))
    sun = chart.position(Planet.SUN).longitude
    moon = chart.position(Planet.MOON).longitude
    fortune, spirit = chart.arabic_parts

    assert fortune.name == "Part of Fortune"
    assert spirit.name == "Part of Spirit"
    if chart.sect == Sect.DAY:
        assert fortune.longitude == pytest.approx(normalize_longitude(chart.ascendant + moon - sun))
        assert spirit.longitude == pytest.approx(normalize_longitude(chart.ascendant + sun - moon))
    else:
        assert fortune.longitude == pytest.approx(normalize_longitude(chart.ascendant + sun - moon))
        assert spirit.longitude == pytest.approx(normalize_longitude(chart.ascendant + moon - sun))


def test_local_sidereal_time_is_normalized():
    provider = FakeEphemeris(sidereal_hours=23.5)
    chart = calculate_chart(EPOCH, Location(latitude=0.0, longitude=179.0), provider=provider)
    assert chart.local_sidereal_time == pytest.approx((23.5 + 179.0 / 15.0) % 24.0)
    assert 0.0 <= chart.local_sidereal_time < 24.0


def test_unresolved_body_degrades_to_warning(berlin, caplog):
    provider = FakeEphemeris(failing={Planet.PLUTO})
    with caplog.at_level("WARNING"):
        chart = calculate_chart(EPOCH, berlin, provider=provider)

    pluto = chart.position(Planet.PLUTO)
    assert pluto.longitude == 0.0
    assert pluto.speed == 0.0
    assert len(chart.planets) == 13
    assert any("Pluto" in w for w in chart.warnings)
    assert "Pluto" in caplog.text


def test_unresolved_sun_uses_clock_sect(berlin):
    provider = FakeEphemeris(failing={Planet.SUN})
    noon = datetime(2026, 1, 1, 12, tzinfo=UTC)
    midnight = datetime(2026, 1, 1, 0, tzinfo=UTC)

    assert calculate_chart(noon, berlin, provider=provider).sect == Sect.DAY
    assert calculate_chart(midnight, berlin, provider=provider).sect == Sect.NIGHT


def test_clock_sect_reads_observer_local_time():
    provider = FakeEphemeris(failing={Planet.SUN})
    tokyo = Location(latitude=35.68, longitude=139.69)
    # Midnight UTC is 09:18 local mean time in Tokyo
    midnight = datetime(2026, 1, 1, 0, tzinfo=UTC)
    assert calculate_chart(midnight, tokyo, provider=provider).sect == Sect.DAY


def test_default_location_from_settings(fake_ephemeris, monkeypatch):
    monkeypatch.setenv("DEFAULT_LATITUDE", "-33.87")
    monkeypatch.setenv("DEFAULT_LONGITUDE", "151.21")
    reset_settings_cache()

    chart = calculate_chart(EPOCH, provider=fake_ephemeris)
    assert chart.location == Location(latitude=-33.87, longitude=151.21)


def test_naive_instant_is_utc(fake_ephemeris, berlin):
    naive = calculate_chart(datetime(2026, 1, 1), berlin, provider=fake_ephemeris)
    aware = calculate_chart(EPOCH, berlin, provider=fake_ephemeris)
    assert naive.timestamp == aware.timestamp
    assert naive.julian_day == aware.julian_day


def test_chart_with_swiss_ephemeris(berlin):
    chart = calculate_chart(datetime(2024, 6, 21, 12, tzinfo=UTC), berlin, provider=SwissEphemeris())

    sun = chart.position(Planet.SUN)
    assert sun.sign == ZodiacSign.CANCER
    assert sun.sign_degree == 0
    assert 0.9 < sun.speed < 1.0
    assert chart.sect == Sect.DAY
    assert chart.dignities[Planet.SUN].peregrine is True
    assert chart.conditions[Planet.SUN] == PlanetCondition()
    assert chart.warnings == []
