"""Deterministic stand-ins for the ephemeris and hand-built charts."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from aeonis.schemas.chart import ChartData, EssentialDignity, Location, Planet, PlanetCondition, Sect
from aeonis.schemas.hours import PlanetaryHour, PlanetaryHourInfo

from astrocore.bodies import J2000, normalize_longitude
from astrocore.chart import build_position
from astrocore.provider import EphemerisError

EPOCH = datetime(2026, 1, 1, tzinfo=UTC)
_J2000_EPOCH = datetime(2000, 1, 1, 12, tzinfo=UTC)

# (longitude at EPOCH, degrees per day)
DEFAULT_MOTION: dict[Planet, tuple[float, float]] = {
    Planet.SUN: (280.0, 1.0),
    Planet.MOON: (40.0, 13.2),
    Planet.MERCURY: (270.0, 1.2),
    Planet.VENUS: (300.0, 1.25),
    Planet.MARS: (100.0, 0.5),
    Planet.JUPITER: (105.0, 0.08),
    Planet.SATURN: (355.0, 0.1),
    Planet.URANUS: (58.0, 0.02),
    Planet.NEPTUNE: (359.0, 0.01),
    Planet.PLUTO: (303.0, 0.005),
}


def _linear(start: float, speed: float) -> Callable[[float], float]:
    return lambda days: start + speed * days


class FakeEphemeris:
    """Deterministic EphemerisProvider: every body follows a track of days since EPOCH."""

    def __init__(
        self,
        tracks: dict[Planet, Callable[[float], float]] | None = None,
        altitudes: dict[Planet, float] | None = None,
        failing: set[Planet] | None = None,
        sidereal_hours: float = 0.0,
        sunrise: time = time(7, 0),
        sunset: time = time(19, 0),
        sun_times_fail: bool = False,
        solar_eclipses: list[tuple[datetime, str]] | None = None,
        lunar_eclipses: list[tuple[datetime, str]] | None = None,
        eclipse_search_fails: bool = False,
    ) -> None:
        self.tracks = {planet: _linear(*motion) for planet, motion in DEFAULT_MOTION.items()}
        self.tracks.update(tracks or {})
        self.altitudes = altitudes or {}
        self.failing = failing or set()
        self.sidereal_hours = sidereal_hours
        self.sunrise = sunrise
        self.sunset = sunset
        self.sun_times_fail = sun_times_fail
        self.solar_eclipses = sorted(solar_eclipses or [])
        self.lunar_eclipses = sorted(lunar_eclipses or [])
        self.eclipse_search_fails = eclipse_search_fails

    @staticmethod
    def _days(instant: datetime) -> float:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return (instant - EPOCH).total_seconds() / 86400.0

    def julian_day(self, instant: datetime) -> float:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return J2000 + (instant - _J2000_EPOCH).total_seconds() / 86400.0

    def sidereal_time(self, instant: datetime) -> float:
        return self.sidereal_hours

    def position(self, planet: Planet, instant: datetime) -> tuple[float, float]:
        if planet in self.failing:
            raise EphemerisError(f"{planet.value} unavailable")
        return normalize_longitude(self.tracks[planet](self._days(instant))), 0.0

    def horizontal(self, planet: Planet, instant: datetime, location: Location) -> tuple[float, float]:
        return 180.0, self.altitudes.get(planet, 10.0)

    def sunrise_sunset(self, day: date, location: Location, tz: tzinfo) -> tuple[datetime, datetime]:
        if self.sun_times_fail:
            raise EphemerisError("circumpolar")
        return datetime.combine(day, self.sunrise, tzinfo=tz), datetime.combine(day, self.sunset, tzinfo=tz)

    def moon_phase(self, instant: datetime) -> tuple[float, float]:
        sun, _ = self.position(Planet.SUN, instant)
        moon, _ = self.position(Planet.MOON, instant)
        angle = normalize_longitude(moon - sun)
        return angle, (1 - math.cos(math.radians(angle))) / 2

    def _next(self, eclipses: list[tuple[datetime, str]], after: datetime) -> tuple[datetime, str] | None:
        if self.eclipse_search_fails:
            raise EphemerisError("eclipse search failed")
        return next(((when, kind) for when, kind in eclipses if when > after), None)

    def next_solar_eclipse(self, after: datetime) -> tuple[datetime, str] | None:
        return self._next(self.solar_eclipses, after)

    def next_lunar_eclipse(self, after: datetime) -> tuple[datetime, str] | None:
        return self._next(self.lunar_eclipses, after)


def make_chart(
    longitudes: dict[Planet, float],
    scores: dict[Planet, int] | None = None,
    sect: Sect = Sect.DAY,
) -> ChartData:
    """Hand-built chart with chosen longitudes and dignity scores."""
    scores = scores or {}
    planets = [build_position(planet, lon) for planet, lon in longitudes.items()]
    return ChartData(
        timestamp=EPOCH,
        location=Location(latitude=52.52, longitude=13.405),
        sect=sect,
        planets=planets,
        dignities={
            p.planet: EssentialDignity(score=scores.get(p.planet, 0), peregrine=p.planet not in scores)
            for p in planets
        },
        conditions={p.planet: PlanetCondition() for p in planets},
        arabic_parts=[],
        ascendant=0.0,
        julian_day=J2000,
        local_sidereal_time=0.0,
    )


def make_hour_info(hour_planet: Planet, day_ruler: Planet) -> PlanetaryHourInfo:
    hour = PlanetaryHour(
        planet=hour_planet,
        start=EPOCH,
        end=EPOCH + timedelta(hours=1),
        hour_number=1,
        is_day_hour=True,
    )
    return PlanetaryHourInfo(current_hour=hour, day_ruler=day_ruler, all_hours=[hour])
