"""Chart engine - calculate_chart() entry point."""

from __future__ import annotations

import logging
from datetime import datetime

from aeonis.schemas.chart import (
    ArabicPart,
    ChartData,
    Location,
    Planet,
    PlanetCondition,
    PlanetPosition,
    Sect,
)

from astrocore.bodies import (
    EPHEMERIS_BODIES,
    angular_distance,
    ascendant_longitude,
    julian_centuries,
    longitude_to_sign,
    normalize_longitude,
    obliquity_of_ecliptic,
)
from astrocore.dignities import calculate_dignities
from astrocore.provider import (
    FALLBACK_SUNRISE,
    FALLBACK_SUNSET,
    EphemerisError,
    EphemerisProvider,
    daily_speed,
    default_location,
    get_default_provider,
    observer_time,
    to_utc,
)

logger = logging.getLogger(__name__)

CAZIMI_ORB = 17.0 / 60.0
COMBUST_ORB = 8.0
UNDER_BEAMS_ORB = 17.0

# Mean motions of the calculated points, degrees/day
NODE_SPEED = -0.053
LILITH_SPEED = 0.11


def mean_lunar_node(julian_day: float) -> float:
    """Mean longitude of the Moon's ascending node."""
    t = julian_centuries(julian_day)
    omega = 125.04452 - 1934.136261 * t + 0.0020708 * t**2 + t**3 / 450000.0
    return normalize_longitude(omega)


def mean_lilith(julian_day: float) -> float:
    """Mean Black Moon Lilith (mean lunar apogee)."""
    t = julian_centuries(julian_day)
    lilith = 83.3532465 + 4069.0137287 * t - 0.0103200 * t**2 - t**3 / 80053.0
    return normalize_longitude(lilith)


def build_position(
    planet: Planet,
    longitude: float,
    latitude: float = 0.0,
    speed: float = 0.0,
    azimuth: float | None = None,
    altitude: float | None = None,
) -> PlanetPosition:
    """Assemble a PlanetPosition, deriving sign placement from longitude."""
    longitude = normalize_longitude(longitude)
    sign, degree, minute, second = longitude_to_sign(longitude)
    return PlanetPosition(
        planet=planet,
        longitude=longitude,
        latitude=latitude,
        sign=sign,
        sign_degree=degree,
        sign_minute=minute,
        sign_second=second,
        is_retrograde=speed < 0,
        speed=speed,
        azimuth=azimuth,
        altitude=altitude,
    )


def calculate_condition(
    planet: Planet,
    longitude: float,
    sun_longitude: float,
    speed: float,
) -> PlanetCondition:
    """Retrograde state and solar proximity (cazimi, combust, under the beams)."""
    if planet == Planet.SUN:
        return PlanetCondition()

    distance = angular_distance(longitude, sun_longitude)
    is_cazimi = distance <= CAZIMI_ORB
    is_combust = not is_cazimi and distance <= COMBUST_ORB
    return PlanetCondition(
        is_retrograde=speed < 0,
        is_combust=is_combust,
        is_cazimi=is_cazimi,
        is_under_beams=not is_cazimi and not is_combust and distance <= UNDER_BEAMS_ORB,
    )


def _body_position(
    provider: EphemerisProvider,
    planet: Planet,
    instant: datetime,
    location: Location,
    warnings: list[str],
) -> PlanetPosition:
    try:
        longitude, latitude = provider.position(planet, instant)
        speed = daily_speed(provider, planet, instant)
    except EphemerisError as exc:
        logger.warning("Using zero position for %s: %s", planet.value, exc)
        warnings.append(f"{planet.value} position unavailable, substituted 0 Aries")
        return build_position(planet, 0.0)

    try:
        azimuth, altitude = provider.horizontal(planet, instant, location)
    except EphemerisError as exc:
        logger.warning("Horizontal coordinates unavailable for %s: %s", planet.value, exc)
        warnings.append(f"{planet.value} azimuth/altitude unavailable")
        azimuth = altitude = None

    return build_position(planet, longitude, latitude, speed, azimuth, altitude)


def _sect(sun: PlanetPosition, instant: datetime, location: Location, warnings: list[str]) -> Sect:
    if sun.altitude is not None:
        return Sect.DAY if sun.altitude >= 0 else Sect.NIGHT
    # No solar altitude: treat the fixed sunrise/sunset window as daytime
    clock = observer_time(instant, location).time()
    warnings.append("Sun altitude unavailable, sect taken from 06:00-18:00 clock")
    return Sect.DAY if FALLBACK_SUNRISE <= clock < FALLBACK_SUNSET else Sect.NIGHT


def _arabic_part(name: str, longitude: float) -> ArabicPart:
    longitude = normalize_longitude(longitude)
    sign, degree, _, _ = longitude_to_sign(longitude)
    return ArabicPart(name=name, longitude=longitude, sign=sign, sign_degree=degree)


def calculate_chart(
    instant: datetime,
    location: Location | None = None,
    provider: EphemerisProvider | None = None,
) -> ChartData:
    """Calculate a complete chart snapshot.

    Args:
        instant: Moment of the chart; naive datetimes are taken as UTC
        location: Observer location, defaults to DEFAULT_LATITUDE / DEFAULT_LONGITUDE
        provider: Ephemeris source, defaults to the shared Swiss Ephemeris adapter

    Returns:
        ChartData with 13 positions, dignities, conditions and Arabic parts.
        Bodies the ephemeris cannot resolve degrade to documented fallbacks
        listed in ``warnings``.
    """
    if provider is None:
        provider = get_default_provider()
    if location is None:
        location = default_location()

    warnings: list[str] = []
    jd = provider.julian_day(instant)

    planets = [_body_position(provider, planet, instant, location, warnings) for planet in EPHEMERIS_BODIES]

    node = mean_lunar_node(jd)
    planets.append(build_position(Planet.NORTH_NODE, node, speed=NODE_SPEED))
    planets.append(build_position(Planet.SOUTH_NODE, node + 180.0, speed=NODE_SPEED))
    planets.append(build_position(Planet.LILITH, mean_lilith(jd), speed=LILITH_SPEED))

    sun = planets[0]
    moon = planets[1]
    sect = _sect(sun, instant, location, warnings)

    dignities = {pos.planet: calculate_dignities(pos.planet, pos.sign, pos.sign_degree, sect) for pos in planets}
    conditions = {
        pos.planet: calculate_condition(pos.planet, pos.longitude, sun.longitude, pos.speed) for pos in planets
    }

    local_sidereal_time = (provider.sidereal_time(instant) + location.longitude / 15.0) % 24.0
    if local_sidereal_time >= 24.0:
        local_sidereal_time = 0.0
    ascendant = ascendant_longitude(local_sidereal_time * 15.0, location.latitude, obliquity_of_ecliptic(jd))

    if sect == Sect.DAY:
        fortune = ascendant + moon.longitude - sun.longitude
        spirit = ascendant + sun.longitude - moon.longitude
    else:
        fortune = ascendant + sun.longitude - moon.longitude
        spirit = ascendant + moon.longitude - sun.longitude
    arabic_parts = [
        _arabic_part("Part of Fortune", fortune),
        _arabic_part("Part of Spirit", spirit),
    ]

    logger.debug(
        "Chart at JD %.5f: %s sect, Sun %s %d, Moon %s %d, ASC %.2f",
        jd,
        sect.value,
        sun.sign.value,
        sun.sign_degree,
        moon.sign.value,
        moon.sign_degree,
        ascendant,
    )

    return ChartData(
        timestamp=to_utc(instant),
        location=location,
        sect=sect,
        planets=planets,
        dignities=dignities,
        conditions=conditions,
        arabic_parts=arabic_parts,
        ascendant=ascendant,
        julian_day=jd,
        local_sidereal_time=local_sidereal_time,
        warnings=warnings,
    )
