"""Planet definitions, sign data and longitude arithmetic."""

from __future__ import annotations

import math

from aeonis.schemas.chart import Planet, ZodiacSign

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0

# Bodies resolved through the ephemeris provider
EPHEMERIS_BODIES: list[Planet] = [
    Planet.SUN,
    Planet.MOON,
    Planet.MERCURY,
    Planet.VENUS,
    Planet.MARS,
    Planet.JUPITER,
    Planet.SATURN,
    Planet.URANUS,
    Planet.NEPTUNE,
    Planet.PLUTO,
]

CLASSICAL_PLANETS: list[Planet] = EPHEMERIS_BODIES[:7]

# Calculated points: no dignities, no aspects
POINTS = frozenset({Planet.NORTH_NODE, Planet.SOUTH_NODE, Planet.LILITH})

# Zodiac signs in order
SIGNS: list[ZodiacSign] = list(ZodiacSign)

# Planetary hour sequence, slowest to fastest
CHALDEAN_ORDER: list[Planet] = [
    Planet.SATURN,
    Planet.JUPITER,
    Planet.MARS,
    Planet.SUN,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
]

# Weekday rulers, Monday first to match datetime.weekday()
WEEKDAY_RULERS: list[Planet] = [
    Planet.MOON,
    Planet.MARS,
    Planet.MERCURY,
    Planet.JUPITER,
    Planet.VENUS,
    Planet.SATURN,
    Planet.SUN,
]

BENEFICS = (Planet.JUPITER, Planet.VENUS)
MALEFICS = (Planet.SATURN, Planet.MARS)

PLANET_SYMBOLS: dict[Planet, str] = {
    Planet.SUN: "☉",
    Planet.MOON: "☽",
    Planet.MERCURY: "☿",
    Planet.VENUS: "♀",
    Planet.MARS: "♂",
    Planet.JUPITER: "♃",
    Planet.SATURN: "♄",
    Planet.URANUS: "♅",
    Planet.NEPTUNE: "♆",
    Planet.PLUTO: "♇",
    Planet.NORTH_NODE: "☊",
    Planet.SOUTH_NODE: "☋",
    Planet.LILITH: "⚸",
}

PLANET_COLORS: dict[Planet, str] = {
    Planet.SUN: "#D4AF37",
    Planet.MOON: "#C0C0C0",
    Planet.MERCURY: "#A0A0A0",
    Planet.VENUS: "#22C55E",
    Planet.MARS: "#EF4444",
    Planet.JUPITER: "#3B82F6",
    Planet.SATURN: "#6B7280",
    Planet.URANUS: "#06B6D4",
    Planet.NEPTUNE: "#8B5CF6",
    Planet.PLUTO: "#1F2937",
    Planet.NORTH_NODE: "#D4AF37",
    Planet.SOUTH_NODE: "#6B6B6B",
    Planet.LILITH: "#4B0082",
}


def normalize_longitude(longitude: float) -> float:
    """Fold any angle into [0, 360)."""
    normalized = longitude % 360.0
    # -1e-17 % 360.0 == 360.0 in floating point
    if normalized >= 360.0:
        normalized = 0.0
    return normalized


def longitude_to_sign(longitude: float) -> tuple[ZodiacSign, int, int, int]:
    """Convert ecliptic longitude to (sign, degree, minute, second) within sign.

    Components are truncated, never rounded, so a longitude just short of a
    cusp always stays in the earlier sign.
    """
    longitude = normalize_longitude(longitude)
    sign_index = min(int(longitude // 30.0), 11)
    in_sign = longitude - sign_index * 30.0
    degree = min(int(math.floor(in_sign)), 29)
    minute_float = (in_sign - degree) * 60.0
    minute = min(int(math.floor(minute_float)), 59)
    second = min(int(math.floor((minute_float - minute) * 60.0)), 59)
    return SIGNS[sign_index], degree, minute, second


def sign_index(sign: ZodiacSign) -> int:
    return SIGNS.index(sign)


def angular_distance(lon1: float, lon2: float) -> float:
    """Calculate the shortest angular distance between two longitudes."""
    diff = abs(lon1 - lon2) % 360.0
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def julian_centuries(julian_day: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (julian_day - J2000) / DAYS_PER_CENTURY


def obliquity_of_ecliptic(julian_day: float) -> float:
    """Mean obliquity of the ecliptic in degrees (linear term only)."""
    t = julian_centuries(julian_day)
    return 23.439291 - 0.0130042 * t


def ascendant_longitude(lst_degrees: float, latitude: float, obliquity: float) -> float:
    """Ecliptic longitude rising on the eastern horizon.

    Args:
        lst_degrees: Local sidereal time expressed in degrees
        latitude: Geographic latitude of the observer in degrees
        obliquity: Obliquity of the ecliptic in degrees
    """
    lst = math.radians(normalize_longitude(lst_degrees))
    eps = math.radians(obliquity)
    phi = math.radians(latitude)
    y = math.cos(lst)
    x = -(math.sin(eps) * math.tan(phi) + math.cos(eps) * math.sin(lst))
    return normalize_longitude(math.degrees(math.atan2(y, x)))
