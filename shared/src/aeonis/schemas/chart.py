"""Pydantic schemas for chart snapshots."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Planet(str, Enum):
    """Bodies and points tracked by the chart engine."""

    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"
    NORTH_NODE = "NorthNode"
    SOUTH_NODE = "SouthNode"
    LILITH = "Lilith"


class ZodiacSign(str, Enum):
    """Tropical signs in zodiacal order starting at Aries."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class Sect(str, Enum):
    """Chart sect, decided by the Sun's altitude."""

    DAY = "Day"
    NIGHT = "Night"


class Location(BaseModel):
    """Observer location on Earth."""

    model_config = {"frozen": True}

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class PlanetPosition(BaseModel):
    """One body's snapshot at an instant."""

    model_config = {"frozen": True}

    planet: Planet
    longitude: float = Field(ge=0.0, lt=360.0)
    latitude: float = 0.0
    sign: ZodiacSign
    sign_degree: int = Field(ge=0, lt=30)
    sign_minute: int = Field(default=0, ge=0, lt=60)
    sign_second: int = Field(default=0, ge=0, lt=60)
    is_retrograde: bool = False
    speed: float = 0.0
    azimuth: float | None = None
    altitude: float | None = None


class EssentialDignity(BaseModel):
    """Essential dignity flags and weighted score for one placement."""

    model_config = {"frozen": True}

    domicile: bool = False
    exaltation: bool = False
    triplicity: bool = False
    term: bool = False
    face: bool = False
    detriment: bool = False
    fall: bool = False
    peregrine: bool = True
    score: int = 0


class PlanetCondition(BaseModel):
    """Retrograde state and proximity to the Sun."""

    model_config = {"frozen": True}

    is_retrograde: bool = False
    is_combust: bool = False
    is_cazimi: bool = False
    is_under_beams: bool = False


class ArabicPart(BaseModel):
    """A calculated Arabic lot."""

    model_config = {"frozen": True}

    name: str
    longitude: float = Field(ge=0.0, lt=360.0)
    sign: ZodiacSign
    sign_degree: int = Field(ge=0, lt=30)


class ChartData(BaseModel):
    """Immutable chart snapshot for an instant and location."""

    model_config = {"frozen": True}

    timestamp: datetime
    location: Location
    sect: Sect
    planets: list[PlanetPosition]
    dignities: dict[Planet, EssentialDignity]
    conditions: dict[Planet, PlanetCondition]
    arabic_parts: list[ArabicPart]
    ascendant: float = Field(ge=0.0, lt=360.0)
    julian_day: float
    local_sidereal_time: float = Field(ge=0.0, lt=24.0)
    warnings: list[str] = Field(default_factory=list)

    def position(self, planet: Planet) -> PlanetPosition | None:
        """Return the position of ``planet`` or None when absent."""
        for pos in self.planets:
            if pos.planet == planet:
                return pos
        return None
