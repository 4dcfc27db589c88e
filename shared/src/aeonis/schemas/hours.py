"""Pydantic schemas for planetary hours, moon phase and day rulers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from aeonis.schemas.chart import Planet


class PlanetaryHour(BaseModel):
    """One of the 24 unequal hours of a solar day."""

    model_config = {"frozen": True}

    planet: Planet
    start: datetime
    end: datetime
    hour_number: int = Field(ge=1, le=24)
    is_day_hour: bool


class PlanetaryHourInfo(BaseModel):
    """Planetary hours for the day containing a query instant."""

    model_config = {"frozen": True}

    current_hour: PlanetaryHour
    day_ruler: Planet
    all_hours: list[PlanetaryHour]


class MoonPhaseInfo(BaseModel):
    """Named lunar phase with illumination."""

    model_config = {"frozen": True}

    phase: float = Field(ge=0.0, le=1.0)
    phase_name: str
    illumination: float = Field(ge=0.0, le=100.0)
    emoji: str


class DayRuler(BaseModel):
    """Planetary ruler of a weekday and its ritual correspondences."""

    model_config = {"frozen": True}

    planet: Planet
    day_name: str
    element: str
    quality: str
    ritual_suggestion: str
    color: str
    metal: str


class RulerRecommendation(BaseModel):
    """Dashboard summary of the ruler of the day."""

    planet: Planet
    symbol: str
    day_name: str
    recommendation: str
    color: str
