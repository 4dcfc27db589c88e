"""Planetary ruler of the weekday."""

from __future__ import annotations

from datetime import UTC, date, datetime

from aeonis.schemas.hours import DayRuler, RulerRecommendation

from astrocore.bodies import PLANET_SYMBOLS, WEEKDAY_RULERS
from astrocore.meanings import DAY_RULERS


def _as_date(day: date | datetime | None) -> date:
    if day is None:
        return datetime.now(UTC).date()
    if isinstance(day, datetime):
        return day.date()
    return day


def get_ruler_of_day(day: date | datetime | None = None) -> DayRuler:
    """Ruler and correspondences for a weekday (today, UTC, when omitted)."""
    return DAY_RULERS[WEEKDAY_RULERS[_as_date(day).weekday()]]


def get_ruler_symbol(day: date | datetime | None = None) -> str:
    return PLANET_SYMBOLS[get_ruler_of_day(day).planet]


def get_ruler_recommendation(day: date | datetime | None = None) -> RulerRecommendation:
    ruler = get_ruler_of_day(day)
    return RulerRecommendation(
        planet=ruler.planet,
        symbol=PLANET_SYMBOLS[ruler.planet],
        day_name=ruler.day_name,
        recommendation=f"Today is ruled by {ruler.planet.value}. {ruler.ritual_suggestion}",
        color=ruler.color,
    )
