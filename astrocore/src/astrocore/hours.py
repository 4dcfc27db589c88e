"""Planetary hours in Chaldean order."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo

from aeonis.schemas.chart import Location
from aeonis.schemas.hours import PlanetaryHour, PlanetaryHourInfo

from astrocore.bodies import CHALDEAN_ORDER, WEEKDAY_RULERS
from astrocore.provider import (
    EphemerisError,
    EphemerisProvider,
    default_location,
    fallback_sun_times,
    get_default_provider,
    observer_time,
)

logger = logging.getLogger(__name__)


def _sun_times(
    provider: EphemerisProvider, day: date, location: Location, tz: tzinfo
) -> tuple[datetime, datetime]:
    try:
        return provider.sunrise_sunset(day, location, tz)
    except EphemerisError as exc:
        logger.warning("Sunrise/sunset unavailable for %s, using 06:00/18:00: %s", day.isoformat(), exc)
        return fallback_sun_times(day, tz)


def build_hours(
    ruler_index: int,
    sunrise: datetime,
    sunset: datetime,
    next_sunrise: datetime,
) -> list[PlanetaryHour]:
    """Twelve day hours from sunrise and twelve night hours from sunset."""
    day_hour = (sunset - sunrise) / 12
    night_hour = (next_sunrise - sunset) / 12

    hours = []
    for i in range(24):
        is_day = i < 12
        if is_day:
            start = sunrise + day_hour * i
            length = day_hour
        else:
            start = sunset + night_hour * (i - 12)
            length = night_hour
        hours.append(
            PlanetaryHour(
                planet=CHALDEAN_ORDER[(ruler_index + i) % 7],
                start=start,
                end=start + length,
                hour_number=i + 1,
                is_day_hour=is_day,
            )
        )
    return hours


def calculate_planetary_hours(
    instant: datetime,
    location: Location | None = None,
    provider: EphemerisProvider | None = None,
) -> PlanetaryHourInfo:
    """Planetary hours of the planetary day containing ``instant``.

    The planetary day runs from sunrise to the next sunrise; an instant
    before sunrise belongs to the previous day's night hours. The calendar
    day is read on the observer's clock (see ``observer_time``), so naive
    and UTC instants use local mean solar time at the location.
    """
    if provider is None:
        provider = get_default_provider()
    if location is None:
        location = default_location()
    local = observer_time(instant, location)
    tz = local.tzinfo
    today = local.date()

    sunrise, sunset = _sun_times(provider, today, location, tz)
    if local < sunrise:
        next_sunrise = sunrise
        today -= timedelta(days=1)
        sunrise, sunset = _sun_times(provider, today, location, tz)
    else:
        next_sunrise, _ = _sun_times(provider, today + timedelta(days=1), location, tz)

    day_ruler = WEEKDAY_RULERS[today.weekday()]
    ruler_index = CHALDEAN_ORDER.index(day_ruler)

    hours = build_hours(ruler_index, sunrise, sunset, next_sunrise)
    current = next((h for h in hours if h.start <= local < h.end), None)
    if current is None:
        logger.warning("%s falls outside the hours of %s, using hour 1", local.isoformat(), today.isoformat())
        current = hours[0]

    logger.debug("Day of %s, hour %d of %s", day_ruler.value, current.hour_number, current.planet.value)
    return PlanetaryHourInfo(current_hour=current, day_ruler=day_ruler, all_hours=hours)
