"""Event horizon: eclipses, planetary stations and conjunctions ahead."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from aeonis.config import get_settings
from aeonis.schemas.chart import Planet
from aeonis.schemas.events import AstroEvent, AstroEventType

from astrocore.bodies import angular_distance
from astrocore.meanings import compose_event_text
from astrocore.provider import EphemerisError, EphemerisProvider, get_default_provider, to_utc

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25

# Planets checked for stations, with sampling step in days
STATION_PLANETS: list[tuple[Planet, int]] = [
    (Planet.MERCURY, 5),
    (Planet.VENUS, 5),
    (Planet.MARS, 10),
    (Planet.JUPITER, 10),
    (Planet.SATURN, 10),
]

CONJUNCTION_PAIRS: list[tuple[Planet, Planet]] = [
    (Planet.JUPITER, Planet.SATURN),
    (Planet.MARS, Planet.JUPITER),
    (Planet.VENUS, Planet.JUPITER),
    (Planet.VENUS, Planet.MARS),
    (Planet.MERCURY, Planet.VENUS),
]

CONJUNCTION_STEP_DAYS = 7
CONJUNCTION_MAX_SEPARATION = 5.0

# Resume the eclipse search this long after each hit
ECLIPSE_SKIP_DAYS = 30


def _millis(instant: datetime) -> int:
    return int(instant.timestamp() * 1000)


def _find_eclipses(
    search: Callable[[datetime], tuple[datetime, str] | None],
    event_type: AstroEventType,
    prefix: str,
    start: datetime,
    end: datetime,
    years: int,
) -> list[AstroEvent]:
    events: list[AstroEvent] = []
    search_from = start
    for _ in range(years * 3):
        try:
            found = search(search_from)
        except EphemerisError as exc:
            logger.warning("%s search stopped at %s: %s", event_type.value, search_from.isoformat(), exc)
            break
        if found is None:
            break
        when, kind = found
        if when > end:
            break
        title, description = compose_event_text(event_type, kind=kind, when=when)
        events.append(
            AstroEvent(
                id=f"{prefix}_{_millis(when)}",
                type=event_type,
                title=title,
                description=description,
                date=when,
            )
        )
        search_from = when + timedelta(days=ECLIPSE_SKIP_DAYS)
    return events


def find_solar_eclipses(
    provider: EphemerisProvider, start: datetime, end: datetime, years: int
) -> list[AstroEvent]:
    return _find_eclipses(provider.next_solar_eclipse, AstroEventType.SOLAR_ECLIPSE, "solar_ecl", start, end, years)


def find_lunar_eclipses(
    provider: EphemerisProvider, start: datetime, end: datetime, years: int
) -> list[AstroEvent]:
    return _find_eclipses(provider.next_lunar_eclipse, AstroEventType.LUNAR_ECLIPSE, "lunar_ecl", start, end, years)


def _one_day_motion(provider: EphemerisProvider, planet: Planet, instant: datetime) -> float:
    lon_now, _ = provider.position(planet, instant)
    lon_next, _ = provider.position(planet, instant + timedelta(days=1))
    motion = lon_next - lon_now
    if motion > 180.0:
        motion -= 360.0
    elif motion < -180.0:
        motion += 360.0
    return motion


def find_planetary_stations(
    provider: EphemerisProvider, start: datetime, end: datetime, years: int
) -> list[AstroEvent]:
    """Retrograde and direct stations, detected by a change in the sign of daily motion."""
    events: list[AstroEvent] = []
    for planet, step in STATION_PLANETS:
        was_retro = False
        for days in range(0, years * 365, step):
            check = start + timedelta(days=days)
            if check > end:
                break
            try:
                is_retro = _one_day_motion(provider, planet, check) < 0
            except EphemerisError as exc:
                logger.warning("Skipping %s station sample at %s: %s", planet.value, check.isoformat(), exc)
                continue

            if days > 0 and is_retro != was_retro:
                event_type = AstroEventType.RETROGRADE_START if is_retro else AstroEventType.RETROGRADE_END
                prefix = "retro_start" if is_retro else "retro_end"
                title, description = compose_event_text(event_type, planet)
                events.append(
                    AstroEvent(
                        id=f"{prefix}_{planet.value}_{_millis(check)}",
                        type=event_type,
                        title=title,
                        description=description,
                        date=check,
                        planet=planet,
                    )
                )
            was_retro = is_retro
    return events


def _separation(provider: EphemerisProvider, planet1: Planet, planet2: Planet, instant: datetime) -> float:
    lon1, _ = provider.position(planet1, instant)
    lon2, _ = provider.position(planet2, instant)
    return angular_distance(lon1, lon2)


def find_conjunctions(
    provider: EphemerisProvider, start: datetime, end: datetime, years: int
) -> list[AstroEvent]:
    """Close conjunctions, taken at the weekly sample nearest the minimum separation."""
    events: list[AstroEvent] = []
    step = timedelta(days=CONJUNCTION_STEP_DAYS)
    for planet1, planet2 in CONJUNCTION_PAIRS:
        prev_sep = 999.0
        for days in range(0, years * 365, CONJUNCTION_STEP_DAYS):
            check = start + timedelta(days=days)
            if check > end:
                break
            try:
                sep = _separation(provider, planet1, planet2, check)
                if sep < CONJUNCTION_MAX_SEPARATION and prev_sep > sep:
                    next_sep = _separation(provider, planet1, planet2, check + step)
                    if next_sep > sep:
                        title, description = compose_event_text(
                            AstroEventType.CONJUNCTION, planet1, planet2, separation=sep
                        )
                        events.append(
                            AstroEvent(
                                id=f"conj_{planet1.value}_{planet2.value}_{_millis(check)}",
                                type=AstroEventType.CONJUNCTION,
                                title=title,
                                description=description,
                                date=check,
                                planet=planet1,
                                planet2=planet2,
                                magnitude=sep,
                            )
                        )
            except EphemerisError as exc:
                logger.warning(
                    "Skipping %s-%s sample at %s: %s", planet1.value, planet2.value, check.isoformat(), exc
                )
                continue
            prev_sep = sep
    return events


def calculate_event_horizon(
    start: datetime | None = None,
    years: int | None = None,
    provider: EphemerisProvider | None = None,
) -> list[AstroEvent]:
    """All eclipses, stations and conjunctions within ``years`` of ``start``, by date."""
    if provider is None:
        provider = get_default_provider()
    if years is None:
        years = get_settings().event_horizon_years
    start = to_utc(start) if start is not None else datetime.now(UTC)
    end = start + timedelta(days=years * DAYS_PER_YEAR)

    events = [
        *find_solar_eclipses(provider, start, end, years),
        *find_lunar_eclipses(provider, start, end, years),
        *find_planetary_stations(provider, start, end, years),
        *find_conjunctions(provider, start, end, years),
    ]
    events.sort(key=lambda e: e.date)
    logger.info("Event horizon from %s: %d events over %d years", start.date().isoformat(), len(events), years)
    return events


def search_events(events: list[AstroEvent], query: str) -> list[AstroEvent]:
    """Case-insensitive match on title, description, planet or event type."""
    needle = query.lower().strip()
    if not needle:
        return events
    return [
        e
        for e in events
        if needle in e.title.lower()
        or needle in e.description.lower()
        or (e.planet is not None and needle in e.planet.value.lower())
        or needle in e.type.value.replace("_", " ")
    ]


def get_next_major_event(events: list[AstroEvent], after: datetime | None = None) -> AstroEvent | None:
    """First event strictly after ``after`` (now when omitted); ``events`` sorted by date."""
    after = to_utc(after) if after is not None else datetime.now(UTC)
    return next((e for e in events if e.date > after), None)
