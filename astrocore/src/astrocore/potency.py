"""Potency scoring: additive, weighted-composite and intent strategies."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from aeonis.config import get_settings
from aeonis.schemas.aspects import AspectType
from aeonis.schemas.chart import ChartData, Planet
from aeonis.schemas.events import CosmicEvent, GlobalEvent
from aeonis.schemas.hours import PlanetaryHourInfo
from aeonis.schemas.potency import (
    IntentPotencyReport,
    PotencyStrategy,
    PowerBreakdown,
    PowerLabel,
)

from astrocore.bodies import BENEFICS, CLASSICAL_PLANETS, MALEFICS, PLANET_COLORS, angular_distance, normalize_longitude
from astrocore.meanings import hour_recommendation, intents_for
from astrocore.provider import to_utc

logger = logging.getLogger(__name__)

# Transit-to-natal aspects: (type, angle, orb, base points)
TRANSIT_ASPECTS: list[tuple[AspectType, float, float, int]] = [
    (AspectType.CONJUNCTION, 0.0, 8.0, 15),
    (AspectType.TRINE, 120.0, 6.0, 12),
    (AspectType.SEXTILE, 60.0, 5.0, 8),
    (AspectType.SQUARE, 90.0, 6.0, -5),
    (AspectType.OPPOSITION, 180.0, 8.0, -3),
]

TRANSITING_PLANETS = frozenset(
    {Planet.SUN, Planet.MOON, Planet.MARS, Planet.VENUS, Planet.JUPITER, Planet.SATURN}
)

BASE_SCORE = 50
INTENT_BASE_SCORE = 60
STASIS_MULTIPLIER = 1.15
MAX_DETAILS = 6

# Points that count toward the details list
DETAIL_THRESHOLD = 5

POWER_LABELS = [
    (80, "Transcendent", "#FFD700"),
    (65, "Empowered", "#22C55E"),
    (50, "Balanced", "#3B82F6"),
    (35, "Challenged", "#F59E0B"),
]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(high, value)))


def _bounded_talisman(value: float) -> float:
    # Anything beyond +-100 saturates every score anyway
    if math.isnan(value):
        return 0.0
    return max(-100.0, min(100.0, value))


def _signed(points: int) -> str:
    return f"+{points}" if points > 0 else str(points)


def _arrow(points: float) -> str:
    return "↑" if points > 0 else "↓"


def transit_to_natal_points(current: ChartData, natal: ChartData | None, details: list[str]) -> int:
    """Sum strength-scaled points for transits aspecting the natal classical planets."""
    if natal is None:
        return 0

    transits = [p for p in current.planets if p.planet in TRANSITING_PLANETS]
    natals = [p for p in natal.planets if p.planet in CLASSICAL_PLANETS]

    total = 0
    for transit in transits:
        for natal_pos in natals:
            dist = angular_distance(transit.longitude, natal_pos.longitude)
            for aspect_type, angle, orb, score in TRANSIT_ASPECTS:
                orb_diff = abs(dist - angle)
                if orb_diff > orb:
                    continue
                points = _round_half_up(score * (1 - orb_diff / orb))
                total += points
                if abs(points) >= DETAIL_THRESHOLD:
                    details.append(
                        f"{_arrow(points)} {transit.planet.value} {aspect_type.value} "
                        f"natal {natal_pos.planet.value} ({_signed(points)})"
                    )
                break
    return total


def moon_phase_bonus(sun_longitude: float, moon_longitude: float, details: list[str] | None = None) -> int:
    """Waxing-moon bonus: up to +8 while waxing, +3 near gibbous, flat +10 at full."""
    elongation = normalize_longitude(moon_longitude - sun_longitude)
    bonus = 0
    if 0 < elongation < 180:
        bonus = _round_half_up(elongation / 180 * 8)
        if 90 < elongation < 135:
            bonus += 3
            if details is not None:
                details.append("↑ Waxing Gibbous Moon (+3)")
    if abs(elongation - 180) < 12:
        bonus = 10
        if details is not None:
            details.append("↑ Full Moon power (+10)")
    return bonus


def planetary_hour_bonus(hour_planet: Planet | None, details: list[str] | None = None) -> int:
    if hour_planet is None:
        return 0
    if hour_planet in BENEFICS:
        bonus, text = 5, f"↑ Hour of {hour_planet.value} (+5)"
    elif hour_planet == Planet.SUN:
        bonus, text = 4, "↑ Hour of the Sun (+4)"
    elif hour_planet == Planet.MOON:
        bonus, text = 3, "↑ Hour of the Moon (+3)"
    else:
        return 0
    if details is not None:
        details.append(text)
    return bonus


def _dignity_sums(chart: ChartData) -> tuple[int, int]:
    benefic = sum(chart.dignities[p].score for p in BENEFICS if p in chart.dignities)
    malefic = sum(chart.dignities[p].score for p in MALEFICS if p in chart.dignities)
    return benefic, malefic


def _dignity_adjustment(chart: ChartData, details: list[str]) -> int:
    benefic, malefic = _dignity_sums(chart)
    if benefic > 3:
        details.append(f"↑ Benefics well-dignified (+{_round_half_up(benefic * 1.5)})")
    if malefic < -3:
        details.append(f"↑ Malefics weakened (+{_round_half_up(-malefic * 0.5)})")
    return _round_half_up(benefic * 1.5 - malefic * 0.5)


def _sun_moon_bonus(chart: ChartData, details: list[str]) -> int:
    sun = chart.position(Planet.SUN)
    moon = chart.position(Planet.MOON)
    if sun is None or moon is None:
        return 0
    return moon_phase_bonus(sun.longitude, moon.longitude, details)


def additive_potency(
    current_chart: ChartData,
    natal_chart: ChartData | None = None,
    hour_planet: Planet | None = None,
    talisman_dignity: float = 0.0,
) -> PowerBreakdown:
    """Base 50 plus every contribution, clamped to 0-100."""
    talisman_dignity = _bounded_talisman(talisman_dignity)
    details: list[str] = []
    transit = transit_to_natal_points(current_chart, natal_chart, details)
    moon = _sun_moon_bonus(current_chart, details)
    hour = planetary_hour_bonus(hour_planet, details)
    dignity = _dignity_adjustment(current_chart, details)
    rune = _round_half_up(2 * talisman_dignity)
    if rune:
        details.append(f"{_arrow(rune)} Active Talisman resonance ({_signed(rune)})")

    total = _clamp(BASE_SCORE + transit + dignity + moon + hour + rune)
    return PowerBreakdown(
        strategy=PotencyStrategy.ADDITIVE,
        total_score=total,
        transit_score=transit,
        dignity_score=dignity,
        rune_modifier=rune,
        moon_phase_bonus=moon,
        planetary_hour_bonus=hour,
        details=details[:MAX_DETAILS],
    )


def weighted_potency(
    current_chart: ChartData,
    natal_chart: ChartData | None = None,
    hour_planet: Planet | None = None,
    talisman_dignity: float = 0.0,
    stasis_active: bool = False,
) -> PowerBreakdown:
    """40% transits + 40% dignity + 20% talisman, with the x1.15 stasis buff."""
    talisman_dignity = _bounded_talisman(talisman_dignity)
    details: list[str] = []

    transit_raw = BASE_SCORE + transit_to_natal_points(current_chart, natal_chart, details)
    moon = _sun_moon_bonus(current_chart, details)
    hour = planetary_hour_bonus(hour_planet, details)
    transit_score = _clamp(transit_raw + moon + hour)

    dignity_score = _clamp(BASE_SCORE + _dignity_adjustment(current_chart, details))

    rune_points = _round_half_up(talisman_dignity * 5)
    rune_score = _clamp(BASE_SCORE + rune_points)
    if talisman_dignity > 0:
        details.append(f"↑ Active Talisman resonance (+{rune_points})")

    raw_total = _round_half_up(transit_score * 0.4 + dignity_score * 0.4 + rune_score * 0.2)
    multiplier = STASIS_MULTIPLIER if stasis_active else 1.0
    if stasis_active:
        details.append("↑ Stasis Buff active (×1.15)")
        raw_total = _round_half_up(raw_total * multiplier)

    return PowerBreakdown(
        strategy=PotencyStrategy.WEIGHTED,
        total_score=_clamp(raw_total),
        transit_score=transit_score,
        dignity_score=dignity_score,
        rune_modifier=rune_score,
        moon_phase_bonus=moon,
        planetary_hour_bonus=hour,
        stasis_multiplier=multiplier,
        details=details[:MAX_DETAILS],
    )


def _within(last: datetime | None, now: datetime, window: timedelta) -> bool:
    if last is None:
        return False
    elapsed = to_utc(now) - to_utc(last)
    return timedelta(0) <= elapsed <= window


def is_stasis_active(
    last_stasis: datetime | None,
    now: datetime | None = None,
    window_minutes: int | None = None,
) -> bool:
    """True while a meditation session's stasis buff is still running."""
    if window_minutes is None:
        window_minutes = get_settings().stasis_window_minutes
    return _within(last_stasis, now or datetime.now(UTC), timedelta(minutes=window_minutes))


def default_intent(planet: Planet) -> str:
    """Banishing for the malefics, invoking otherwise."""
    return "BANISH" if planet in MALEFICS else "INVOKE"


def _collective_boost(global_events: Iterable[GlobalEvent]) -> tuple[float, GlobalEvent | None]:
    boost, leading = 1.0, None
    for event in global_events:
        if event.is_active and event.xp_multiplier and event.xp_multiplier > boost:
            boost, leading = event.xp_multiplier, event
    return boost, leading


def intent_potency(
    hour_info: PlanetaryHourInfo,
    intent: str | None = None,
    cosmic_events: Iterable[CosmicEvent] = (),
    global_events: Iterable[GlobalEvent] = (),
    last_gnosis: datetime | None = None,
    now: datetime | None = None,
) -> IntentPotencyReport:
    """Intent-based report for the current planetary hour.

    Args:
        hour_info: Planetary hours containing the current hour
        intent: Selected ritual intent (e.g. INVOKE, BANISH); defaults to the
            hour ruler's own intent
        cosmic_events: CMS write-ups; active ones listing the intent add +10
        global_events: Community events; the largest active XP multiplier
            becomes the collective boost
        last_gnosis: End of the last gnosis/stasis session
        now: Reference instant, defaults to the current time

    Returns:
        IntentPotencyReport with a score clamped to 60-100.
    """
    hour_planet = hour_info.current_hour.planet
    day_ruler = hour_info.day_ruler
    intent = (intent or default_intent(hour_planet)).strip().upper()
    now = now or datetime.now(UTC)
    details: list[str] = []

    score = INTENT_BASE_SCORE
    hour_match = intent in intents_for(hour_planet)
    if hour_match:
        score += 15
        details.append(f"↑ Hour of {hour_planet.value} supports {intent} (+15)")
    day_match = intent in intents_for(day_ruler)
    if day_match:
        score += 5
        details.append(f"↑ Day of {day_ruler.value} supports {intent} (+5)")
    supporting = next(
        (e for e in cosmic_events if e.is_active and intent in {i.upper() for i in e.supported_intents}),
        None,
    )
    if supporting is not None:
        score += 10
        details.append(f"↑ {supporting.title} supports {intent} (+10)")
    gnosis_window = timedelta(hours=get_settings().gnosis_window_hours)
    focused = _within(last_gnosis, now, gnosis_window)
    if focused:
        score += 10
        details.append("↑ Recent gnosis session (+10)")
    score = _clamp(score, INTENT_BASE_SCORE, 100)

    recommendation, ritual_id = hour_recommendation(hour_planet)
    boost, leading_event = _collective_boost(global_events)

    if leading_event is not None:
        priority = 1
        headline = f"COSMIC EVENT: {leading_event.title}"
        message = f"A collective current has formed. {recommendation} (Bonus: {boost:g}x XP)"
    elif hour_match and day_match:
        priority = 2
        headline = "Perfect Alignment!"
        message = (
            f"The {hour_planet.value} hour on the day of {day_ruler.value} carries your {intent} intent. "
            f"{recommendation} Your potency is at {score}%."
        )
    else:
        priority = 3
        headline = f"Hour of {hour_planet.value}"
        status = "Your mind is focused." if focused else "A stasis session would optimize your potential."
        message = (
            f"We are currently in the {hour_planet.value} hour on the day of {day_ruler.value}. "
            f"{status} {recommendation}"
        )

    logger.debug("Intent potency %d for %s in hour of %s", score, intent, hour_planet.value)
    return IntentPotencyReport(
        priority=priority,
        headline=headline,
        message=message,
        recommendation=recommendation,
        suggested_ritual_id=ritual_id,
        intent=intent,
        hour_planet=hour_planet,
        day_ruler=day_ruler,
        planet_color=PLANET_COLORS.get(hour_planet, "#D4AF37"),
        potency_score=score,
        collective_boost=boost,
        details=details[:MAX_DETAILS],
    )


def calculate_potency(
    strategy: PotencyStrategy,
    *,
    current_chart: ChartData | None = None,
    natal_chart: ChartData | None = None,
    hour_info: PlanetaryHourInfo | None = None,
    talisman_dignity: float = 0.0,
    stasis_active: bool = False,
    intent: str | None = None,
    cosmic_events: Iterable[CosmicEvent] = (),
    global_events: Iterable[GlobalEvent] = (),
    last_gnosis: datetime | None = None,
    now: datetime | None = None,
) -> PowerBreakdown | IntentPotencyReport:
    """Score potency with the named strategy.

    ADDITIVE and WEIGHTED need ``current_chart``; INTENT needs ``hour_info``.
    """
    strategy = PotencyStrategy(strategy)
    hour_planet = hour_info.current_hour.planet if hour_info else None

    if strategy == PotencyStrategy.INTENT:
        if hour_info is None:
            raise ValueError("intent strategy requires hour_info")
        return intent_potency(hour_info, intent, cosmic_events, global_events, last_gnosis, now)

    if current_chart is None:
        raise ValueError(f"{strategy.value} strategy requires current_chart")
    if strategy == PotencyStrategy.ADDITIVE:
        return additive_potency(current_chart, natal_chart, hour_planet, talisman_dignity)
    return weighted_potency(current_chart, natal_chart, hour_planet, talisman_dignity, stasis_active)


def power_label(score: int) -> PowerLabel:
    for threshold, label, color in POWER_LABELS:
        if score >= threshold:
            return PowerLabel(label=label, color=color)
    return PowerLabel(label="Dormant", color="#EF4444")
