"""Interpretation text, ritual correspondences and intent keywords."""

from __future__ import annotations

import logging
from datetime import datetime

from aeonis.schemas.aspects import AspectType
from aeonis.schemas.chart import Planet
from aeonis.schemas.events import AstroEventType
from aeonis.schemas.hours import DayRuler

from astrocore.bodies import PLANET_SYMBOLS

logger = logging.getLogger(__name__)

ASPECT_INTERPRETATIONS: dict[AspectType, dict[str, str]] = {
    AspectType.CONJUNCTION: {
        "default": "Energies merge and intensify. A powerful focal point.",
        "exact": "Exact conjunction: Maximum fusion of planetary energies.",
    },
    AspectType.SEXTILE: {
        "default": "Opportunity and flow. Cooperative energies working together.",
        "exact": "Exact sextile: Peak harmonious opportunity.",
    },
    AspectType.SQUARE: {
        "default": "Tension and challenge. Dynamic friction that demands action.",
        "exact": "Exact square: Maximum tension, a critical turning point.",
    },
    AspectType.TRINE: {
        "default": "Harmony and ease. Natural talent and flowing energy.",
        "exact": "Exact trine: Perfect harmony between these energies.",
    },
    AspectType.OPPOSITION: {
        "default": "Polarity and awareness. Two forces seeking balance.",
        "exact": "Exact opposition: Full awareness, integration required.",
    },
}

# Planetary hour -> (recommendation, ritual id)
HOUR_RECOMMENDATIONS: dict[Planet, tuple[str, str | None]] = {
    Planet.SUN: ("Ideal for Solar Invocation, empowerment, and self-realization.", "solar_invocation"),
    Planet.MOON: ("Perfect for Lunar Meditation, divination, and dream work.", "lunar_meditation"),
    Planet.MARS: ("Strongest for LBRP (Fire), banishing, and protection.", "lbrp"),
    Planet.MERCURY: ("Optimal for Mercurial Invocation, study, and communication.", "mercurial_invocation"),
    Planet.JUPITER: ("Excellent for prosperity rituals and spiritual growth.", "middle_pillar"),
    Planet.VENUS: ("Best for love rituals and artistic creation.", None),
    Planet.SATURN: ("Suitable for Saturn Banishing, discipline, and restriction.", "sirp"),
}

# Ritual intents each classical planet supports
PLANET_INTENTS: dict[Planet, frozenset[str]] = {
    Planet.SUN: frozenset({"INVOKE", "SUCCESS", "HEALING"}),
    Planet.MOON: frozenset({"INVOKE", "DIVINATION", "DREAMS"}),
    Planet.MERCURY: frozenset({"INVOKE", "STUDY", "COMMUNICATION"}),
    Planet.VENUS: frozenset({"INVOKE", "LOVE", "HARMONY"}),
    Planet.MARS: frozenset({"BANISH", "COURAGE", "PROTECTION"}),
    Planet.JUPITER: frozenset({"INVOKE", "PROSPERITY", "GROWTH"}),
    Planet.SATURN: frozenset({"BANISH", "BINDING", "DISCIPLINE"}),
}

DAY_RULERS: dict[Planet, DayRuler] = {
    Planet.SUN: DayRuler(
        planet=Planet.SUN,
        day_name="Sunday",
        element="Fire",
        quality="Vitality, Authority, Success",
        ritual_suggestion="Solar Invocation. Ideal for rituals of empowerment, healing, and self-realization.",
        color="#D4AF37",
        metal="Gold",
    ),
    Planet.MOON: DayRuler(
        planet=Planet.MOON,
        day_name="Monday",
        element="Water",
        quality="Intuition, Dreams, Emotions",
        ritual_suggestion="Lunar Meditation. Ideal for divination, dream work, and emotional cleansing.",
        color="#C0C0C0",
        metal="Silver",
    ),
    Planet.MARS: DayRuler(
        planet=Planet.MARS,
        day_name="Tuesday",
        element="Fire",
        quality="Courage, Strength, Will",
        ritual_suggestion=(
            "Invoking Ritual of the Pentagram (Fire). Ideal for banishing, protection, and martial workings."
        ),
        color="#EF4444",
        metal="Iron",
    ),
    Planet.MERCURY: DayRuler(
        planet=Planet.MERCURY,
        day_name="Wednesday",
        element="Air",
        quality="Communication, Intelligence, Travel",
        ritual_suggestion=(
            "Mercurial Invocation. Ideal for study, communication spells, and intellectual pursuits."
        ),
        color="#F59E0B",
        metal="Mercury/Quicksilver",
    ),
    Planet.JUPITER: DayRuler(
        planet=Planet.JUPITER,
        day_name="Thursday",
        element="Fire",
        quality="Expansion, Abundance, Wisdom",
        ritual_suggestion="Jupiter Invocation. Ideal for prosperity rituals, legal matters, and spiritual growth.",
        color="#3B82F6",
        metal="Tin",
    ),
    Planet.VENUS: DayRuler(
        planet=Planet.VENUS,
        day_name="Friday",
        element="Earth",
        quality="Love, Beauty, Harmony",
        ritual_suggestion="Venus Invocation. Ideal for love rituals, artistic creation, and social harmony.",
        color="#22C55E",
        metal="Copper",
    ),
    Planet.SATURN: DayRuler(
        planet=Planet.SATURN,
        day_name="Saturday",
        element="Earth",
        quality="Discipline, Structure, Endings",
        ritual_suggestion=(
            "Saturn Banishing. Ideal for binding, restriction, ending bad habits, and karmic work."
        ),
        color="#6B6B6B",
        metal="Lead",
    ),
}


def aspect_interpretation(
    symbol1: str,
    aspect_type: AspectType,
    aspect_symbol: str,
    symbol2: str,
    is_exact: bool,
) -> str:
    """Compose the display line for an aspect."""
    texts = ASPECT_INTERPRETATIONS[aspect_type]
    text = texts["exact"] if is_exact else texts["default"]
    return f"{symbol1} {aspect_symbol} {symbol2}: {text}"


def hour_recommendation(planet: Planet) -> tuple[str, str | None]:
    """Recommendation text and ritual id for a planetary hour.

    Outer planets and points never rule an hour; they fall back to the Sun.
    """
    recommendation = HOUR_RECOMMENDATIONS.get(planet)
    if recommendation is None:
        logger.debug("No hour recommendation for %s, using Sun", planet.value)
        recommendation = HOUR_RECOMMENDATIONS[Planet.SUN]
    return recommendation


def intents_for(planet: Planet) -> frozenset[str]:
    return PLANET_INTENTS.get(planet, frozenset())


def compose_event_text(
    event_type: AstroEventType,
    planet: Planet | None = None,
    planet2: Planet | None = None,
    kind: str | None = None,
    when: datetime | None = None,
    separation: float | None = None,
) -> tuple[str, str]:
    """Compose (title, description) for an event horizon entry."""
    if event_type in (AstroEventType.SOLAR_ECLIPSE, AstroEventType.LUNAR_ECLIPSE):
        body = "Solar" if event_type == AstroEventType.SOLAR_ECLIPSE else "Lunar"
        title = f"{kind.title()} {body} Eclipse" if kind else f"{body} Eclipse"
        if when is None:
            return title, f"{title}."
        return title, f"{title} on {when:%B} {when.day}, {when.year}."
    if planet is None:
        raise ValueError(f"{event_type.value} events need a planet")
    symbol = PLANET_SYMBOLS[planet]
    if event_type == AstroEventType.RETROGRADE_START:
        return (
            f"{symbol} {planet.value} Retrograde",
            f"{planet.value} stations retrograde. Apparent backward motion begins.",
        )
    if event_type == AstroEventType.RETROGRADE_END:
        return (
            f"{symbol} {planet.value} Direct",
            f"{planet.value} stations direct. Forward motion resumes.",
        )
    if planet2 is None:
        raise ValueError(f"{event_type.value} events need two planets")
    label = "Conjunction" if event_type == AstroEventType.CONJUNCTION else "Opposition"
    return (
        f"{symbol}{PLANET_SYMBOLS[planet2]} {planet.value}-{planet2.value} {label}",
        f"{planet.value} and {planet2.value} in {label.lower()}"
        + (f" ({separation:.1f}° separation)." if separation is not None else "."),
    )
