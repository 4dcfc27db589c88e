"""Aspect detection and orb calculations."""

from __future__ import annotations

import logging

from aeonis.config import get_settings
from aeonis.schemas.aspects import Aspect, AspectType
from aeonis.schemas.chart import PlanetPosition

from astrocore.bodies import PLANET_SYMBOLS, POINTS, angular_distance
from astrocore.meanings import aspect_interpretation

logger = logging.getLogger(__name__)

# Checked in this order; the first aspect within orb wins
# (type, exact angle, own max orb, symbol)
ASPECT_DEFINITIONS: list[tuple[AspectType, float, float, str]] = [
    (AspectType.CONJUNCTION, 0.0, 8.0, "☌"),
    (AspectType.SEXTILE, 60.0, 4.0, "⚹"),
    (AspectType.SQUARE, 90.0, 6.0, "□"),
    (AspectType.TRINE, 120.0, 6.0, "△"),
    (AspectType.OPPOSITION, 180.0, 8.0, "☍"),
]

MAJOR_ASPECTS = frozenset({AspectType.CONJUNCTION, AspectType.OPPOSITION, AspectType.SQUARE, AspectType.TRINE})

EXACT_ORB = 1.0


def calculate_aspects(positions: list[PlanetPosition], max_orb: float | None = None) -> list[Aspect]:
    """Find the aspect, if any, between every pair of planets.

    Args:
        positions: Planet positions of one chart
        max_orb: Ceiling applied on top of each aspect's own maximum orb

    Returns:
        Aspects sorted by orb, tightest first. Nodes and Lilith are skipped.
    """
    if max_orb is None:
        max_orb = get_settings().aspect_max_orb
    bodies = [pos for pos in positions if pos.planet not in POINTS]
    aspects_found: list[Aspect] = []

    for i, pos1 in enumerate(bodies):
        for pos2 in bodies[i + 1 :]:
            if pos1.planet == pos2.planet:
                continue
            dist = angular_distance(pos1.longitude, pos2.longitude)

            for aspect_type, angle, own_orb, symbol in ASPECT_DEFINITIONS:
                orb = abs(dist - angle)
                if orb > min(max_orb, own_orb):
                    continue
                is_exact = orb < EXACT_ORB
                aspects_found.append(
                    Aspect(
                        planet1=pos1.planet,
                        planet2=pos2.planet,
                        type=aspect_type,
                        exact_angle=angle,
                        actual_angle=dist,
                        orb=orb,
                        is_exact=is_exact,
                        symbol=symbol,
                        interpretation=aspect_interpretation(
                            PLANET_SYMBOLS[pos1.planet],
                            aspect_type,
                            symbol,
                            PLANET_SYMBOLS[pos2.planet],
                            is_exact,
                        ),
                    )
                )
                break

    aspects_found.sort(key=lambda a: a.orb)
    logger.debug("Found %d aspects among %d bodies (max orb %.1f)", len(aspects_found), len(bodies), max_orb)
    return aspects_found


def get_major_aspects(positions: list[PlanetPosition], max_orb: float | None = None) -> list[Aspect]:
    """Conjunctions, oppositions, squares and trines only."""
    return [a for a in calculate_aspects(positions, max_orb) if a.type in MAJOR_ASPECTS]


def get_exact_aspects(positions: list[PlanetPosition], max_orb: float | None = None) -> list[Aspect]:
    """Aspects within one degree of exact, searched at a wide ceiling."""
    if max_orb is None:
        max_orb = get_settings().exact_aspect_orb
    return [a for a in calculate_aspects(positions, max_orb) if a.is_exact]
