"""Lunar phase calculations."""

from __future__ import annotations

import logging
from datetime import datetime

from aeonis.schemas.hours import MoonPhaseInfo

from astrocore.bodies import normalize_longitude
from astrocore.provider import EphemerisProvider, get_default_provider

logger = logging.getLogger(__name__)

# Named phases by upper elongation bound (degrees)
PHASE_NAMES = [
    (22.5, "New Moon", "🌑"),
    (67.5, "Waxing Crescent", "🌒"),
    (112.5, "First Quarter", "🌓"),
    (157.5, "Waxing Gibbous", "🌔"),
    (202.5, "Full Moon", "🌕"),
    (247.5, "Waning Gibbous", "🌖"),
    (292.5, "Last Quarter", "🌗"),
    (337.5, "Waning Crescent", "🌘"),
    (360.0, "New Moon", "🌑"),
]


def moon_phase_from_angle(phase_angle: float, illumination_fraction: float) -> MoonPhaseInfo:
    """Name the phase for a Moon-Sun elongation.

    Args:
        phase_angle: Moon longitude minus Sun longitude, any real number
        illumination_fraction: Illuminated fraction of the disc, 0..1
    """
    # Phase angle: Moon's elongation from Sun
    elongation = normalize_longitude(phase_angle)

    phase_name, emoji = "New Moon", "🌑"
    for upper, name, symbol in PHASE_NAMES:
        if elongation < upper:
            phase_name, emoji = name, symbol
            break

    illumination = min(max(illumination_fraction * 100.0, 0.0), 100.0)
    return MoonPhaseInfo(
        phase=elongation / 360.0,
        phase_name=phase_name,
        illumination=illumination,
        emoji=emoji,
    )


def calculate_moon_phase(instant: datetime, provider: EphemerisProvider | None = None) -> MoonPhaseInfo:
    """Current moon phase from the ephemeris."""
    if provider is None:
        provider = get_default_provider()
    phase_angle, fraction = provider.moon_phase(instant)
    info = moon_phase_from_angle(phase_angle, fraction)
    logger.debug("Moon phase %s (%.1f%% lit)", info.phase_name, info.illumination)
    return info
