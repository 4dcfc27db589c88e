"""Ephemeris adapter: the only module that talks to Swiss Ephemeris."""

from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Protocol

import swisseph as swe

from aeonis.config import get_settings
from aeonis.schemas.chart import Location, Planet

from astrocore.bodies import J2000, normalize_longitude

logger = logging.getLogger(__name__)

# Celestial body IDs for pyswisseph
# These map to swisseph constants
BODY_IDS: dict[Planet, int] = {
    Planet.SUN: 0,  # SE_SUN
    Planet.MOON: 1,  # SE_MOON
    Planet.MERCURY: 2,  # SE_MERCURY
    Planet.VENUS: 3,  # SE_VENUS
    Planet.MARS: 4,  # SE_MARS
    Planet.JUPITER: 5,  # SE_JUPITER
    Planet.SATURN: 6,  # SE_SATURN
    Planet.URANUS: 7,  # SE_URANUS
    Planet.NEPTUNE: 8,  # SE_NEPTUNE
    Planet.PLUTO: 9,  # SE_PLUTO
}

FALLBACK_SUNRISE = time(6, 0)
FALLBACK_SUNSET = time(18, 0)

_J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=UTC)


class EphemerisError(RuntimeError):
    """The ephemeris could not resolve a body or event."""


class EphemerisProvider(Protocol):
    """Raw astronomical inputs consumed by the engines."""

    def julian_day(self, instant: datetime) -> float: ...

    def sidereal_time(self, instant: datetime) -> float: ...

    def position(self, planet: Planet, instant: datetime) -> tuple[float, float]: ...

    def horizontal(self, planet: Planet, instant: datetime, location: Location) -> tuple[float, float]: ...

    def sunrise_sunset(self, day: date, location: Location, tz: tzinfo) -> tuple[datetime, datetime]: ...

    def moon_phase(self, instant: datetime) -> tuple[float, float]: ...

    def next_solar_eclipse(self, after: datetime) -> tuple[datetime, str] | None: ...

    def next_lunar_eclipse(self, after: datetime) -> tuple[datetime, str] | None: ...


def to_utc(instant: datetime) -> datetime:
    """Return ``instant`` in UTC; naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def julian_day_to_datetime(julian_day: float) -> datetime:
    """Convert a Julian Day (UT) to an aware UTC datetime."""
    return _J2000_EPOCH + timedelta(days=julian_day - J2000)


def observer_time(instant: datetime, location: Location) -> datetime:
    """Instant on the observer's clock.

    Naive and UTC instants are shifted to local mean solar time at the
    observer's longitude; instants in any other timezone are kept as given.
    """
    if instant.tzinfo is not None and instant.tzname() != "UTC":
        return instant
    offset = timezone(timedelta(seconds=round(location.longitude * 240.0)))
    return to_utc(instant).astimezone(offset)


def default_location() -> Location:
    """Observer from ``DEFAULT_LATITUDE`` / ``DEFAULT_LONGITUDE``."""
    settings = get_settings()
    return Location(latitude=settings.default_latitude, longitude=settings.default_longitude)


def fallback_sun_times(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Fixed 06:00 / 18:00 local sunrise and sunset."""
    return (
        datetime.combine(day, FALLBACK_SUNRISE, tzinfo=tz),
        datetime.combine(day, FALLBACK_SUNSET, tzinfo=tz),
    )


def daily_speed(provider: EphemerisProvider, planet: Planet, instant: datetime) -> float:
    """Apparent daily motion from positions one hour apart, in degrees/day."""
    lon_now, _ = provider.position(planet, instant)
    lon_next, _ = provider.position(planet, instant + timedelta(hours=1))
    delta = lon_next - lon_now
    # Handle wrap-around at 0 Aries
    if delta > 180.0:
        delta -= 360.0
    elif delta < -180.0:
        delta += 360.0
    return delta * 24.0


class SwissEphemeris:
    """EphemerisProvider backed by pyswisseph.

    Uses Swiss ephemeris files from ``SWISSEPH_EPHE_PATH`` when present and
    the built-in Moshier theory otherwise.
    """

    def __init__(self, ephe_path: str | None = None) -> None:
        if ephe_path is None:
            ephe_path = get_settings().swisseph_ephe_path
        ephe_path = str(ephe_path or "").strip()
        swe.set_ephe_path(ephe_path if ephe_path else None)

    def julian_day(self, instant: datetime) -> float:
        """Convert datetime to Julian Day number (UT)."""
        utc = to_utc(instant)
        hour = utc.hour + utc.minute / 60.0 + (utc.second + utc.microsecond / 1e6) / 3600.0
        return swe.julday(utc.year, utc.month, utc.day, hour)

    def sidereal_time(self, instant: datetime) -> float:
        """Greenwich sidereal time in hours."""
        return swe.sidtime(self.julian_day(instant))

    def _calc(self, jd: float, planet: Planet, extra_flags: int = 0) -> tuple[float, ...]:
        body_id = BODY_IDS.get(planet)
        if body_id is None:
            raise EphemerisError(f"{planet.value} is not an ephemeris body")
        try:
            result, _ = swe.calc_ut(jd, body_id, swe.FLG_SWIEPH | extra_flags)
        except Exception:
            # Fallback to Moshier (no external files needed)
            try:
                result, _ = swe.calc_ut(jd, body_id, swe.FLG_MOSEPH | extra_flags)
            except Exception as exc:
                raise EphemerisError(f"{planet.value} unavailable: {exc}") from exc
        return tuple(result)

    def position(self, planet: Planet, instant: datetime) -> tuple[float, float]:
        """Geocentric ecliptic longitude and latitude."""
        result = self._calc(self.julian_day(instant), planet)
        return normalize_longitude(result[0]), result[1]

    def horizontal(self, planet: Planet, instant: datetime, location: Location) -> tuple[float, float]:
        """Azimuth (from north, eastward) and true altitude for the observer."""
        jd = self.julian_day(instant)
        geopos = (location.longitude, location.latitude, 0.0)
        if planet == Planet.MOON:
            # Lunar parallax reaches a degree; use the observer-centred position
            swe.set_topo(*geopos)
            result = self._calc(jd, planet, swe.FLG_TOPOCTR)
        else:
            result = self._calc(jd, planet)
        azimuth, altitude, _ = swe.azalt(jd, swe.ECL2HOR, geopos, 0.0, 0.0, (result[0], result[1], result[2]))
        # Swiss Ephemeris measures azimuth from the south point
        return normalize_longitude(azimuth + 180.0), altitude

    def _rise_trans(self, jd: float, event: int, geopos: tuple[float, float, float]) -> float:
        status, tret = swe.rise_trans(jd, BODY_IDS[Planet.SUN], event, geopos, 0.0, 0.0, swe.FLG_SWIEPH)
        if status != 0 or not tret or not tret[0]:
            raise EphemerisError(f"no solar rise/set event after JD {jd:.4f} (status {status})")
        return tret[0]

    def sunrise_sunset(self, day: date, location: Location, tz: tzinfo) -> tuple[datetime, datetime]:
        """Sunrise and following sunset for the local calendar ``day``.

        Falls back to 06:00 / 18:00 local time when the search fails, e.g.
        during polar day or night.
        """
        noon = datetime.combine(day, time(12, 0), tzinfo=tz)
        geopos = (location.longitude, location.latitude, 0.0)
        try:
            rise_jd = self._rise_trans(self.julian_day(noon) - 1.0, swe.CALC_RISE, geopos)
            set_jd = self._rise_trans(rise_jd, swe.CALC_SET, geopos)
        except Exception as exc:
            logger.warning(
                "sunrise/sunset search failed for %s at (%.4f, %.4f), using 06:00/18:00: %s",
                day.isoformat(),
                location.latitude,
                location.longitude,
                exc,
            )
            return fallback_sun_times(day, tz)
        sunrise = julian_day_to_datetime(rise_jd).astimezone(tz)
        sunset = julian_day_to_datetime(set_jd).astimezone(tz)
        return sunrise, sunset

    def moon_phase(self, instant: datetime) -> tuple[float, float]:
        """Moon-Sun elongation (0-360) and illuminated fraction (0-1)."""
        jd = self.julian_day(instant)
        sun_lon = self._calc(jd, Planet.SUN)[0]
        moon_lon, moon_lat = self._calc(jd, Planet.MOON)[:2]
        # Meeus ch. 48 lit fraction; swe.pheno_ut return layout differs across pyswisseph releases
        cos_elongation = math.cos(math.radians(moon_lat)) * math.cos(math.radians(moon_lon - sun_lon))
        return normalize_longitude(moon_lon - sun_lon), (1.0 - cos_elongation) / 2.0

    def next_solar_eclipse(self, after: datetime) -> tuple[datetime, str] | None:
        try:
            retflag, tret = swe.sol_eclipse_when_glob(self.julian_day(after), swe.FLG_SWIEPH)
        except Exception as exc:
            raise EphemerisError(f"solar eclipse search failed: {exc}") from exc
        if not retflag:
            return None
        if retflag & swe.ECL_TOTAL:
            kind = "total"
        elif retflag & (swe.ECL_ANNULAR | swe.ECL_ANNULAR_TOTAL):
            kind = "annular"
        else:
            kind = "partial"
        return julian_day_to_datetime(tret[0]), kind

    def next_lunar_eclipse(self, after: datetime) -> tuple[datetime, str] | None:
        try:
            retflag, tret = swe.lun_eclipse_when(self.julian_day(after), swe.FLG_SWIEPH)
        except Exception as exc:
            raise EphemerisError(f"lunar eclipse search failed: {exc}") from exc
        if not retflag:
            return None
        if retflag & swe.ECL_TOTAL:
            kind = "total"
        elif retflag & swe.ECL_PARTIAL:
            kind = "partial"
        else:
            kind = "penumbral"
        return julian_day_to_datetime(tret[0]), kind


@lru_cache(maxsize=1)
def get_default_provider() -> SwissEphemeris:
    """Shared Swiss Ephemeris adapter."""
    return SwissEphemeris()
