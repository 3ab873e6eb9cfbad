"""Sun and moon positions, crossing times and moon phase."""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import numpy as np

from .coordinates import (
    OBLIQUITY,
    RAD,
    astro_refraction,
    horizontal_coords,
    moon_coords,
    moon_zodiac_coords,
    parallactic_angle,
    solar_ecliptic_longitude,
    solar_mean_anomaly,
    sun_coords,
    zodiac_sign,
)
from .models import (
    GeoCoordinate,
    MoonAlwaysDown,
    MoonAlwaysUp,
    MoonCrossing,
    MoonPhase,
    MoonPosition,
    MoonTimes,
    SunPosition,
    SunTimes,
    TimeSpan,
)
from .timescale import (
    J0,
    J2000,
    days_since_j2000,
    from_julian_date,
    julian_cycle,
    julian_day_number,
    local_midnight,
    shift_by_hours,
    to_julian_date,
)

__all__ = [
    "SUN_ANGLES",
    "sun_position",
    "sun_times",
    "moon_position",
    "moon_phase",
    "moon_times",
]

LOGGER = logging.getLogger(__name__)

# Horizon angles of the sun's center, in degrees.
SUN_ANGLES: Dict[str, float] = {
    "sunset": -0.83,
    "sunset_upper_limb": -0.83 + 0.53,
    "civil": -6.0,
    "nautical": -12.0,
    "astronomical": -18.0,
}

SUN_DISTANCE_KM = 149598000.0
MOON_PARALLAX = 0.133 * RAD
MOON_SAMPLE_HOURS = 24


def sun_position(instant: datetime, latitude: float, longitude: float) -> SunPosition:
    """Return the sun's azimuth and altitude for *instant* at the given location."""

    observer = GeoCoordinate(latitude=latitude, longitude=longitude)
    days = days_since_j2000(instant)
    horizontal = horizontal_coords(days, observer.phi, observer.lw, sun_coords(days))
    return SunPosition(
        azimuth=float(horizontal.azimuth), altitude=float(horizontal.altitude)
    )


def _hour_angle(angle: float, phi: float, dec: float) -> Optional[float]:
    cos_w = (math.sin(angle) - math.sin(phi) * math.sin(dec)) / (
        math.cos(phi) * math.cos(dec)
    )
    if not -1.0 <= cos_w <= 1.0:
        return None
    return math.acos(cos_w)


def _instant(julian_date: Optional[float]) -> Optional[datetime]:
    if julian_date is None:
        return None
    return from_julian_date(julian_date)


def sun_times(instant: datetime, latitude: float, longitude: float) -> SunTimes:
    """Compute sunrise, sunset, twilight bands and solar transit.

    Parameters
    ----------
    instant:
        Any timezone-aware moment of the requested day.
    latitude, longitude:
        Observer coordinates in degrees (east-positive longitude).

    Returns
    -------
    SunTimes
        Crossings that do not occur on that day (polar day or night for a
        given angle) are left as ``None``.
    """

    observer = GeoCoordinate(latitude=latitude, longitude=longitude)
    lw, phi = observer.lw, observer.phi

    cycle = julian_cycle(to_julian_date(instant), lw)
    approx_transit = J2000 + J0 + lw / (2 * math.pi) + cycle
    mean_anomaly = solar_mean_anomaly(approx_transit - J2000)
    ecliptic_longitude = solar_ecliptic_longitude(mean_anomaly)
    dec = math.asin(math.sin(ecliptic_longitude) * math.sin(OBLIQUITY))
    correction = 0.0053 * math.sin(mean_anomaly) - 0.0069 * math.sin(2 * ecliptic_longitude)
    transit = approx_transit + correction

    sets: Dict[str, Optional[float]] = {}
    rises: Dict[str, Optional[float]] = {}
    for name, angle in SUN_ANGLES.items():
        w = _hour_angle(angle * RAD, phi, dec)
        if w is None:
            LOGGER.debug(
                json.dumps(
                    {
                        "event": "sun_crossing_absent",
                        "angle_deg": angle,
                        "lat": latitude,
                        "lon": longitude,
                    }
                )
            )
            sets[name] = rises[name] = None
            continue
        julian_set = J2000 + J0 + (w + lw) / (2 * math.pi) + cycle + correction
        sets[name] = julian_set
        rises[name] = transit - (julian_set - transit)

    def span(start: Optional[float], end: Optional[float]) -> TimeSpan:
        return TimeSpan(start=_instant(start), end=_instant(end))

    return SunTimes(
        sunrise=span(rises["sunset"], rises["sunset_upper_limb"]),
        civil_dawn=span(rises["civil"], rises["sunset"]),
        nautical_dawn=span(rises["nautical"], rises["civil"]),
        astronomical_dawn=span(rises["astronomical"], rises["nautical"]),
        dawn=_instant(rises["civil"]),
        sunset=span(sets["sunset_upper_limb"], sets["sunset"]),
        civil_dusk=span(sets["sunset"], sets["civil"]),
        nautical_dusk=span(sets["civil"], sets["nautical"]),
        astronomical_dusk=span(sets["nautical"], sets["astronomical"]),
        dusk=_instant(sets["civil"]),
        transit=from_julian_date(transit),
    )


def _moon_altitude(days, phi: float, lw: float):
    """Refraction-corrected moon altitude; *days* may be an array."""

    equatorial, _ = moon_coords(days)
    alt = horizontal_coords(days, phi, lw, equatorial).altitude
    return alt + astro_refraction(alt)


def moon_position(instant: datetime, latitude: float, longitude: float) -> MoonPosition:
    """Return the moon's position in the sky, distance and zodiac sign."""

    observer = GeoCoordinate(latitude=latitude, longitude=longitude)
    days = days_since_j2000(instant)
    equatorial, distance = moon_coords(days)
    horizontal = horizontal_coords(days, observer.phi, observer.lw, equatorial)
    alt = horizontal.altitude + astro_refraction(horizontal.altitude)
    zodiac_latitude, zodiac_longitude = moon_zodiac_coords(julian_day_number(instant))

    return MoonPosition(
        azimuth=float(horizontal.azimuth),
        altitude=float(alt),
        distance=float(distance),
        parallactic_angle=float(
            parallactic_angle(horizontal.hour_angle, observer.phi, equatorial.declination)
        ),
        latitude=zodiac_latitude,
        longitude=zodiac_longitude,
        zodiac_sign=zodiac_sign(zodiac_longitude),
    )


def moon_phase(instant: datetime) -> MoonPhase:
    """Return the moon's illuminated fraction, phase and bright limb angle."""

    days = days_since_j2000(instant)
    sun = sun_coords(days)
    moon, moon_distance = moon_coords(days)
    sun_dec, moon_dec = float(sun.declination), float(moon.declination)
    delta_ra = float(sun.right_ascension - moon.right_ascension)

    cos_phi = math.sin(sun_dec) * math.sin(moon_dec) + math.cos(sun_dec) * math.cos(
        moon_dec
    ) * math.cos(delta_ra)
    phi = math.acos(float(np.clip(cos_phi, -1.0, 1.0)))
    inc = math.atan2(
        SUN_DISTANCE_KM * math.sin(phi),
        float(moon_distance) - SUN_DISTANCE_KM * math.cos(phi),
    )
    angle = math.atan2(
        math.cos(sun_dec) * math.sin(delta_ra),
        math.sin(sun_dec) * math.cos(moon_dec)
        - math.cos(sun_dec) * math.sin(moon_dec) * math.cos(delta_ra),
    )
    sign = -1 if angle < 0 else 1

    return MoonPhase(
        fraction=(1 + math.cos(inc)) / 2,
        phase=0.5 + 0.5 * inc * sign / math.pi,
        angle=angle,
    )


def _window_roots(h0: float, h1: float, h2: float) -> Tuple[List[float], float]:
    """Fit a parabola through (-1, h0), (0, h1), (1, h2) and find its zeros.

    Returns the roots inside ``[-1, 1]`` in ascending order together with
    the extreme value of the fitted curve.
    """

    a = (h0 + h2) / 2 - h1
    b = (h2 - h0) / 2
    if a == 0:
        # The three samples are collinear.
        if b == 0:
            return [], h1
        x = -h1 / b
        return ([x] if abs(x) <= 1 else []), h1

    xe = -b / (2 * a)
    ye = (a * xe + b) * xe + h1
    d = b * b - 4 * a * h1
    if d < 0:
        return [], ye

    dx = math.sqrt(d) / (abs(a) * 2)
    roots = [x for x in (xe - dx, xe + dx) if abs(x) <= 1]
    return roots, ye


def moon_times(instant: datetime, latitude: float, longitude: float) -> MoonTimes:
    """Find moonrise and moonset during the 24 hours after local midnight.

    The day starts at midnight of *instant*'s own timezone. Altitudes are
    sampled hourly and each two hour window is searched for horizon
    crossings with a quadratic fit.
    """

    observer = GeoCoordinate(latitude=latitude, longitude=longitude)
    start = local_midnight(instant)
    hours = np.arange(MOON_SAMPLE_HOURS + 1)
    days = days_since_j2000(start) + hours / 24.0
    samples = (_moon_altitude(days, observer.phi, observer.lw) - MOON_PARALLAX).tolist()

    moonrise: Optional[float] = None
    moonset: Optional[float] = None
    ye = 0.0
    for i in range(1, MOON_SAMPLE_HOURS, 2):
        h0, h1, h2 = samples[i - 1], samples[i], samples[i + 1]
        roots, ye = _window_roots(h0, h1, h2)

        if len(roots) == 1:
            if h0 < 0:
                moonrise = i + roots[0]
            else:
                moonset = i + roots[0]
        elif len(roots) == 2:
            x1, x2 = roots
            moonrise = i + (x2 if ye < 0 else x1)
            moonset = i + (x1 if ye < 0 else x2)

        if moonrise is not None and moonset is not None:
            break

    if moonrise is None and moonset is None:
        result = MoonAlwaysUp() if ye > 0 else MoonAlwaysDown()
        LOGGER.debug(
            json.dumps(
                {
                    "event": "moon_no_crossing",
                    "kind": result.kind,
                    "date": start.date().isoformat(),
                    "lat": latitude,
                    "lon": longitude,
                }
            )
        )
        return result

    return MoonCrossing(
        moonrise=shift_by_hours(start, moonrise) if moonrise is not None else None,
        moonset=shift_by_hours(start, moonset) if moonset is not None else None,
    )
