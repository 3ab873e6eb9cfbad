"""Low-precision solar and lunar coordinates and the horizontal transform.

Every formula is written with numpy ufuncs so that it accepts either a
scalar or an array of day offsets; the moon rise/set sampler evaluates a
whole day of altitudes in one call.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

__all__ = [
    "RAD",
    "OBLIQUITY",
    "ZODIAC_SIGNS",
    "EquatorialCoordinates",
    "HorizontalCoordinates",
    "EclipticCoordinates",
    "solar_mean_anomaly",
    "equation_of_center",
    "solar_ecliptic_longitude",
    "right_ascension",
    "declination",
    "sun_coords",
    "moon_ecliptic_coords",
    "moon_coords",
    "moon_zodiac_coords",
    "zodiac_sign",
    "sidereal_time",
    "azimuth",
    "altitude",
    "astro_refraction",
    "parallactic_angle",
    "horizontal_coords",
]

RAD = math.pi / 180.0
OBLIQUITY = RAD * 23.4397  # Earth's axial tilt, no secular drift.
EARTH_PERIHELION = RAD * 102.9372

ZODIAC_SIGNS: Tuple[Tuple[str, float], ...] = (
    ("Aries", 0.0),
    ("Taurus", 30.0),
    ("Gemini", 60.0),
    ("Cancer", 90.0),
    ("Leo", 120.0),
    ("Virgo", 150.0),
    ("Libra", 180.0),
    ("Scorpio", 210.0),
    ("Sagittarius", 240.0),
    ("Capricorn", 270.0),
    ("Aquarius", 300.0),
    ("Pisces", 330.0),
)
_SIGN_WIDTH = 30.0


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Right ascension and declination in radians."""

    right_ascension: float
    declination: float


@dataclass(frozen=True)
class EclipticCoordinates:
    """Ecliptic longitude/latitude in radians and distance in kilometers."""

    longitude: float
    latitude: float
    distance: float


@dataclass(frozen=True)
class HorizontalCoordinates:
    """Azimuth (from south, westward) and altitude, both in radians."""

    azimuth: float
    altitude: float
    hour_angle: float


def solar_mean_anomaly(days):
    return RAD * (357.5291 + 0.98560028 * days)


def equation_of_center(mean_anomaly):
    return RAD * (
        1.9148 * np.sin(mean_anomaly)
        + 0.02 * np.sin(2 * mean_anomaly)
        + 0.0003 * np.sin(3 * mean_anomaly)
    )


def solar_ecliptic_longitude(mean_anomaly):
    return mean_anomaly + equation_of_center(mean_anomaly) + EARTH_PERIHELION + math.pi


def right_ascension(lon, lat):
    return np.arctan2(
        np.sin(lon) * math.cos(OBLIQUITY) - np.tan(lat) * math.sin(OBLIQUITY),
        np.cos(lon),
    )


def declination(lon, lat):
    return np.arcsin(
        np.sin(lat) * math.cos(OBLIQUITY)
        + np.cos(lat) * math.sin(OBLIQUITY) * np.sin(lon)
    )


def sun_coords(days) -> EquatorialCoordinates:
    mean_anomaly = solar_mean_anomaly(days)
    longitude = solar_ecliptic_longitude(mean_anomaly)
    return EquatorialCoordinates(
        right_ascension=right_ascension(longitude, 0.0),
        declination=declination(longitude, 0.0),
    )


def moon_ecliptic_coords(days) -> EclipticCoordinates:
    """Geocentric ecliptic coordinates of the Moon, leading terms only."""

    mean_longitude = RAD * (218.316 + 13.176396 * days)
    mean_anomaly = RAD * (134.963 + 13.064993 * days)
    mean_distance = RAD * (93.272 + 13.229350 * days)

    return EclipticCoordinates(
        longitude=mean_longitude + RAD * 6.289 * np.sin(mean_anomaly),
        latitude=RAD * 5.128 * np.sin(mean_distance),
        distance=385001 - 20905 * np.cos(mean_anomaly),
    )


def moon_coords(days) -> Tuple[EquatorialCoordinates, float]:
    """Return the Moon's equatorial coordinates and its distance in km."""

    ecliptic = moon_ecliptic_coords(days)
    equatorial = EquatorialCoordinates(
        right_ascension=right_ascension(ecliptic.longitude, ecliptic.latitude),
        declination=declination(ecliptic.longitude, ecliptic.latitude),
    )
    return equatorial, ecliptic.distance


def _fraction(value: float) -> float:
    return value - math.floor(value)


def moon_zodiac_coords(julian_day_number: int) -> Tuple[float, float]:
    """Return the Moon's astrological ecliptic latitude and longitude in degrees.

    This is a separate four-term periodic model (synodic, anomalistic,
    draconic and sidereal periods) evaluated on a whole Julian Day Number.
    It does not agree exactly with :func:`moon_ecliptic_coords` and is only
    meant for the zodiac sign lookup.
    """

    ip = 2 * math.pi * _fraction((julian_day_number - 2451550.1) / 29.530588853)
    dp = 2 * math.pi * _fraction((julian_day_number - 2451562.2) / 27.55454988)
    np_ = 2 * math.pi * _fraction((julian_day_number - 2451565.2) / 27.212220817)
    rp = _fraction((julian_day_number - 2451555.8) / 27.321582241)

    latitude = 5.1 * math.sin(np_)
    longitude = (
        360 * rp
        + 6.3 * math.sin(dp)
        + 1.3 * math.sin(2 * ip - dp)
        + 0.7 * math.sin(2 * ip)
    )
    return latitude, longitude


def zodiac_sign(longitude_deg: float) -> str:
    """Return the zodiac sign whose 30 degree band contains *longitude_deg*."""

    longitude_deg %= 360.0
    for name, lower in ZODIAC_SIGNS:
        if lower <= longitude_deg < lower + _SIGN_WIDTH:
            return name
    # 360.0 % 360.0 can round to 360.0 for tiny negative inputs.
    return ZODIAC_SIGNS[0][0]


def sidereal_time(days, lw):
    return RAD * (280.16 + 360.9856235 * days) - lw


def azimuth(hour_angle, phi, dec):
    return np.arctan2(
        np.sin(hour_angle),
        np.cos(hour_angle) * math.sin(phi) - np.tan(dec) * math.cos(phi),
    )


def altitude(hour_angle, phi, dec):
    return np.arcsin(
        math.sin(phi) * np.sin(dec)
        + math.cos(phi) * np.cos(dec) * np.cos(hour_angle)
    )


def astro_refraction(alt):
    """Approximate atmospheric refraction in radians for an altitude in radians.

    Negative altitudes are treated as the horizon.
    """

    alt = np.maximum(alt, 0.0)
    return 0.0002967 / np.tan(alt + 0.00312536 / (alt + 0.08901179))


def parallactic_angle(hour_angle, phi, dec):
    return np.arctan2(
        np.sin(hour_angle),
        math.tan(phi) * np.cos(dec) - np.sin(dec) * np.cos(hour_angle),
    )


def horizontal_coords(
    days, phi: float, lw: float, equatorial: EquatorialCoordinates
) -> HorizontalCoordinates:
    """Project equatorial coordinates onto the observer's horizon."""

    hour_angle = sidereal_time(days, lw) - equatorial.right_ascension
    return HorizontalCoordinates(
        azimuth=azimuth(hour_angle, phi, equatorial.declination),
        altitude=altitude(hour_angle, phi, equatorial.declination),
        hour_angle=hour_angle,
    )
