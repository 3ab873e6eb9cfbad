"""Conversions between civil instants and Julian dates."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import erfa

__all__ = [
    "J1970",
    "J2000",
    "ensure_aware",
    "to_julian_date",
    "days_since_j2000",
    "julian_cycle",
    "from_julian_date",
    "shift_by_hours",
    "local_midnight",
    "julian_day_number",
]

DAY_MS = erfa.DAYSEC * 1000.0
J1970 = 2440588
J2000 = erfa.DJ00
J0 = 0.0009  # Mean solar transit offset of the Julian cycle, in days.

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)
_GREGORIAN_JDN = 2299160


def ensure_aware(instant: datetime) -> datetime:
    if instant.tzinfo is None or instant.tzinfo.utcoffset(instant) is None:
        raise ValueError("datetime must be timezone-aware")
    return instant


def _epoch_millis(instant: datetime) -> float:
    return (ensure_aware(instant) - _EPOCH) / _ONE_MS


def to_julian_date(instant: datetime) -> float:
    """Return the Julian date of *instant*."""

    return _epoch_millis(instant) / DAY_MS - 0.5 + J1970


def days_since_j2000(instant: datetime) -> float:
    return to_julian_date(instant) - J2000


def julian_cycle(julian_date: float, lw: float) -> int:
    """Return the Julian cycle number anchoring solar noon to the right day.

    Parameters
    ----------
    julian_date:
        Julian date of the query instant.
    lw:
        West-positive observer longitude in radians.
    """

    # Halves round up, as a mean solar noon search expects.
    return math.floor(julian_date - J2000 - J0 - lw / (2 * math.pi) + 0.5)


def from_julian_date(julian_date: float) -> datetime:
    """Return the UTC instant of *julian_date*, rounded to the millisecond."""

    millis = round((julian_date + 0.5 - J1970) * DAY_MS)
    return _EPOCH + timedelta(milliseconds=millis)


def shift_by_hours(instant: datetime, hours: float) -> datetime:
    """Move *instant* by *hours* of absolute time; the result is in UTC."""

    millis = round(hours * DAY_MS / 24)
    return ensure_aware(instant).astimezone(UTC) + timedelta(milliseconds=millis)


def local_midnight(instant: datetime) -> datetime:
    """Zero the time of day of *instant* in its own timezone."""

    return ensure_aware(instant).replace(hour=0, minute=0, second=0, microsecond=0)


def julian_day_number(instant: datetime) -> int:
    """Integer Julian Day Number of the civil calendar date of *instant*.

    The date is read in the instant's own timezone. Dates before the
    Gregorian reform are counted in the Julian calendar.
    """

    ensure_aware(instant)
    year, month, day = instant.year, instant.month, instant.day
    yy = year - math.floor((12 - month) / 10)
    mm = month + 9
    if mm >= 12:
        mm -= 12

    k1 = math.floor(365.25 * (yy + 4712))
    k2 = math.floor(30.6 * mm + 0.5)
    k3 = math.floor(math.floor(yy / 100 + 49) * 0.75) - 38
    jdn = k1 + k2 + day + 59
    if jdn > _GREGORIAN_JDN:
        jdn -= k3
    return jdn
