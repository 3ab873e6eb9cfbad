"""Sun and moon positions, rise/set times and moon phase."""

from .astro import SUN_ANGLES, moon_phase, moon_position, moon_times, sun_position, sun_times
from .models import (
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

__all__ = [
    "sun_position",
    "sun_times",
    "moon_position",
    "moon_phase",
    "moon_times",
    "SUN_ANGLES",
    "SunPosition",
    "SunTimes",
    "TimeSpan",
    "MoonPosition",
    "MoonPhase",
    "MoonTimes",
    "MoonCrossing",
    "MoonAlwaysUp",
    "MoonAlwaysDown",
]
