"""Pydantic models for observer input and computation results."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "GeoCoordinate",
    "SunPosition",
    "TimeSpan",
    "SunTimes",
    "MoonPosition",
    "MoonPhase",
    "MoonCrossing",
    "MoonAlwaysUp",
    "MoonAlwaysDown",
    "MoonTimes",
]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class GeoCoordinate(_Frozen):
    """Observer location. Ranges are not enforced."""

    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees, east-positive")

    @property
    def phi(self) -> float:
        """Latitude in radians."""
        return math.radians(self.latitude)

    @property
    def lw(self) -> float:
        """West-positive longitude in radians."""
        return math.radians(-self.longitude)


class SunPosition(_Frozen):
    azimuth: float = Field(
        ..., description="Radians from south towards west, e.g. 3/4 pi is northwest"
    )
    altitude: float = Field(
        ..., description="Radians above the horizon, pi/2 at the zenith"
    )


class TimeSpan(_Frozen):
    """Transition band between two horizon crossings.

    An endpoint is ``None`` when the crossing does not happen that day,
    e.g. during polar day or polar night.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None


class SunTimes(_Frozen):
    """Sun crossing times for one day and location."""

    sunrise: TimeSpan = Field(..., description="Sun center to upper limb clearing the horizon")
    civil_dawn: TimeSpan = Field(..., description="Sun 6 degrees below the horizon to sunrise")
    nautical_dawn: TimeSpan = Field(..., description="12 to 6 degrees below the horizon")
    astronomical_dawn: TimeSpan = Field(..., description="18 to 12 degrees below the horizon")
    dawn: Optional[datetime] = Field(None, description="Sun 6 degrees below the horizon, morning")
    sunset: TimeSpan = Field(..., description="Upper limb to sun center at the horizon")
    civil_dusk: TimeSpan = Field(..., description="Sunset to 6 degrees below the horizon")
    nautical_dusk: TimeSpan = Field(..., description="6 to 12 degrees below the horizon")
    astronomical_dusk: TimeSpan = Field(..., description="12 to 18 degrees below the horizon")
    dusk: Optional[datetime] = Field(None, description="Sun 6 degrees below the horizon, evening")
    transit: datetime = Field(..., description="Solar noon")


class MoonPosition(_Frozen):
    azimuth: float = Field(..., description="Radians from south towards west")
    altitude: float = Field(..., description="Radians, refraction corrected")
    distance: float = Field(..., description="Earth to Moon distance in kilometers")
    parallactic_angle: float = Field(..., description="Radians")
    latitude: float = Field(..., description="Astrological ecliptic latitude in degrees")
    longitude: float = Field(..., description="Astrological ecliptic longitude in degrees")
    zodiac_sign: str


class MoonPhase(_Frozen):
    fraction: float = Field(
        ..., ge=0.0, le=1.0, description="Illuminated fraction, 0 new moon to 1 full moon"
    )
    phase: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="0 new moon, 0.25 first quarter, 0.5 full moon, 0.75 last quarter",
    )
    angle: float = Field(
        ...,
        description=(
            "Midpoint angle in radians of the illuminated limb, eastward from the "
            "north point of the disk; negative while waxing, positive while waning"
        ),
    )


class MoonCrossing(_Frozen):
    """The Moon crosses the horizon at least once during the day."""

    kind: Literal["crossing"] = "crossing"
    moonrise: Optional[datetime] = None
    moonset: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_crossing(self) -> "MoonCrossing":
        if self.moonrise is None and self.moonset is None:
            raise ValueError("a crossing needs a moonrise or a moonset")
        return self

    @property
    def always_up(self) -> bool:
        return False

    @property
    def always_down(self) -> bool:
        return False


class MoonAlwaysUp(_Frozen):
    kind: Literal["always_up"] = "always_up"

    @property
    def always_up(self) -> bool:
        return True

    @property
    def always_down(self) -> bool:
        return False


class MoonAlwaysDown(_Frozen):
    kind: Literal["always_down"] = "always_down"

    @property
    def always_up(self) -> bool:
        return False

    @property
    def always_down(self) -> bool:
        return True


MoonTimes = Annotated[
    Union[MoonCrossing, MoonAlwaysUp, MoonAlwaysDown],
    Field(discriminator="kind"),
]
