from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import numpy as np
import pytest
from pydantic import TypeAdapter, ValidationError

from daylight import (
    MoonAlwaysDown,
    MoonAlwaysUp,
    MoonCrossing,
    MoonTimes,
    moon_phase,
    moon_position,
    moon_times,
)
from daylight.astro import _moon_altitude, _window_roots
from daylight.timescale import days_since_j2000


def test_moon_position_reference(reference_instant, location):
    position = moon_position(reference_instant, *location)
    assert position.azimuth == pytest.approx(1.79, abs=0.01)
    assert position.altitude == pytest.approx(-0.22, abs=0.01)
    assert position.distance == pytest.approx(395825.55, abs=0.01)
    assert position.parallactic_angle == pytest.approx(0.83, abs=0.01)
    assert position.latitude == pytest.approx(-5.03, abs=0.01)
    assert position.longitude == pytest.approx(10.08, abs=0.01)
    assert position.zodiac_sign == "Aries"


def test_moon_phase_reference(reference_instant):
    phase = moon_phase(reference_instant)
    assert phase.fraction == pytest.approx(0.21, abs=0.01)
    assert phase.phase == pytest.approx(0.15, abs=0.01)
    assert phase.angle == pytest.approx(-1.90, abs=0.01)


def test_moon_times_reference(location):
    # Same moment as the reference instant, seen from UTC+2.
    instant = datetime(2019, 2, 9, 20, 0, tzinfo=timezone(timedelta(hours=2)))
    times = moon_times(instant, *location)

    assert isinstance(times, MoonCrossing)
    expected_rise = datetime(2019, 2, 9, 4, 29, 37, 76000, tzinfo=UTC)
    expected_set = datetime(2019, 2, 9, 16, 50, 15, 974000, tzinfo=UTC)
    assert abs(times.moonrise - expected_rise) <= timedelta(seconds=1)
    assert abs(times.moonset - expected_set) <= timedelta(seconds=1)
    assert not times.always_up
    assert not times.always_down


def test_moon_always_down_at_pole():
    times = moon_times(datetime(2019, 1, 1, tzinfo=UTC), 90, 45)
    assert isinstance(times, MoonAlwaysDown)
    assert times.always_down
    assert not times.always_up
    assert not hasattr(times, "moonrise")


@pytest.mark.parametrize("latitude", [-66.0, 0.0, 40.74, 70.0, 89.0])
def test_moon_times_are_exclusive(latitude):
    start = datetime(2019, 3, 1, tzinfo=UTC)
    for offset in range(0, 28, 3):
        day = start + timedelta(days=offset)
        times = moon_times(day, latitude, 10.0)
        if isinstance(times, MoonCrossing):
            assert times.moonrise is not None or times.moonset is not None
            assert not (times.always_up or times.always_down)
            for crossing in (times.moonrise, times.moonset):
                if crossing is not None:
                    assert day <= crossing <= day + timedelta(days=1)
        else:
            assert times.always_up != times.always_down


def test_moon_crossing_requires_an_event():
    with pytest.raises(ValidationError):
        MoonCrossing()


def test_moon_times_union_round_trip():
    adapter = TypeAdapter(MoonTimes)
    assert isinstance(adapter.validate_python({"kind": "always_up"}), MoonAlwaysUp)
    parsed = adapter.validate_python(
        {"kind": "crossing", "moonset": "2019-02-09T16:50:15Z"}
    )
    assert isinstance(parsed, MoonCrossing)
    assert parsed.moonrise is None


def test_moon_phase_ranges():
    start = datetime(2019, 1, 1, tzinfo=UTC)
    for hours in range(0, 24 * 60, 13):
        phase = moon_phase(start + timedelta(hours=hours))
        assert 0.0 <= phase.fraction <= 1.0
        assert 0.0 <= phase.phase <= 1.0


def test_moon_phase_new_and_full():
    new = moon_phase(datetime(2019, 2, 4, 21, 3, tzinfo=UTC))
    full = moon_phase(datetime(2019, 2, 19, 15, 53, tzinfo=UTC))
    assert new.fraction < 0.05
    assert full.fraction > 0.95
    assert full.phase == pytest.approx(0.5, abs=0.05)


def test_sampled_altitudes_match_single_evaluations(location):
    phi, lw = np.radians(location[0]), np.radians(-location[1])
    start = days_since_j2000(datetime(2019, 2, 9, tzinfo=UTC))
    days = start + np.arange(25) / 24.0
    curve = _moon_altitude(days, float(phi), float(lw))
    singles = [_moon_altitude(float(d), float(phi), float(lw)) for d in days]
    np.testing.assert_allclose(curve, singles, rtol=0, atol=1e-9)


def test_window_roots():
    # Rising through the horizon in the middle of the window.
    roots, _ = _window_roots(-1.0, 0.0, 1.0)
    assert roots == [0.0]
    # Apex above the horizon: two crossings.
    roots, ye = _window_roots(-1.0, 1.0, -1.0)
    assert ye > 0
    assert roots == pytest.approx([-0.5**0.5, 0.5**0.5])
    # Entirely below the horizon.
    roots, ye = _window_roots(-1.0, -0.5, -1.0)
    assert roots == []
    assert ye < 0
