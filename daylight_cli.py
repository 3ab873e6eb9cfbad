"""Command line front end printing sun and moon data as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import time
from datetime import UTC, datetime
from typing import Dict, List, Optional

from daylight import moon_phase, moon_position, moon_times, sun_position, sun_times

LOGGER = logging.getLogger("daylight-cli")

BODIES = ("sun", "moon", "all")


def _parse_instant(value: str) -> datetime:
    """Parse a date or datetime; values without an offset are taken as UTC."""

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 date: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="daylight",
        description="Sun and moon positions, rise/set times and moon phase",
    )
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument(
        "--lon", type=float, required=True, help="Longitude in degrees, east-positive"
    )
    parser.add_argument(
        "--date",
        type=_parse_instant,
        default=None,
        help="ISO-8601 date or datetime (default: now, UTC)",
    )
    parser.add_argument("--body", choices=BODIES, default="all")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("DAYLIGHT_LOG_LEVEL", "INFO"),
        help="Logging level (default: $DAYLIGHT_LOG_LEVEL or INFO)",
    )
    return parser


def compute(instant: datetime, lat: float, lon: float, body: str) -> Dict[str, object]:
    """Run the requested computations and return a JSON-ready mapping."""

    payload: Dict[str, object] = {
        "instant": instant.isoformat(),
        "latitude": lat,
        "longitude": lon,
    }
    if body in ("sun", "all"):
        payload["sun"] = {
            "position": sun_position(instant, lat, lon).model_dump(mode="json"),
            "times": sun_times(instant, lat, lon).model_dump(mode="json"),
        }
    if body in ("moon", "all"):
        payload["moon"] = {
            "position": moon_position(instant, lat, lon).model_dump(mode="json"),
            "phase": moon_phase(instant).model_dump(mode="json"),
            "times": moon_times(instant, lat, lon).model_dump(mode="json"),
        }
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(message)s")

    instant = args.date or datetime.now(UTC)
    start_time = time.perf_counter()
    try:
        payload = compute(instant, args.lat, args.lon, args.body)
    except ValueError as exc:
        LOGGER.error(json.dumps({"event": "error", "code": "value_error", "message": str(exc)}))
        return 1
    duration_ms = (time.perf_counter() - start_time) * 1000.0

    print(json.dumps(payload, indent=2))
    LOGGER.info(
        json.dumps(
            {
                "event": "daylight",
                "lat": args.lat,
                "lon": args.lon,
                "instant": instant.isoformat(),
                "body": args.body,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
