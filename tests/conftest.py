from __future__ import annotations

import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Manhattan latitude with an eastern longitude, as in the reference data.
LATITUDE = 40.74
LONGITUDE = 74.00


@pytest.fixture
def reference_instant() -> datetime:
    return datetime(2019, 2, 9, 18, 0, tzinfo=UTC)


@pytest.fixture
def location() -> tuple[float, float]:
    return LATITUDE, LONGITUDE
