from datetime import datetime, timezone

import pytest

from timesheet_tracker.common.clock import FixedClock
from timesheet_tracker.timing.normalizer import TimeNormalizer


@pytest.fixture
def normalizer() -> TimeNormalizer:
    return TimeNormalizer("Europe/London")


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, winter time: London == UTC
    return datetime(2025, 1, 15, 11, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)
