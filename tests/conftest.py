# imports
from datetime import date, datetime, timedelta

import pytest
import pytz

from habitflow.config import reset_config
from habitflow.services.habit_service import HabitTracker

# fixed "today" for all engine tests: Friday 2024-03-15
TODAY = date(2024, 3, 15)


class FixedClock:
    """callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 1) -> None:
        self.now += timedelta(days=days)


@pytest.fixture(autouse=True)
def fresh_config():
    # re-read environment for every test (monkeypatched env must not leak)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FixedClock(pytz.UTC.localize(datetime(2024, 3, 15, 9, 30)))


@pytest.fixture
def tracker(clock):
    return HabitTracker(clock=clock, timezone="UTC", analytics_weeks=8)


@pytest.fixture
def days_ago():
    # ISO string for TODAY minus n days
    def _days_ago(n: int) -> str:
        return (TODAY - timedelta(days=n)).isoformat()

    return _days_ago
