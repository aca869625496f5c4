import logging
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mindtrack.goal_service import GoalService  # noqa: E402
from mindtrack.models import DailyLog, Goal, GoalCategory, Timeframe  # noqa: E402
from mindtrack.store import GoalStore  # noqa: E402

NOW = datetime(2026, 3, 15, 12, 0, 0)
TODAY = NOW.date()


class FakeClock:
    """Settable clock for services under test."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now += timedelta(days=days, hours=hours)


def make_goal(
    created_days_ago: int = 0,
    timeframe: Timeframe = Timeframe.DAILY,
    deadline=None,
    **kwargs,
) -> Goal:
    defaults = dict(
        id="goal_test",
        owner_id="user_1",
        title="Meditate",
        category=GoalCategory.MINDFULNESS,
        target="10 minutes a day",
        timeframe=timeframe,
        deadline=deadline,
        created_at=NOW - timedelta(days=created_days_ago),
    )
    defaults.update(kwargs)
    return Goal(**defaults)


def add_logs(goal: Goal, days_ago_completed: dict) -> Goal:
    """days_ago_completed maps offset-from-TODAY -> completed flag."""
    for offset, completed in sorted(days_ago_completed.items(), reverse=True):
        goal.daily_logs.append(DailyLog(date=TODAY - timedelta(days=offset), completed=completed))
    return goal


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    return GoalStore(root=tmp_path / "goals")


@pytest.fixture
def service(store, clock):
    return GoalService(store=store, clock=clock, rng=random.Random(7))


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    yield
    for name in ("mindtrack", "mindtrack.corruption"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
