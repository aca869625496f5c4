"""
Progress Estimator.

Produces a 0-100 integer from the goal's logs under one of three policies,
selected by goal configuration:

- daily timeframe: completed logs against expected days since creation,
  plus a small consistency bonus for a busy trailing week
- deadline set (non-daily): blend of completion rate (60%) and elapsed
  time (40%) until the deadline passes, then completion rate alone
- otherwise: plain completion rate

Recalculation is a pure function of the current logs, so editing a
completed log back to incomplete can lower progress. A goal already in
`completed` status keeps progress at 100.
"""
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from mindtrack.config_manager import config
from mindtrack.models import DailyLog, Goal, GoalStatus, Timeframe

SECONDS_PER_DAY = 24 * 60 * 60


class ProgressPolicy(str, Enum):
    DAILY = "daily"
    DEADLINE_BLEND = "deadline_blend"
    COMPLETION_RATE = "completion_rate"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_percentage(value: float) -> int:
    return max(0, min(round_half_up(value), 100))


def completion_fraction(logs: List[DailyLog]) -> float:
    """Share of logs marked completed; 0.0 when there are no logs."""
    if not logs:
        return 0.0
    return sum(1 for log in logs if log.completed) / len(logs)


def select_policy(goal: Goal) -> ProgressPolicy:
    if goal.timeframe == Timeframe.DAILY:
        return ProgressPolicy.DAILY
    if goal.deadline is not None:
        return ProgressPolicy.DEADLINE_BLEND
    return ProgressPolicy.COMPLETION_RATE


def _daily_progress(goal: Goal, now: datetime) -> int:
    logs = goal.daily_logs
    if not logs:
        return 0

    elapsed = now - goal.created_at
    days_since_creation = max(0, math.floor(elapsed.total_seconds() / SECONDS_PER_DAY))
    expected_days = max(days_since_creation, config.MIN_EXPECTED_DAYS)

    completed = sum(1 for log in logs if log.completed)
    base = clamp_percentage(completed / expected_days * 100)

    window_start = now.date() - timedelta(days=config.CONSISTENCY_WINDOW_DAYS - 1)
    recent = [log for log in logs if window_start <= log.date <= now.date()]
    if len(recent) < config.CONSISTENCY_MIN_LOGS:
        return base

    bonus = round_half_up(completion_fraction(recent) * config.CONSISTENCY_BONUS_MAX)
    return min(base + bonus, 100)


def _deadline_progress(goal: Goal, now: datetime) -> int:
    fraction = completion_fraction(goal.daily_logs)
    if now >= goal.deadline:
        return clamp_percentage(fraction * 100)

    total = (goal.deadline - goal.created_at).total_seconds()
    if total <= 0:
        time_fraction = 1.0
    else:
        elapsed = (now - goal.created_at).total_seconds()
        time_fraction = max(0.0, min(elapsed / total, 1.0))

    blended = (
        fraction * config.DEADLINE_COMPLETION_WEIGHT
        + time_fraction * config.DEADLINE_TIME_WEIGHT
    )
    return clamp_percentage(blended * 100)


def calculate_progress(goal: Goal, now: Optional[datetime] = None) -> int:
    """Progress under the goal's policy. Does not touch the goal."""
    now = now or datetime.now()
    policy = select_policy(goal)

    if policy == ProgressPolicy.DAILY:
        return _daily_progress(goal, now)
    if policy == ProgressPolicy.DEADLINE_BLEND:
        return _deadline_progress(goal, now)
    return clamp_percentage(completion_fraction(goal.daily_logs) * 100)


def recalculate_progress(goal: Goal, now: Optional[datetime] = None) -> int:
    """Recompute and store goal.progress."""
    if goal.status == GoalStatus.COMPLETED:
        goal.progress = 100
    else:
        goal.progress = calculate_progress(goal, now)
    return goal.progress
