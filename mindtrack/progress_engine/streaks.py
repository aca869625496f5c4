"""
Streak Calculator.

current_streak: consecutive days ending today with a completed log.
longest_streak: high-water mark of current_streak; only ever raised here,
so editing or losing old logs cannot lower it.
"""
from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from mindtrack.models import Goal


def count_current_streak(goal: Goal, today: Optional[date] = None) -> int:
    """
    Walk back from today one day at a time until the first gap.

    Logs dated after today neither count nor break the run.
    """
    today = today or datetime.now().date()
    completed_days = {log.date for log in goal.daily_logs if log.completed}

    streak = 0
    while today - timedelta(days=streak) in completed_days:
        streak += 1
    return streak


def recalculate_streak(goal: Goal, today: Optional[date] = None) -> Tuple[int, int]:
    """
    Recompute current_streak and raise longest_streak if needed.

    Returns:
        (current, longest), both also written back onto the goal.
    """
    current = count_current_streak(goal, today)
    goal.current_streak = current
    if current > goal.longest_streak:
        goal.longest_streak = current
    return goal.current_streak, goal.longest_streak
