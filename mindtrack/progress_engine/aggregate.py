"""
Goal aggregate operations.

Composes the engine stages into the public mutations of a Goal. Every
function here works on an in-memory goal and returns it; loading and
saving belong to the caller (GoalService), which persists once per
operation.

log_progress pipeline:
    recorder -> streaks -> progress -> completion check -> achievements
    -> progress feedback -> struggle suggestions
"""
import random
from datetime import datetime
from typing import Any, List, Mapping, Optional

from mindtrack.models import Achievement, FeedbackType, Goal, GoalStatus
from mindtrack.progress_engine.achievements import evaluate_achievements
from mindtrack.progress_engine.feedback import add_feedback, progress_feedback, struggle_suggestions
from mindtrack.progress_engine.progress import recalculate_progress
from mindtrack.progress_engine.recorder import DayLike, clean_fields, record_log
from mindtrack.progress_engine.streaks import recalculate_streak


def complete_goal(goal: Goal, now: Optional[datetime] = None) -> None:
    now = now or datetime.now()
    goal.status = GoalStatus.COMPLETED
    goal.progress = 100
    if goal.completed_at is None:
        goal.completed_at = now
    goal.touch(now)


def refresh_derived_state(goal: Goal, now: Optional[datetime] = None) -> List[Achievement]:
    """
    Recompute streaks and progress, complete the goal at 100%, then unlock
    achievements.

    Returns:
        Newly unlocked achievements.
    """
    now = now or datetime.now()
    recalculate_streak(goal, now.date())
    recalculate_progress(goal, now)

    if goal.progress >= 100 and goal.status != GoalStatus.COMPLETED:
        complete_goal(goal, now)

    return evaluate_achievements(goal, now)


def log_progress(
    goal: Goal,
    day: DayLike,
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Achievement]:
    """
    Record a day and run the full pipeline on `goal`.

    Returns:
        Achievements unlocked by this log.
    """
    now = now or datetime.now()
    record_log(goal, day, fields, now)
    unlocked = refresh_derived_state(goal, now)

    cleaned = clean_fields(fields)
    reaction = progress_feedback(goal, cleaned, rng)
    add_feedback(goal, reaction["type"], reaction["message"], now=now)

    suggestions = struggle_suggestions(cleaned)
    if suggestions:
        add_feedback(goal, FeedbackType.SUGGESTION, " ".join(suggestions), now=now)

    return unlocked


def mark_complete(goal: Goal, now: Optional[datetime] = None) -> List[Achievement]:
    """Force completion (progress 100) and unlock whatever that crosses."""
    now = now or datetime.now()
    complete_goal(goal, now)
    return evaluate_achievements(goal, now)
