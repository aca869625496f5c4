"""
Achievement Evaluator.

Checks the streak and progress threshold tables and unlocks every crossed
badge that the goal does not hold yet. Names are unique per goal, so
re-running without new progress unlocks nothing. Achievements are never
removed, even if streak or progress later drops.
"""
from datetime import datetime
from typing import List, Optional

from mindtrack.catalog import ACHIEVEMENT_THRESHOLDS, AchievementSpec, ThresholdKind
from mindtrack.models import Achievement, FeedbackType, Goal
from mindtrack.progress_engine.feedback import add_feedback


def _metric(goal: Goal, kind: ThresholdKind) -> int:
    if kind == ThresholdKind.STREAK:
        return goal.current_streak
    return goal.progress


def crossed_thresholds(goal: Goal) -> List[AchievementSpec]:
    """Specs whose threshold is met and whose badge is still locked."""
    pending: List[AchievementSpec] = []
    for kind, specs in ACHIEVEMENT_THRESHOLDS.items():
        value = _metric(goal, kind)
        for spec in specs:
            if value >= spec.threshold and not goal.has_achievement(spec.name):
                pending.append(spec)
    return pending


def unlock_achievement(goal: Goal, spec: AchievementSpec, now: Optional[datetime] = None) -> Optional[Achievement]:
    """Append the badge plus a celebration entry; None if already held."""
    if goal.has_achievement(spec.name):
        return None

    achievement = Achievement(
        name=spec.name,
        description=spec.description,
        icon=spec.icon,
        unlocked_at=now or datetime.now(),
    )
    goal.achievements.append(achievement)
    add_feedback(
        goal,
        FeedbackType.CELEBRATION,
        f"🎉 Achievement Unlocked: {spec.name}! {spec.description}",
        now=now,
    )
    return achievement


def evaluate_achievements(goal: Goal, now: Optional[datetime] = None) -> List[Achievement]:
    """
    Unlock all newly crossed badges.

    Returns:
        The achievements added by this call, in table order.
    """
    unlocked = []
    for spec in crossed_thresholds(goal):
        achievement = unlock_achievement(goal, spec, now)
        if achievement is not None:
            unlocked.append(achievement)
    return unlocked
