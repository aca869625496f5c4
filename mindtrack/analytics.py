"""
Read-only goal analytics.

Per-goal insights (weekly completion rate, recent progress, next milestone,
suggested actions) and a per-owner overview across all goals. Nothing here
mutates a goal.
"""
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from mindtrack.catalog import resources_for, tips_for
from mindtrack.config_manager import config
from mindtrack.models import Goal, GoalStatus, Milestone
from mindtrack.progress_engine.advisor import suggest_actions
from mindtrack.progress_engine.progress import clamp_percentage, completion_fraction


def week_bounds(today: date):
    """Sunday-to-Saturday week containing `today`."""
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def weekly_completion_rate(goal: Goal, today: Optional[date] = None) -> int:
    start, end = week_bounds(today or datetime.now().date())
    logs = [log for log in goal.daily_logs if start <= log.date <= end]
    return clamp_percentage(completion_fraction(logs) * 100)


def recent_progress(goal: Goal) -> int:
    """Completion percentage over the last few logs."""
    window = sorted(goal.daily_logs, key=lambda log: log.date)[-config.RECENT_PROGRESS_WINDOW:]
    return clamp_percentage(completion_fraction(window) * 100)


def next_milestone(goal: Goal) -> Optional[Milestone]:
    for milestone in goal.milestones:
        if not milestone.completed:
            return milestone
    return None


def goal_insights(goal: Goal, today: Optional[date] = None) -> Dict[str, Any]:
    return {
        "current_streak": goal.current_streak,
        "longest_streak": goal.longest_streak,
        "weekly_completion_rate": weekly_completion_rate(goal, today),
        "recent_progress": recent_progress(goal),
        "next_milestone": next_milestone(goal),
        "suggested_actions": suggest_actions(goal),
        "tips": list(tips_for(goal.category)),
        "resources": list(resources_for(goal.category)),
    }


def weekly_stats(goals: List[Goal], today: Optional[date] = None) -> Dict[str, Dict[str, Any]]:
    """Per-goal completion over the trailing week; goals without logs there are omitted."""
    today = today or datetime.now().date()
    week_ago = today - timedelta(days=7)
    stats = {}
    for goal in goals:
        logs = [log for log in goal.daily_logs if log.date >= week_ago]
        if not logs:
            continue
        completed = sum(1 for log in logs if log.completed)
        stats[goal.id] = {
            "title": goal.title,
            "completion_rate": clamp_percentage(completed / len(logs) * 100),
            "total_days": len(logs),
            "completed_days": completed,
        }
    return stats


def overview_insights(goals: List[Goal]) -> List[str]:
    insights = []
    if sum(g.current_streak for g in goals) > 30:
        insights.append("🔥 You're on fire! Your combined streak is over 30 days!")

    if goals:
        completed = sum(1 for g in goals if g.status == GoalStatus.COMPLETED)
        if completed / len(goals) > 0.8:
            insights.append("🏆 You're a goal-crushing machine with over 80% completion rate!")
    return insights


def owner_analytics(goals: List[Goal], today: Optional[date] = None) -> Dict[str, Any]:
    """Overview across every goal of one owner."""
    total = len(goals)
    by_status = defaultdict(int)
    for goal in goals:
        by_status[goal.status] += 1

    categories: Dict[str, Dict[str, int]] = {}
    for goal in goals:
        bucket = categories.setdefault(goal.category.value, {"total": 0, "completed": 0, "active": 0})
        bucket["total"] += 1
        if goal.status == GoalStatus.COMPLETED:
            bucket["completed"] += 1
        elif goal.status == GoalStatus.ACTIVE:
            bucket["active"] += 1

    achievements = sorted(
        (a for g in goals for a in g.achievements),
        key=lambda a: a.unlocked_at,
        reverse=True,
    )

    return {
        "overview": {
            "total_goals": total,
            "active_goals": by_status[GoalStatus.ACTIVE],
            "completed_goals": by_status[GoalStatus.COMPLETED],
            "paused_goals": by_status[GoalStatus.PAUSED],
            "completion_rate": clamp_percentage(by_status[GoalStatus.COMPLETED] / total * 100) if total else 0,
            "average_progress": clamp_percentage(sum(g.progress for g in goals) / total) if total else 0,
            "total_current_streak": sum(g.current_streak for g in goals),
            "total_longest_streak": sum(g.longest_streak for g in goals),
        },
        "weekly_stats": weekly_stats(goals, today),
        "category_breakdown": categories,
        "recent_achievements": achievements[:5],
        "insights": overview_insights(goals),
    }
