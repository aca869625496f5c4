import copy
from datetime import timedelta

import pytest

from conftest import TODAY, make_goal
from mindtrack.models import DailyLog
from mindtrack.progress_engine.advisor import (
    LOOSEN_TARGET,
    TIGHTEN_TARGET,
    AdjustmentDirection,
    suggest_actions,
    suggest_adjustment,
)


def _goal_with(total: int, completed: int):
    goal = make_goal()
    for i in range(total):
        goal.daily_logs.append(
            DailyLog(date=TODAY - timedelta(days=total - 1 - i), completed=i < completed)
        )
    return goal


def test_low_completion_recommends_loosening():
    suggestion = suggest_adjustment(_goal_with(14, 2))

    assert suggestion.should_adjust is True
    assert suggestion.direction == AdjustmentDirection.LOOSEN
    assert suggestion.proposed_target == LOOSEN_TARGET
    assert "too ambitious" in suggestion.reason
    assert suggestion.window_size == 14


def test_high_completion_recommends_tightening():
    suggestion = suggest_adjustment(_goal_with(14, 13))

    assert suggestion.should_adjust is True
    assert suggestion.direction == AdjustmentDirection.TIGHTEN
    assert suggestion.proposed_target == TIGHTEN_TARGET
    assert "level up" in suggestion.reason


def test_middling_completion_recommends_nothing():
    suggestion = suggest_adjustment(_goal_with(14, 7))

    assert suggestion.should_adjust is False
    assert suggestion.reason is None
    assert suggestion.completion_rate == pytest.approx(0.5)
    assert suggestion.to_dict() == {"should_adjust": False, "completion_rate": 0.5, "window_size": 14}


def test_loosen_needs_a_week_of_logs():
    assert suggest_adjustment(_goal_with(6, 0)).should_adjust is False
    assert suggest_adjustment(_goal_with(7, 1)).direction == AdjustmentDirection.LOOSEN


def test_tighten_needs_two_weeks_of_logs():
    assert suggest_adjustment(_goal_with(13, 13)).should_adjust is False


def test_empty_history_is_safe():
    suggestion = suggest_adjustment(make_goal())
    assert suggestion.should_adjust is False
    assert suggestion.completion_rate == 0.0
    assert suggestion.window_size == 0


def test_only_most_recent_fourteen_logs_count():
    # 6 old misses followed by 14 completed days
    goal = _goal_with(20, 0)
    for log in goal.daily_logs[-14:]:
        log.completed = True

    suggestion = suggest_adjustment(goal)
    assert suggestion.direction == AdjustmentDirection.TIGHTEN
    assert suggestion.window_size == 14


def test_advisor_does_not_mutate_goal():
    goal = _goal_with(14, 1)
    before = copy.deepcopy(goal)
    suggest_adjustment(goal)
    assert goal == before


def test_suggest_actions():
    assert suggest_actions(make_goal(current_streak=0, progress=0)) == [
        "Start with just 2 minutes today to build momentum",
        "Focus on consistency over perfection",
    ]
    assert suggest_actions(make_goal(current_streak=3, longest_streak=3, progress=50)) == [
        "You're building a great habit! Keep the streak alive",
    ]
    assert suggest_actions(make_goal(current_streak=10, longest_streak=10, progress=90)) == []
