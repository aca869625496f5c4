from datetime import date, datetime, timedelta

import pytest

from conftest import NOW, TODAY, make_goal
from mindtrack.models import GoalStatus, Milestone
from mindtrack.progress_engine.recorder import (
    apply_adjustment,
    complete_milestone,
    normalize_day,
    parse_day_string,
    record_log,
)


def test_normalize_day_strips_time_and_parses_strings():
    assert normalize_day(datetime(2026, 3, 1, 23, 59)) == date(2026, 3, 1)
    assert normalize_day(date(2026, 3, 1)) == date(2026, 3, 1)
    assert normalize_day("2026-03-01") == date(2026, 3, 1)
    assert normalize_day("2026-03-01T18:30:00Z") == date(2026, 3, 1)
    assert normalize_day(None, now=NOW) == TODAY
    assert normalize_day("not a date", now=NOW) == TODAY


def test_same_day_submission_overwrites_instead_of_appending():
    goal = make_goal()
    record_log(goal, TODAY, {"completed": False, "mood": 3, "notes": "rough"}, now=NOW)
    record_log(
        goal,
        datetime.combine(TODAY, datetime.min.time()) + timedelta(hours=20),
        {"completed": True, "mood": 8, "challenges": ["time"]},
        now=NOW,
    )

    logs = [log for log in goal.daily_logs if log.date == TODAY]
    assert len(logs) == 1
    assert logs[0].completed is True
    assert logs[0].mood == 8
    assert logs[0].challenges == ["time"]
    # later call wins for every field, including ones it left empty
    assert logs[0].notes == ""


def test_malformed_optional_fields_are_omitted():
    goal = make_goal()
    record_log(goal, TODAY, {"completed": True, "value": "lots", "mood": "happy", "challenges": None}, now=NOW)

    log = goal.daily_logs[0]
    assert log.value is None
    assert log.mood is None
    assert log.challenges == []


@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", float("inf")])
def test_non_finite_numbers_are_omitted(raw):
    goal = make_goal()
    record_log(goal, TODAY, {"completed": True, "value": raw, "mood": raw}, now=NOW)

    log = goal.daily_logs[0]
    assert log.value is None
    assert log.mood is None


def test_scalar_challenges_are_omitted():
    goal = make_goal()
    record_log(goal, TODAY, {"challenges": 5}, now=NOW)
    assert goal.daily_logs[0].challenges == []


def test_parse_day_string_rejects_impossible_dates():
    assert parse_day_string("2026-03-01") == date(2026, 3, 1)
    assert parse_day_string("2026-13-01") is None
    assert parse_day_string("  ") is None


def test_challenges_are_deduplicated_and_single_tag_wrapped():
    goal = make_goal()
    record_log(goal, TODAY, {"challenges": ["time", "time", " motivation "]}, now=NOW)
    assert goal.daily_logs[0].challenges == ["time", "motivation"]

    record_log(goal, TODAY, {"challenges": "energy"}, now=NOW)
    assert goal.daily_logs[0].challenges == ["energy"]


def test_logs_stay_in_date_order():
    goal = make_goal()
    record_log(goal, TODAY, {"completed": True}, now=NOW)
    record_log(goal, TODAY - timedelta(days=2), {"completed": True}, now=NOW)
    record_log(goal, TODAY - timedelta(days=1), {"completed": False}, now=NOW)

    assert [log.date for log in goal.daily_logs] == [
        TODAY - timedelta(days=2),
        TODAY - timedelta(days=1),
        TODAY,
    ]
    assert goal.updated_at == NOW


def test_apply_adjustment_records_history_and_marks_adjusted():
    goal = make_goal(target="30 minutes a day")
    record = apply_adjustment(goal, "10 minutes a day", "too ambitious", ai_suggested=True, now=NOW)

    assert goal.target == "10 minutes a day"
    assert goal.status == GoalStatus.ADJUSTED
    assert goal.adjustments == [record]
    assert record.old_target == "30 minutes a day"
    assert record.new_target == "10 minutes a day"
    assert record.ai_suggested is True
    assert record.date == NOW


def test_apply_adjustment_keeps_completed_status():
    goal = make_goal(status=GoalStatus.COMPLETED)
    apply_adjustment(goal, "harder", "level up", now=NOW)
    assert goal.status == GoalStatus.COMPLETED
    assert len(goal.adjustments) == 1


def test_complete_milestone_only_once():
    goal = make_goal(milestones=[Milestone(description="first week")])

    assert complete_milestone(goal, 0, now=NOW) is True
    assert goal.milestones[0].completed_at == NOW

    later = NOW + timedelta(days=1)
    assert complete_milestone(goal, 0, now=later) is False
    assert goal.milestones[0].completed_at == NOW
