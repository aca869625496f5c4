from datetime import date

import pytest

from conftest import NOW, TODAY
from mindtrack.exceptions import InvalidCategoryError, InvalidRangeError, ValidationError
from mindtrack.models import GoalCategory, Priority, Timeframe
from mindtrack.schema import GoalCreate, LogFields, parse_category, parse_log_day, parse_model


def test_parse_category_normalizes_case_and_whitespace():
    assert parse_category(" Sleep ") == GoalCategory.SLEEP
    assert parse_category(GoalCategory.MOOD) == GoalCategory.MOOD


def test_parse_category_lists_allowed_values():
    with pytest.raises(InvalidCategoryError) as exc:
        parse_category("fitness")
    assert exc.value.allowed == [c.value for c in GoalCategory]


def test_log_fields_are_lenient_with_cli_strings():
    fields = parse_model(LogFields, {
        "completed": "yes",
        "value": "abc",
        "mood": "7",
        "challenges": "time, motivation ,",
        "notes": None,
    })

    assert fields.completed is True
    assert fields.value is None
    assert fields.mood == 7
    assert fields.challenges == ["time", "motivation"]
    assert fields.notes == ""


def test_log_fields_default_to_missed_day():
    fields = parse_model(LogFields, None)
    assert fields.completed is False
    assert fields.challenges == []


@pytest.mark.parametrize("mood", [0, 11, "42"])
def test_mood_out_of_range(mood):
    with pytest.raises(InvalidRangeError) as exc:
        parse_model(LogFields, {"mood": mood})
    assert exc.value.field_name == "mood"


def test_goal_create_defaults():
    payload = parse_model(GoalCreate, {"title": " Sleep early ", "target": "11pm"})
    assert payload.title == "Sleep early"
    assert payload.timeframe == Timeframe.DAILY
    assert payload.priority == Priority.MEDIUM
    assert payload.deadline is None


def test_goal_create_rejects_bad_priority():
    with pytest.raises(ValidationError) as exc:
        parse_model(GoalCreate, {"title": "t", "target": "x", "priority": "urgent"})
    assert exc.value.field_name == "priority"


def test_goal_create_drops_timezone_from_deadline():
    payload = parse_model(GoalCreate, {"title": "t", "target": "x", "deadline": "2026-05-01T10:00:00+00:00"})
    assert payload.deadline.tzinfo is None


@pytest.mark.parametrize("raw", ["inf", "nan", float("-inf")])
def test_non_finite_numbers_are_dropped(raw):
    fields = parse_model(LogFields, {"value": raw, "mood": raw})
    assert fields.value is None
    assert fields.mood is None


@pytest.mark.parametrize("raw", [5, 2.5, {"time": True}])
def test_non_list_challenges_are_dropped(raw):
    assert parse_model(LogFields, {"challenges": raw}).challenges == []


def test_parse_log_day():
    assert parse_log_day(None, NOW) == TODAY
    assert parse_log_day("", NOW) == TODAY
    assert parse_log_day("2026-03-10", NOW) == date(2026, 3, 10)

    with pytest.raises(ValidationError) as exc:
        parse_log_day("2026-13-01", NOW)
    assert exc.value.field_name == "date"
