import re

import pytest
from click.testing import CliRunner

from cli.goal_cmd import goals


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("MINDTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("MINDTRACK_OWNER", "cli_user")
    return CliRunner()


def _create(runner, *extra):
    result = runner.invoke(goals, ["create", "Walk", "-c", "stress", "-t", "20 minutes", *extra])
    assert result.exit_code == 0, result.output
    return re.search(r"\[(goal_[0-9a-f]+)\]", result.output).group(1)


def test_create_and_list(runner, tmp_path):
    goal_id = _create(runner)

    result = runner.invoke(goals, ["list"])
    assert result.exit_code == 0
    assert goal_id in result.output
    assert (tmp_path / "goals" / f"{goal_id}.json").exists()
    assert (tmp_path / "logs" / "mindtrack.log").exists()


def test_list_empty(runner):
    result = runner.invoke(goals, ["list"])
    assert "No goals yet" in result.output


def test_create_with_bad_category_fails(runner):
    result = runner.invoke(goals, ["create", "Walk", "-c", "cardio", "-t", "x"])
    assert result.exit_code == 1
    assert "Invalid category" in result.output


def test_log_and_show(runner):
    goal_id = _create(runner)

    result = runner.invoke(goals, ["log", goal_id, "--mood", "9", "--notes", "nice"])
    assert result.exit_code == 0, result.output
    assert "streak: 1" in result.output

    result = runner.invoke(goals, ["show", goal_id])
    assert result.exit_code == 0
    assert "this week: 100%" in result.output
    assert "📝 Tip:" in result.output


def test_log_rejects_out_of_range_mood(runner):
    goal_id = _create(runner)
    result = runner.invoke(goals, ["log", goal_id, "--mood", "12"])
    assert result.exit_code == 1
    assert "mood" in result.output


def test_adjust_without_history_is_balanced(runner):
    goal_id = _create(runner)
    result = runner.invoke(goals, ["adjust", goal_id])
    assert "well-balanced" in result.output


def test_pause_resume_complete_delete(runner):
    goal_id = _create(runner)

    assert "Paused" in runner.invoke(goals, ["pause", goal_id]).output
    assert "Resumed" in runner.invoke(goals, ["resume", goal_id]).output
    assert "Walk completed!" in runner.invoke(goals, ["complete", goal_id]).output

    result = runner.invoke(goals, ["delete", goal_id, "--yes"])
    assert "Deleted" in result.output

    result = runner.invoke(goals, ["show", goal_id])
    assert result.exit_code == 1
    assert "Goal not found" in result.output


def test_owner_isolation(runner):
    goal_id = _create(runner)
    result = runner.invoke(goals, ["--owner", "someone_else", "show", goal_id])
    assert result.exit_code == 1


def test_stats(runner):
    _create(runner)
    result = runner.invoke(goals, ["stats"])
    assert result.exit_code == 0
    assert '"total_goals": 1' in result.output


def test_log_rejects_impossible_date(runner):
    goal_id = _create(runner)
    runner.invoke(goals, ["log", goal_id, "--notes", "today"])

    result = runner.invoke(goals, ["log", goal_id, "--missed", "--date", "2026-13-01"])
    assert result.exit_code == 1
    assert "Invalid date" in result.output

    result = runner.invoke(goals, ["show", goal_id])
    assert "streak: 1" in result.output


def test_verbose_echoes_activity_log(runner):
    result = runner.invoke(goals, ["-v", "create", "Walk", "-c", "stress", "-t", "20 minutes"])
    assert result.exit_code == 0
    assert "Goal created: goal_" in result.output
