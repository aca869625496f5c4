"""
CLI 命令：mindtrack goals
本地目标追踪入口 (create / log / show / adjust / complete ...)
"""
import json
import sys
from typing import Optional

import click

from mindtrack.exceptions import MindTrackError
from mindtrack.goal_service import GoalService
from mindtrack.logger import setup_logging
from mindtrack.models import Goal


def _fail(error: MindTrackError) -> None:
    click.echo(f"❌ {error.get_user_message()}", err=True)
    sys.exit(1)


def _print_goal(goal: Goal) -> None:
    click.echo(f"🎯 {goal.title}  [{goal.id}]")
    click.echo(f"   category: {goal.category.value}   timeframe: {goal.timeframe.value}   status: {goal.status.value}")
    click.echo(f"   target: {goal.target}")
    click.echo(f"   progress: {goal.progress}%   streak: {goal.current_streak} (best {goal.longest_streak})")
    if goal.deadline:
        click.echo(f"   deadline: {goal.deadline.isoformat()}")


@click.group()
@click.option("--owner", envvar="MINDTRACK_OWNER", default="local", show_default=True,
              help="Owner id the commands act for")
@click.option("--verbose", "-v", is_flag=True, help="Echo activity log lines to stderr")
@click.pass_context
def goals(ctx: click.Context, owner: str, verbose: bool):
    """Goal tracking commands"""
    setup_logging(verbose=verbose)
    ctx.obj = {"owner": owner, "service": GoalService()}


@goals.command()
@click.argument("title")
@click.option("--category", "-c", required=True, help="anxiety, sleep, stress, mood, social, ...")
@click.option("--target", "-t", required=True, help="What success looks like")
@click.option("--timeframe", default="daily", show_default=True)
@click.option("--deadline", default=None, help="ISO date/time, e.g. 2026-12-31")
@click.option("--description", default="")
@click.pass_obj
def create(obj, title: str, category: str, target: str, timeframe: str,
           deadline: Optional[str], description: str):
    """Create a new goal"""
    try:
        goal = obj["service"].create_goal(
            obj["owner"], category, title, target,
            timeframe=timeframe, deadline=deadline, description=description,
        )
    except MindTrackError as e:
        _fail(e)
    click.echo("✅ Goal created")
    _print_goal(goal)


@goals.command("log")
@click.argument("goal_id")
@click.option("--done/--missed", "completed", default=True, help="Whether today's goal was met")
@click.option("--date", "day", default=None, help="Day to log (default: today)")
@click.option("--value", default=None)
@click.option("--mood", default=None, help="1-10")
@click.option("--challenge", "challenges", multiple=True)
@click.option("--notes", default="")
@click.option("--reflection", default="")
@click.pass_obj
def log_cmd(obj, goal_id: str, completed: bool, day: Optional[str], value, mood,
            challenges, notes: str, reflection: str):
    """Log a day's progress"""
    fields = {
        "completed": completed,
        "value": value,
        "mood": mood,
        "challenges": list(challenges),
        "notes": notes,
        "reflection": reflection,
    }
    try:
        goal = obj["service"].log_progress(obj["owner"], goal_id, fields, day=day)
    except MindTrackError as e:
        _fail(e)

    _print_goal(goal)
    if goal.ai_feedback:
        click.echo(f"\n💬 {goal.ai_feedback[-1].message}")


@goals.command()
@click.argument("goal_id")
@click.pass_obj
def show(obj, goal_id: str):
    """Show a goal with insights"""
    service = obj["service"]
    try:
        goal = service.get_goal(obj["owner"], goal_id)
        insights = service.get_goal_insights(obj["owner"], goal_id)
    except MindTrackError as e:
        _fail(e)

    _print_goal(goal)
    click.echo(f"   this week: {insights['weekly_completion_rate']}%   recent: {insights['recent_progress']}%")
    if goal.achievements:
        click.echo("\n🏆 Achievements:")
        for a in goal.achievements:
            click.echo(f"  {a.icon} {a.name} - {a.description}")
    if insights["suggested_actions"]:
        click.echo("\n💡 Next steps:")
        for action in insights["suggested_actions"]:
            click.echo(f"  - {action}")
    tips = service.tips(goal)
    if tips:
        click.echo(f"\n📝 Tip: {tips[0]}")


@goals.command("list")
@click.option("--category", default=None)
@click.option("--status", default=None)
@click.pass_obj
def list_cmd(obj, category: Optional[str], status: Optional[str]):
    """List goals"""
    try:
        items = obj["service"].list_goals(obj["owner"], category=category, status=status)
    except MindTrackError as e:
        _fail(e)

    if not items:
        click.echo("ℹ️ No goals yet")
        return
    for goal in items:
        click.echo(f"{goal.id}  {goal.status.value:<9} {goal.progress:>3}%  {goal.title}")


@goals.command()
@click.argument("goal_id")
@click.option("--apply", "apply_it", is_flag=True, help="Apply the suggestion to the goal")
@click.pass_obj
def adjust(obj, goal_id: str, apply_it: bool):
    """Ask whether the goal should be adjusted"""
    service = obj["service"]
    try:
        suggestion = service.request_adjustment(obj["owner"], goal_id, record_feedback=True)
        if not suggestion.should_adjust:
            click.echo("✅ Your goal seems well-balanced! Keep up the great work!")
            return

        click.echo(f"🔧 {suggestion.reason}")
        click.echo(f"   proposed: {suggestion.proposed_target}")
        if apply_it:
            goal = service.apply_adjustment(obj["owner"], goal_id)
            click.echo(f"✅ Target updated: {goal.target}")
    except MindTrackError as e:
        _fail(e)


@goals.command()
@click.argument("goal_id")
@click.pass_obj
def complete(obj, goal_id: str):
    """Mark a goal complete"""
    try:
        goal = obj["service"].mark_complete(obj["owner"], goal_id)
    except MindTrackError as e:
        _fail(e)
    click.echo(f"🎉 {goal.title} completed!")


@goals.command()
@click.argument("goal_id")
@click.pass_obj
def pause(obj, goal_id: str):
    """Pause a goal"""
    try:
        obj["service"].pause_goal(obj["owner"], goal_id)
    except MindTrackError as e:
        _fail(e)
    click.echo("⏸️ Paused")


@goals.command()
@click.argument("goal_id")
@click.pass_obj
def resume(obj, goal_id: str):
    """Resume a paused goal"""
    try:
        obj["service"].resume_goal(obj["owner"], goal_id)
    except MindTrackError as e:
        _fail(e)
    click.echo("▶️ Resumed")


@goals.command()
@click.argument("goal_id")
@click.confirmation_option(prompt="⚠️ Delete this goal and all its logs?")
@click.pass_obj
def delete(obj, goal_id: str):
    """Delete a goal"""
    try:
        obj["service"].delete_goal(obj["owner"], goal_id)
    except MindTrackError as e:
        _fail(e)
    click.echo("🗑️ Deleted")


@goals.command()
@click.pass_obj
def stats(obj):
    """Overview across all goals"""
    try:
        data = obj["service"].get_analytics(obj["owner"])
    except MindTrackError as e:
        _fail(e)
    click.echo(json.dumps(data["overview"], ensure_ascii=False, indent=2))
    for line in data["insights"]:
        click.echo(line)


if __name__ == "__main__":
    goals()
