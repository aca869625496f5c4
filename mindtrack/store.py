"""
GoalStore: one JSON document per goal aggregate.

Path: data/goals/<goal_id>.json (MINDTRACK_DATA_DIR overrides data/).
A save rewrites the whole document through a temp file plus os.replace,
so readers see either the old or the new aggregate, never a mix; the last
writer wins.
"""
import json
import os
import re
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from mindtrack.exceptions import GoalNotFoundError, StorageError
from mindtrack.logger import log_corrupt_document
from mindtrack.models import (
    Achievement,
    AdjustmentRecord,
    AIFeedback,
    DailyLog,
    FeedbackType,
    Goal,
    GoalCategory,
    GoalStatus,
    Milestone,
    Priority,
    Reminders,
    Timeframe,
)
from mindtrack.paths import get_goals_dir


SCHEMA_VERSION = 1
_SAFE_ID = re.compile(r"^[A-Za-z0-9_\-]+$")


def _iso(value: Optional[Any]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    return datetime.fromisoformat(raw)


def _parse_date(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    return date.fromisoformat(raw[:10])


def _log_date(raw: Optional[str]) -> date:
    # a log without its day cannot be keyed, so the document is corrupt
    if not raw:
        raise ValueError("daily log without a date")
    return date.fromisoformat(raw[:10])


def goal_to_dict(g: Goal) -> Dict[str, Any]:
    return {
        "schema_version": SCHEMA_VERSION,
        "id": g.id,
        "owner_id": g.owner_id,
        "title": g.title,
        "category": g.category.value,
        "description": g.description,
        "target": g.target,
        "target_value": g.target_value,
        "target_unit": g.target_unit,
        "timeframe": g.timeframe.value,
        "deadline": _iso(g.deadline),
        "priority": g.priority.value,
        "progress": g.progress,
        "current_streak": g.current_streak,
        "longest_streak": g.longest_streak,
        "status": g.status.value,
        "created_at": _iso(g.created_at),
        "updated_at": _iso(g.updated_at),
        "completed_at": _iso(g.completed_at),
        "daily_logs": [
            {
                "date": log.date.isoformat(),
                "completed": log.completed,
                "value": log.value,
                "mood": log.mood,
                "challenges": list(log.challenges),
                "notes": log.notes,
                "reflection": log.reflection,
            }
            for log in g.daily_logs
        ],
        "achievements": [
            {
                "name": a.name,
                "description": a.description,
                "icon": a.icon,
                "unlocked_at": _iso(a.unlocked_at),
            }
            for a in g.achievements
        ],
        "milestones": [
            {
                "description": m.description,
                "target_date": _iso(m.target_date),
                "target_value": m.target_value,
                "completed": m.completed,
                "completed_at": _iso(m.completed_at),
                "celebration_message": m.celebration_message,
            }
            for m in g.milestones
        ],
        "adjustments": [
            {
                "date": _iso(a.date),
                "old_target": a.old_target,
                "new_target": a.new_target,
                "reason": a.reason,
                "ai_suggested": a.ai_suggested,
            }
            for a in g.adjustments
        ],
        "ai_feedback": [
            {
                "date": _iso(f.date),
                "type": f.type.value,
                "message": f.message,
                "data": f.data,
            }
            for f in g.ai_feedback
        ],
        "reminders": {
            "enabled": g.reminders.enabled,
            "frequency": g.reminders.frequency,
            "time": g.reminders.time,
            "message": g.reminders.message,
        },
    }


def dict_to_goal(d: Dict[str, Any]) -> Goal:
    reminders = d.get("reminders") or {}
    return Goal(
        id=d["id"],
        owner_id=d["owner_id"],
        title=d["title"],
        category=GoalCategory(d["category"]),
        target=d["target"],
        description=d.get("description", ""),
        target_value=d.get("target_value"),
        target_unit=d.get("target_unit"),
        timeframe=Timeframe(d.get("timeframe", "daily")),
        deadline=_parse_datetime(d.get("deadline")),
        priority=Priority(d.get("priority", "medium")),
        progress=d.get("progress", 0),
        current_streak=d.get("current_streak", 0),
        longest_streak=d.get("longest_streak", 0),
        status=GoalStatus(d.get("status", "active")),
        created_at=_parse_datetime(d.get("created_at")),
        updated_at=_parse_datetime(d.get("updated_at")),
        completed_at=_parse_datetime(d.get("completed_at")),
        daily_logs=[
            DailyLog(
                date=_log_date(log.get("date")),
                completed=log.get("completed", False),
                value=log.get("value"),
                mood=log.get("mood"),
                challenges=log.get("challenges", []),
                notes=log.get("notes", ""),
                reflection=log.get("reflection", ""),
            )
            for log in d.get("daily_logs", [])
        ],
        achievements=[
            Achievement(
                name=a["name"],
                description=a.get("description", ""),
                icon=a.get("icon", ""),
                unlocked_at=_parse_datetime(a.get("unlocked_at")) or datetime.now(),
            )
            for a in d.get("achievements", [])
        ],
        milestones=[
            Milestone(
                description=m.get("description", ""),
                target_date=_parse_date(m.get("target_date")),
                target_value=m.get("target_value"),
                completed=m.get("completed", False),
                completed_at=_parse_datetime(m.get("completed_at")),
                celebration_message=m.get("celebration_message", ""),
            )
            for m in d.get("milestones", [])
        ],
        adjustments=[
            AdjustmentRecord(
                old_target=a.get("old_target", ""),
                new_target=a.get("new_target", ""),
                reason=a.get("reason", ""),
                ai_suggested=a.get("ai_suggested", False),
                date=_parse_datetime(a.get("date")) or datetime.now(),
            )
            for a in d.get("adjustments", [])
        ],
        ai_feedback=[
            AIFeedback(
                type=FeedbackType(f["type"]),
                message=f.get("message", ""),
                data=f.get("data"),
                date=_parse_datetime(f.get("date")) or datetime.now(),
            )
            for f in d.get("ai_feedback", [])
        ],
        reminders=Reminders(
            enabled=reminders.get("enabled", True),
            frequency=reminders.get("frequency", "daily"),
            time=reminders.get("time", "09:00"),
            message=reminders.get("message", ""),
        ),
    )


class GoalStore:
    """JSON document store, one file per goal under `root`."""

    def __init__(self, root: Optional[Path] = None):
        self._root = root if root is not None else get_goals_dir()

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, goal_id: str) -> Optional[Path]:
        if not goal_id or not _SAFE_ID.match(goal_id):
            return None
        return self._root / f"{goal_id}.json"

    def _read(self, path: Path) -> Goal:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return dict_to_goal(json.load(f))
        except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
            raise StorageError(f"Corrupt goal document: {e}", path=str(path)) from e
        except OSError as e:
            raise StorageError(f"Cannot read goal document: {e}", path=str(path)) from e

    def load_goal(self, owner_id: str, goal_id: str) -> Goal:
        path = self._path_for(goal_id)
        if path is None or not path.exists():
            raise GoalNotFoundError(goal_id, owner_id)

        goal = self._read(path)
        if goal.owner_id != owner_id:
            raise GoalNotFoundError(goal_id, owner_id)
        return goal

    def save_goal(self, goal: Goal) -> None:
        path = self._path_for(goal.id)
        if path is None:
            raise StorageError(f"Unsafe goal id: {goal.id!r}")

        self._root.mkdir(parents=True, exist_ok=True)
        payload = goal_to_dict(goal)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=f".{goal.id}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write goal document: {e}", path=str(path)) from e

    def delete_goal(self, owner_id: str, goal_id: str) -> None:
        # load first: enforces ownership before anything is removed
        self.load_goal(owner_id, goal_id)
        path = self._path_for(goal_id)
        try:
            path.unlink()
        except FileNotFoundError:
            raise GoalNotFoundError(goal_id, owner_id) from None

    def list_goals(self, owner_id: str) -> List[Goal]:
        """Owner's goals, newest first. Corrupt documents are skipped with a warning."""
        if not self._root.exists():
            return []

        goals = []
        for path in sorted(self._root.glob("*.json")):
            try:
                goal = self._read(path)
            except StorageError as e:
                log_corrupt_document(path, e.message)
                continue
            if goal.owner_id == owner_id:
                goals.append(goal)

        goals.sort(key=lambda g: g.created_at, reverse=True)
        return goals
