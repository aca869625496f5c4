"""
Daily Log Recorder.

Writes a single day's outcome into a Goal: one DailyLog per calendar date,
a repeat submission on the same date overwrites the earlier one in place.
Also holds the write paths for adjustments and milestones, which are the
other caller-driven mutations of the log-like collections.

Nothing here persists; the caller saves the goal once afterwards.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from mindtrack.models import AdjustmentRecord, DailyLog, Goal, GoalStatus

DayLike = Union[date, datetime, str, None]


def parse_day_string(text: str) -> Optional[date]:
    """ISO date or datetime string -> date; None when it does not parse."""
    raw = text.strip().replace("Z", "+00:00")
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def normalize_day(day: DayLike = None, now: Optional[datetime] = None) -> date:
    """
    Strip time-of-day from `day`.

    Accepts a date, a datetime, an ISO date/datetime string, or None
    (meaning today). An unparseable string also falls back to today;
    callers taking user input reject those first (schema.parse_log_day).
    """
    if isinstance(day, datetime):
        return day.date()
    if isinstance(day, date):
        return day
    if isinstance(day, str):
        parsed = parse_day_string(day)
        if parsed is not None:
            return parsed
    return (now or datetime.now()).date()


def _optional_float(raw: Any) -> Optional[float]:
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _optional_int(raw: Any) -> Optional[int]:
    value = _optional_float(raw)
    if value is None:
        return None
    return int(round(value))


def _challenge_list(raw: Any) -> List[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = [raw]
    seen: List[str] = []
    try:
        items = list(raw)
    except TypeError:
        return []
    for item in items:
        if item is None:
            continue
        tag = str(item).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw)


def clean_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Coerce raw log fields into DailyLog attribute values.

    Malformed optional values are dropped to their empty form rather than
    raising; range checks happen earlier, at the schema layer.
    """
    return {
        "completed": bool(fields.get("completed", False)),
        "value": _optional_float(fields.get("value")),
        "mood": _optional_int(fields.get("mood")),
        "challenges": _challenge_list(fields.get("challenges")),
        "notes": _text(fields.get("notes")),
        "reflection": _text(fields.get("reflection")),
    }


def record_log(
    goal: Goal,
    day: DayLike,
    fields: Mapping[str, Any],
    now: Optional[datetime] = None,
) -> Goal:
    """
    Insert or overwrite the DailyLog for `day`.

    Args:
        goal: aggregate to mutate
        day: calendar day of the entry (None = today)
        fields: completed / value / mood / challenges / notes / reflection
        now: clock override

    Returns:
        The same goal, mutated.
    """
    log_day = normalize_day(day, now)
    values = clean_fields(fields)

    existing = goal.find_log(log_day)
    if existing is not None:
        for key, value in values.items():
            setattr(existing, key, value)
    else:
        goal.daily_logs.append(DailyLog(date=log_day, **values))
        goal.daily_logs.sort(key=lambda log: log.date)

    goal.touch(now)
    return goal


def apply_adjustment(
    goal: Goal,
    new_target: str,
    reason: str,
    ai_suggested: bool = True,
    now: Optional[datetime] = None,
) -> AdjustmentRecord:
    """Replace the goal target and keep the old one in the adjustment history."""
    record = AdjustmentRecord(
        old_target=goal.target,
        new_target=new_target,
        reason=reason,
        ai_suggested=ai_suggested,
        date=now or datetime.now(),
    )
    goal.adjustments.append(record)
    goal.target = new_target
    if goal.status != GoalStatus.COMPLETED:
        goal.status = GoalStatus.ADJUSTED
    goal.touch(now)
    return record


def complete_milestone(goal: Goal, index: int, now: Optional[datetime] = None) -> bool:
    """
    Mark milestone `index` complete.

    Returns False when it was already complete (timestamp is kept).
    """
    milestone = goal.milestones[index]
    if milestone.completed:
        return False
    milestone.completed = True
    milestone.completed_at = now or datetime.now()
    goal.touch(now)
    return True
