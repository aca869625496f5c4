"""
Input schemas for goal operations.

Raw caller input (CLI options, decoded JSON bodies) is validated here
before any goal is touched. pydantic errors are translated into the
MindTrack error taxonomy:

- value outside declared bounds  -> InvalidRangeError
- category outside the closed set -> InvalidCategoryError
- anything else missing/invalid  -> ValidationError

Optional numeric fields that cannot be parsed at all are dropped to None
instead of failing, so a garbled `value` never blocks a log entry.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from mindtrack.exceptions import InvalidCategoryError, InvalidRangeError, ValidationError
from mindtrack.models import GoalCategory, Priority, Timeframe
from mindtrack.progress_engine.recorder import DayLike, normalize_day, parse_day_string

# field -> (min, max), inclusive
RANGE_BOUNDS = {
    "mood": (1, 10),
}

_RANGE_ERROR_TYPES = {"greater_than_equal", "less_than_equal", "greater_than", "less_than"}
_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}

ModelT = TypeVar("ModelT", bound=BaseModel)


def _lenient_number(raw: Any) -> Any:
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def parse_category(raw: Any) -> GoalCategory:
    """Map raw input onto GoalCategory or raise InvalidCategoryError."""
    if isinstance(raw, GoalCategory):
        return raw
    try:
        return GoalCategory(str(raw).strip().lower())
    except ValueError:
        raise InvalidCategoryError(str(raw), [c.value for c in GoalCategory]) from None


def parse_log_day(raw: DayLike, now: Optional[datetime] = None) -> date:
    """
    Day a log submission is for (None = today).

    The day keys the one-log-per-date rule, so a date string that does not
    parse is rejected instead of silently meaning today.
    """
    if isinstance(raw, str) and raw.strip() and parse_day_string(raw) is None:
        raise ValidationError(f"Invalid date: {raw!r}", "date")
    return normalize_day(raw, now)


class LogFields(BaseModel):
    """Body of a daily log submission."""
    completed: bool = False
    value: Optional[float] = None
    mood: Optional[int] = Field(default=None, ge=1, le=10)
    challenges: List[str] = Field(default_factory=list)
    notes: str = ""
    reflection: str = ""

    @field_validator("completed", mode="before")
    @classmethod
    def _coerce_completed(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        return bool(v)

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, v):
        return _lenient_number(v)

    @field_validator("mood", mode="before")
    @classmethod
    def _coerce_mood(cls, v):
        number = _lenient_number(v)
        return None if number is None else int(round(number))

    @field_validator("challenges", mode="before")
    @classmethod
    def _coerce_challenges(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        if not isinstance(v, (list, tuple, set)):
            return []
        return [str(item) for item in v if item]

    @field_validator("notes", "reflection", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return "" if v is None else str(v)


class MilestoneInput(BaseModel):
    description: str
    target_date: Optional[date] = None
    target_value: Optional[float] = None

    @field_validator("target_value", mode="before")
    @classmethod
    def _coerce_target_value(cls, v):
        return _lenient_number(v)


class ReminderInput(BaseModel):
    enabled: bool = True
    frequency: str = "daily"
    time: str = "09:00"
    message: str = ""


class GoalCreate(BaseModel):
    """Payload for creating a goal; category is checked separately."""
    title: str = Field(min_length=1)
    target: str = Field(min_length=1)
    description: str = ""
    target_value: Optional[float] = None
    target_unit: Optional[str] = None
    timeframe: Timeframe = Timeframe.DAILY
    deadline: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    reminders: Optional[ReminderInput] = None
    milestones: List[MilestoneInput] = Field(default_factory=list)

    @field_validator("title", "target", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("target_value", mode="before")
    @classmethod
    def _coerce_target_value(cls, v):
        return _lenient_number(v)

    @field_validator("deadline", mode="before")
    @classmethod
    def _empty_deadline(cls, v):
        if v == "":
            return None
        # date-only input means midnight of that day
        if isinstance(v, str) and len(v.strip()) == 10:
            return datetime.combine(date.fromisoformat(v.strip()), datetime.min.time())
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, datetime.min.time())
        return v

    @field_validator("deadline")
    @classmethod
    def _naive_deadline(cls, v):
        # 统一使用本地 naive 时间，与 created_at 保持可比较
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v


def parse_model(model_cls: Type[ModelT], data: Optional[Dict[str, Any]]) -> ModelT:
    """Validate `data` against `model_cls`, raising MindTrack errors."""
    try:
        return model_cls.model_validate(data or {})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        if first.get("type") in _RANGE_ERROR_TYPES and field_name in RANGE_BOUNDS:
            minimum, maximum = RANGE_BOUNDS[field_name]
            raise InvalidRangeError(field_name, first.get("input"), minimum, maximum) from None
        raise ValidationError(f"Invalid {field_name or 'input'}: {first.get('msg')}", field_name) from None
