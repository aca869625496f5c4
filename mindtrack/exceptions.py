"""
MindTrack 异常定义模块。

Exception hierarchy for the goal engine and its storage boundary:
- MindTrackError: base class for every known error
- GoalNotFoundError: missing goal, or goal owned by someone else
- InvalidCategoryError: category outside the closed set
- InvalidRangeError: numeric input outside its declared bounds
- ValidationError: required input missing or empty
- InvalidTransitionError: status change not allowed from the current status
- ConfigError / StorageError: config file and document store problems

Validation errors are raised before any mutation starts, so a failed
operation never leaves a half-updated goal behind.
"""
from typing import Iterable, Optional


class MindTrackError(Exception):
    """MindTrack 基础异常类。

    Catching this handles every expected error condition.
    """

    def __init__(self, message: str, hint: Optional[str] = None):
        """
        Args:
            message: 错误描述
            hint: 对用户的操作建议
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def get_user_message(self) -> str:
        """返回用户友好的错误消息。"""
        if self.hint:
            return f"{self.message}\n💡 Hint: {self.hint}"
        return self.message


class GoalNotFoundError(MindTrackError):
    """Goal is missing, or belongs to another owner.

    Surfaced to the caller as-is; never retried.
    """

    def __init__(self, goal_id: str, owner_id: Optional[str] = None):
        super().__init__(f"Goal not found: {goal_id}", hint="Check the goal id")
        self.goal_id = goal_id
        self.owner_id = owner_id


class InvalidCategoryError(MindTrackError):
    """Category is not one of the supported goal categories."""

    def __init__(self, category: str, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid category: {category!r}",
            hint="Must be one of: " + ", ".join(allowed),
        )
        self.category = category
        self.allowed = allowed


class InvalidRangeError(MindTrackError):
    """Numeric field (progress, mood, intensity) outside its bounds."""

    def __init__(self, field_name: str, value, minimum=None, maximum=None):
        bounds = f"[{minimum}, {maximum}]"
        super().__init__(
            f"{field_name}={value!r} is outside {bounds}",
            hint=f"{field_name} must be between {minimum} and {maximum}",
        )
        self.field_name = field_name
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class ValidationError(MindTrackError):
    """Required input is missing."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        super().__init__(message, hint=f"Provide a value for '{field_name}'" if field_name else None)
        self.field_name = field_name


class InvalidTransitionError(MindTrackError):
    """Status change not allowed from the current status."""

    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot move goal from '{current}' to '{requested}'")
        self.current = current
        self.requested = requested


class ConfigError(MindTrackError):
    """配置文件错误。"""

    def __init__(self, message: str, config_path: Optional[str] = None):
        hint = f"请检查配置文件: {config_path}" if config_path else "请检查配置文件格式"
        super().__init__(message, hint)
        self.config_path = config_path


class StorageError(MindTrackError):
    """Stored goal document cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, hint=f"Inspect the document at {path}" if path else None)
        self.path = path
