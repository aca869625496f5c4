"""
Goal aggregate models.

A Goal owns every record attached to it (logs, achievements, milestones,
adjustments, feedback); none of the child records is addressable on its own.
Dataclasses keep asdict() compatibility for the store.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class GoalCategory(str, Enum):
    ANXIETY = "anxiety"
    SLEEP = "sleep"
    STRESS = "stress"
    MOOD = "mood"
    SOCIAL = "social"
    MINDFULNESS = "mindfulness"
    EXERCISE = "exercise"
    HABITS = "habits"
    CUSTOM = "custom"


class Timeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    ADJUSTED = "adjusted"        # 建议性标记，不阻止后续记录


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class FeedbackType(str, Enum):
    ENCOURAGEMENT = "encouragement"
    SUGGESTION = "suggestion"
    REMINDER = "reminder"
    ADJUSTMENT = "adjustment"
    CELEBRATION = "celebration"
    RESOURCE = "resource"
    SUPPORT = "support"


@dataclass
class DailyLog:
    """One calendar day's outcome. At most one per date inside a Goal."""
    date: date
    completed: bool = False
    value: Optional[float] = None
    mood: Optional[int] = None             # 1-10
    challenges: List[str] = field(default_factory=list)
    notes: str = ""
    reflection: str = ""


@dataclass
class Achievement:
    name: str
    description: str
    icon: str
    unlocked_at: datetime = field(default_factory=datetime.now)


@dataclass
class Milestone:
    description: str
    target_date: Optional[date] = None
    target_value: Optional[float] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    celebration_message: str = ""


@dataclass
class AdjustmentRecord:
    old_target: str
    new_target: str
    reason: str
    ai_suggested: bool = False
    date: datetime = field(default_factory=datetime.now)


@dataclass
class AIFeedback:
    type: FeedbackType
    message: str
    data: Optional[Dict[str, Any]] = None
    date: datetime = field(default_factory=datetime.now)


@dataclass
class Reminders:
    enabled: bool = True
    frequency: str = "daily"    # daily / weekly / custom
    time: str = "09:00"
    message: str = ""


@dataclass
class Goal:
    """
    Goal aggregate.

    Derived state (progress, streaks, achievements) is recomputed by the
    progress engine; callers mutate it in place and persist once.
    """
    id: str
    owner_id: str
    title: str
    category: GoalCategory
    target: str
    description: str = ""
    target_value: Optional[float] = None
    target_unit: Optional[str] = None       # hours / minutes / percentage / days
    timeframe: Timeframe = Timeframe.DAILY
    deadline: Optional[datetime] = None
    priority: Priority = Priority.MEDIUM
    progress: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    status: GoalStatus = GoalStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    daily_logs: List[DailyLog] = field(default_factory=list)
    achievements: List[Achievement] = field(default_factory=list)
    milestones: List[Milestone] = field(default_factory=list)
    adjustments: List[AdjustmentRecord] = field(default_factory=list)
    ai_feedback: List[AIFeedback] = field(default_factory=list)
    reminders: Reminders = field(default_factory=Reminders)

    def __post_init__(self):
        now = datetime.now()
        if self.created_at is None:
            self.created_at = now
        if self.updated_at is None:
            self.updated_at = self.created_at
        if not self.reminders.message:
            self.reminders.message = f"Time to work on your goal: {self.title}"

    def find_log(self, day: date) -> Optional[DailyLog]:
        for log in self.daily_logs:
            if log.date == day:
                return log
        return None

    def has_achievement(self, name: str) -> bool:
        return any(a.name == name for a in self.achievements)

    def touch(self, now: Optional[datetime] = None) -> None:
        self.updated_at = now or datetime.now()
