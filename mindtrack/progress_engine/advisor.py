"""
Adjustment Advisor.

Looks at the most recent logs and recommends loosening a goal the user
keeps missing, or tightening one they almost never miss. Pure heuristic:
the goal is never mutated here, applying a suggestion is the caller's
decision (see recorder.apply_adjustment).

决策规则:
    window >= 7  and rate < 0.3 -> loosen
    window >= 14 and rate > 0.9 -> tighten
    otherwise                   -> no recommendation
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from mindtrack.config_manager import config
from mindtrack.models import DailyLog, Goal
from mindtrack.progress_engine.progress import completion_fraction

LOOSEN_TARGET = "Consider reducing the frequency or intensity"
LOOSEN_REASON = (
    "Your current goal might be too ambitious. "
    "Let's adjust it to build sustainable momentum!"
)
TIGHTEN_TARGET = "Consider increasing the challenge"
TIGHTEN_REASON = (
    "You're crushing this goal! Ready to level up and take on a bigger challenge?"
)
BALANCED_MESSAGE = "Your goal seems well-balanced! Keep up the great work!"


class AdjustmentDirection(str, Enum):
    LOOSEN = "loosen"
    TIGHTEN = "tighten"
    NONE = "none"


@dataclass
class AdjustmentSuggestion:
    """
    Advisor output.

    proposed_target and reason are None when should_adjust is False.
    """
    should_adjust: bool
    direction: AdjustmentDirection = AdjustmentDirection.NONE
    reason: Optional[str] = None
    proposed_target: Optional[str] = None
    completion_rate: float = 0.0
    window_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"should_adjust": self.should_adjust}
        if self.should_adjust:
            data.update(
                direction=self.direction.value,
                reason=self.reason,
                proposed_target=self.proposed_target,
            )
        data["completion_rate"] = self.completion_rate
        data["window_size"] = self.window_size
        return data


def recent_window(goal: Goal, size: Optional[int] = None) -> List[DailyLog]:
    """Up to `size` most recent logs by date, oldest first."""
    size = size or config.ADJUSTMENT_WINDOW
    ordered = sorted(goal.daily_logs, key=lambda log: log.date)
    return ordered[-size:]


def suggest_adjustment(goal: Goal) -> AdjustmentSuggestion:
    window = recent_window(goal)
    size = len(window)
    rate = completion_fraction(window)

    if size >= config.LOOSEN_MIN_LOGS and rate < config.LOOSEN_RATE:
        return AdjustmentSuggestion(
            should_adjust=True,
            direction=AdjustmentDirection.LOOSEN,
            reason=LOOSEN_REASON,
            proposed_target=LOOSEN_TARGET,
            completion_rate=rate,
            window_size=size,
        )

    if size >= config.TIGHTEN_MIN_LOGS and rate > config.TIGHTEN_RATE:
        return AdjustmentSuggestion(
            should_adjust=True,
            direction=AdjustmentDirection.TIGHTEN,
            reason=TIGHTEN_REASON,
            proposed_target=TIGHTEN_TARGET,
            completion_rate=rate,
            window_size=size,
        )

    return AdjustmentSuggestion(should_adjust=False, completion_rate=rate, window_size=size)


def suggest_actions(goal: Goal) -> List[str]:
    """Short next-step hints shown alongside goal insights."""
    actions = []
    if goal.current_streak == 0:
        actions.append("Start with just 2 minutes today to build momentum")
    elif goal.current_streak < 7:
        actions.append("You're building a great habit! Keep the streak alive")

    if goal.progress < 25:
        actions.append("Focus on consistency over perfection")
    return actions
