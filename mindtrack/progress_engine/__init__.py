# Progress Engine: pure, in-memory transformations of one Goal aggregate.
# Pipeline order for a new log: recorder -> streaks -> progress -> achievements.

from mindtrack.progress_engine.achievements import evaluate_achievements
from mindtrack.progress_engine.advisor import (
    AdjustmentDirection,
    AdjustmentSuggestion,
    suggest_adjustment,
)
from mindtrack.progress_engine.progress import calculate_progress, recalculate_progress
from mindtrack.progress_engine.recorder import apply_adjustment, normalize_day, record_log
from mindtrack.progress_engine.streaks import recalculate_streak

__all__ = [
    "AdjustmentDirection",
    "AdjustmentSuggestion",
    "apply_adjustment",
    "calculate_progress",
    "evaluate_achievements",
    "normalize_day",
    "recalculate_progress",
    "recalculate_streak",
    "record_log",
    "suggest_adjustment",
]
