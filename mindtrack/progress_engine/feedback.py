"""
AI feedback log and canned message selection.

The feedback list on a goal is bounded: only the most recent
MAX_FEEDBACK_ITEMS entries are kept. Message choice takes an injectable
random.Random so tests can pin it.
"""
import random
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from mindtrack.catalog import MESSAGE_POOLS, WELCOME_TEMPLATES
from mindtrack.config_manager import config
from mindtrack.models import AIFeedback, FeedbackType, Goal

_default_rng = random.Random()


def add_feedback(
    goal: Goal,
    feedback_type: FeedbackType,
    message: str,
    data: Optional[Dict[str, Any]] = None,
    now: Optional[datetime] = None,
) -> AIFeedback:
    entry = AIFeedback(type=feedback_type, message=message, data=data, date=now or datetime.now())
    goal.ai_feedback.append(entry)

    limit = config.MAX_FEEDBACK_ITEMS
    if len(goal.ai_feedback) > limit:
        del goal.ai_feedback[:-limit]
    return entry


def pick_message(feedback_type: FeedbackType, rng: Optional[random.Random] = None) -> str:
    pool = MESSAGE_POOLS[feedback_type]
    return (rng or _default_rng).choice(pool)


def welcome_message(goal: Goal, rng: Optional[random.Random] = None) -> str:
    template = (rng or _default_rng).choice(WELCOME_TEMPLATES)
    return template.format(category=goal.category.value, title=goal.title)


def progress_feedback(
    goal: Goal,
    fields: Mapping[str, Any],
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Reaction to a freshly recorded log.

    Returns:
        {"type": FeedbackType, "message": str}. Encouragement for a completed
        day (mentions the streak and a high mood), support otherwise
        (mentions the challenges faced).
    """
    mood = fields.get("mood")
    challenges = fields.get("challenges") or []

    if fields.get("completed"):
        message = pick_message(FeedbackType.ENCOURAGEMENT, rng)
        if goal.current_streak > 0:
            message += f" You're on a {goal.current_streak}-day streak! 🔥"
        if mood and mood >= config.HIGH_MOOD_THRESHOLD:
            message += " Your positive mood is fantastic to see! 😊"
        return {"type": FeedbackType.ENCOURAGEMENT, "message": message}

    message = pick_message(FeedbackType.SUPPORT, rng)
    if challenges:
        message += (
            f" I understand you faced challenges with {', '.join(challenges)}. "
            "These experiences help us grow stronger!"
        )
    return {"type": FeedbackType.SUPPORT, "message": message}


def struggle_suggestions(fields: Mapping[str, Any]) -> List[str]:
    """Suggestions for a missed day or a low mood; empty list otherwise."""
    suggestions: List[str] = []
    mood = fields.get("mood")
    challenges = fields.get("challenges") or []

    if not fields.get("completed"):
        suggestions.append("Consider breaking your goal into smaller, more manageable steps.")
        suggestions.append("Try the 2-minute rule: commit to just 2 minutes to get started.")

    if mood and mood <= config.LOW_MOOD_THRESHOLD:
        suggestions.append("Your mood seems low today. Remember to be kind to yourself.")
        suggestions.append("Sometimes self-care is the most productive thing we can do.")

    if "time" in challenges:
        suggestions.append("Time management tip: try time-blocking or the Pomodoro Technique.")

    if "motivation" in challenges:
        suggestions.append("Remember your 'why' - what motivated you to start this goal?")

    return suggestions
