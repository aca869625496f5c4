"""
Canonical goal application service.

Every public operation follows the same shape: validate input, load the
aggregate, mutate it in memory through the progress engine, save once.
Validation failures are raised before anything is loaded or mutated.
"""
import random
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from mindtrack import analytics
from mindtrack.catalog import ACTIVITY_GOAL_DEFAULTS, DEFAULT_ACTIVITY_GOAL, tips_for
from mindtrack.exceptions import InvalidTransitionError, ValidationError
from mindtrack.logger import get_logger
from mindtrack.models import FeedbackType, Goal, GoalStatus, Milestone, Reminders, Timeframe
from mindtrack.progress_engine import aggregate
from mindtrack.progress_engine.advisor import AdjustmentSuggestion, suggest_adjustment
from mindtrack.progress_engine.feedback import add_feedback, welcome_message
from mindtrack.progress_engine.recorder import DayLike, apply_adjustment, complete_milestone
from mindtrack.schema import GoalCreate, LogFields, parse_category, parse_log_day, parse_model
from mindtrack.store import GoalStore

logger = get_logger("goal_service")


class GoalService:
    """Application service for goal operations."""

    def __init__(
        self,
        store: Optional[GoalStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store or GoalStore()
        self.clock = clock or datetime.now
        self.rng = rng or random.Random()

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------
    @staticmethod
    def _new_id(prefix: str = "goal") -> str:
        return f"{prefix}_{uuid.uuid4().hex[:8]}"

    def _save(self, goal: Goal) -> Goal:
        self.store.save_goal(goal)
        return goal

    # ---------------------------------------------------------------------
    # Query operations
    # ---------------------------------------------------------------------
    def get_goal(self, owner_id: str, goal_id: str) -> Goal:
        return self.store.load_goal(owner_id, goal_id)

    def list_goals(
        self,
        owner_id: str,
        category: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Goal]:
        goals = self.store.list_goals(owner_id)
        if category:
            wanted = parse_category(category)
            goals = [g for g in goals if g.category == wanted]
        if status:
            goals = [g for g in goals if g.status.value == status]
        return goals

    def request_adjustment(
        self,
        owner_id: str,
        goal_id: str,
        record_feedback: bool = False,
    ) -> AdjustmentSuggestion:
        """
        Run the adjustment advisor.

        Read-only unless `record_feedback` is set, in which case a positive
        suggestion is also stored as an adjustment feedback entry.
        """
        goal = self.store.load_goal(owner_id, goal_id)
        suggestion = suggest_adjustment(goal)

        if suggestion.should_adjust and record_feedback:
            add_feedback(
                goal,
                FeedbackType.ADJUSTMENT,
                f"Consider adjusting your goal: {suggestion.reason}",
                data={"suggested_target": suggestion.proposed_target, "current_target": goal.target},
                now=self.clock(),
            )
            self._save(goal)
        return suggestion

    def get_goal_insights(self, owner_id: str, goal_id: str) -> Dict[str, Any]:
        goal = self.store.load_goal(owner_id, goal_id)
        return analytics.goal_insights(goal, self.clock().date())

    def get_analytics(self, owner_id: str) -> Dict[str, Any]:
        goals = self.store.list_goals(owner_id)
        return analytics.owner_analytics(goals, self.clock().date())

    def get_feedback(
        self,
        owner_id: str,
        goal_id: str,
        limit: int = 10,
        feedback_type: Optional[str] = None,
    ) -> List:
        """Newest-first feedback history, optionally filtered by type."""
        goal = self.store.load_goal(owner_id, goal_id)
        items = goal.ai_feedback
        if feedback_type:
            items = [f for f in items if f.type.value == feedback_type]
        return sorted(items, key=lambda f: f.date, reverse=True)[:limit]

    # ---------------------------------------------------------------------
    # Command operations
    # ---------------------------------------------------------------------
    def create_goal(
        self,
        owner_id: str,
        category: str,
        title: str,
        target: str,
        timeframe: str = "daily",
        **extra: Any,
    ) -> Goal:
        """
        Create and persist a new active goal.

        Raises:
            InvalidCategoryError: category outside the closed set
            ValidationError: title/target missing, bad timeframe or deadline
        """
        if not owner_id:
            raise ValidationError("Owner is required", "owner_id")
        goal_category = parse_category(category)
        payload = parse_model(
            GoalCreate,
            {"title": title, "target": target, "timeframe": timeframe, **extra},
        )

        now = self.clock()
        goal = Goal(
            id=self._new_id(),
            owner_id=owner_id,
            title=payload.title,
            category=goal_category,
            target=payload.target,
            description=payload.description,
            target_value=payload.target_value,
            target_unit=payload.target_unit,
            timeframe=payload.timeframe,
            deadline=payload.deadline,
            priority=payload.priority,
            created_at=now,
            milestones=[
                Milestone(
                    description=m.description,
                    target_date=m.target_date,
                    target_value=m.target_value,
                )
                for m in payload.milestones
            ],
        )
        if payload.reminders is not None:
            goal.reminders = Reminders(**payload.reminders.model_dump())
            if not goal.reminders.message:
                goal.reminders.message = f"Time to work on your goal: {goal.title}"

        add_feedback(goal, FeedbackType.ENCOURAGEMENT, welcome_message(goal, self.rng), now=now)
        self._save(goal)
        logger.info("Goal created: %s (%s, owner=%s)", goal.id, goal.category.value, owner_id)
        return goal

    def log_progress(
        self,
        owner_id: str,
        goal_id: str,
        fields: Optional[Dict[str, Any]] = None,
        day: DayLike = None,
    ) -> Goal:
        """
        Record one day's outcome and refresh streak, progress and achievements.

        Raises:
            InvalidRangeError: mood outside 1-10
            ValidationError: `day` is a string that is not a date
            GoalNotFoundError: unknown goal or wrong owner
        """
        now = self.clock()
        log_day = parse_log_day(day, now)
        log_fields = parse_model(LogFields, fields)
        goal = self.store.load_goal(owner_id, goal_id)

        unlocked = aggregate.log_progress(goal, log_day, log_fields.model_dump(), now=now, rng=self.rng)
        self._save(goal)

        logger.info(
            "Progress logged: %s day=%s completed=%s progress=%d streak=%d",
            goal.id,
            log_day.isoformat(),
            log_fields.completed,
            goal.progress,
            goal.current_streak,
        )
        for achievement in unlocked:
            logger.info("Achievement unlocked: %s -> %s", goal.id, achievement.name)
        return goal

    def apply_adjustment(
        self,
        owner_id: str,
        goal_id: str,
        new_target: Optional[str] = None,
        reason: Optional[str] = None,
        ai_suggested: bool = True,
    ) -> Goal:
        """
        Apply an adjustment, either explicit or the advisor's current suggestion.

        Raises:
            ValidationError: no target given and the advisor has nothing to suggest
        """
        if new_target is not None and not new_target.strip():
            raise ValidationError("New target must not be empty", "new_target")

        goal = self.store.load_goal(owner_id, goal_id)
        if new_target is None:
            suggestion = suggest_adjustment(goal)
            if not suggestion.should_adjust:
                raise ValidationError("No adjustment is suggested for this goal", "new_target")
            new_target = suggestion.proposed_target
            reason = reason or suggestion.reason

        apply_adjustment(goal, new_target.strip(), reason or "", ai_suggested=ai_suggested, now=self.clock())
        self._save(goal)
        logger.info("Goal adjusted: %s -> %r", goal.id, goal.target)
        return goal

    def mark_complete(self, owner_id: str, goal_id: str) -> Goal:
        goal = self.store.load_goal(owner_id, goal_id)
        unlocked = aggregate.mark_complete(goal, self.clock())
        self._save(goal)
        logger.info("Goal completed: %s (%d achievements unlocked)", goal.id, len(unlocked))
        return goal

    def complete_milestone(self, owner_id: str, goal_id: str, index: int) -> Goal:
        goal = self.store.load_goal(owner_id, goal_id)
        if not 0 <= index < len(goal.milestones):
            raise ValidationError(f"No milestone at position {index}", "index")

        now = self.clock()
        if complete_milestone(goal, index, now):
            milestone = goal.milestones[index]
            add_feedback(
                goal,
                FeedbackType.CELEBRATION,
                milestone.celebration_message or f"🏁 Milestone reached: {milestone.description}",
                now=now,
            )
            self._save(goal)
        return goal

    def pause_goal(self, owner_id: str, goal_id: str) -> Goal:
        goal = self.store.load_goal(owner_id, goal_id)
        if goal.status == GoalStatus.PAUSED:
            return goal
        if goal.status == GoalStatus.COMPLETED:
            raise InvalidTransitionError(goal.status.value, GoalStatus.PAUSED.value)

        goal.status = GoalStatus.PAUSED
        goal.touch(self.clock())
        return self._save(goal)

    def resume_goal(self, owner_id: str, goal_id: str) -> Goal:
        goal = self.store.load_goal(owner_id, goal_id)
        if goal.status != GoalStatus.PAUSED:
            raise InvalidTransitionError(goal.status.value, GoalStatus.ACTIVE.value)

        goal.status = GoalStatus.ACTIVE
        goal.touch(self.clock())
        return self._save(goal)

    def delete_goal(self, owner_id: str, goal_id: str) -> None:
        self.store.delete_goal(owner_id, goal_id)
        logger.info("Goal deleted: %s (owner=%s)", goal_id, owner_id)

    def record_activity(self, owner_id: str, category: str, activity_type: str) -> Goal:
        """
        Count a completed app activity (journal entry, chat, breathing...)
        toward the owner's daily goal for `category`.

        Reuses the newest active daily goal in that category, creating one
        when none exists. A day that already has a log is left unchanged.
        """
        goal_category = parse_category(category)
        candidates = [
            g for g in self.store.list_goals(owner_id)
            if g.category == goal_category
            and g.timeframe == Timeframe.DAILY
            and g.status in (GoalStatus.ACTIVE, GoalStatus.ADJUSTED)
        ]

        if candidates:
            goal = candidates[0]
        else:
            title, description = ACTIVITY_GOAL_DEFAULTS.get(goal_category, DEFAULT_ACTIVITY_GOAL)
            goal = self.create_goal(
                owner_id,
                goal_category.value,
                title,
                "Complete daily activity",
                description=description,
            )

        today = self.clock().date()
        if goal.find_log(today) is not None:
            return goal

        return self.log_progress(
            owner_id,
            goal.id,
            {"completed": True, "value": 1, "notes": f"Completed {activity_type} activity"},
            day=today,
        )

    @staticmethod
    def tips(goal: Goal) -> List[str]:
        return list(tips_for(goal.category))
