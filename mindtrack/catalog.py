"""
Static lookup tables keyed by enum.

Every table is a read-only mapping (MappingProxyType) over tuples, and every
enum member has an entry, so a missing category shows up in tests instead
of as a silent empty default at runtime.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from mindtrack.models import FeedbackType, GoalCategory


class ThresholdKind(str, Enum):
    STREAK = "streak"
    PROGRESS = "progress"


@dataclass(frozen=True)
class AchievementSpec:
    """Badge unlocked once `threshold` is reached on its metric."""
    threshold: int
    name: str
    description: str
    icon: str


@dataclass(frozen=True)
class Resource:
    title: str
    type: str          # exercise / technique / checklist / meditation
    description: str
    content: str
    difficulty: str


ACHIEVEMENT_THRESHOLDS: Mapping[ThresholdKind, Tuple[AchievementSpec, ...]] = MappingProxyType({
    ThresholdKind.STREAK: (
        AchievementSpec(3, "Getting Started", "3 days of consistency!", "🌱"),
        AchievementSpec(7, "Week Warrior", "One full week of dedication!", "🏆"),
        AchievementSpec(14, "Two Week Champion", "14 days of amazing progress!", "🥉"),
        AchievementSpec(30, "Month Master", "30 days of incredible consistency!", "🥈"),
        AchievementSpec(60, "Two Month Legend", "60 days of unwavering commitment!", "🥇"),
        AchievementSpec(100, "Century Club", "100 days! You're absolutely incredible!", "💎"),
    ),
    ThresholdKind.PROGRESS: (
        AchievementSpec(25, "Quarter Champion", "25% progress achieved!", "🥉"),
        AchievementSpec(50, "Halfway Hero", "50% progress - you're crushing it!", "🥈"),
        AchievementSpec(75, "Almost There", "75% progress - the finish line is near!", "🥇"),
        AchievementSpec(100, "Goal Crusher", "100% complete! You're amazing!", "💎"),
    ),
})


CATEGORY_TIPS: Mapping[GoalCategory, Tuple[str, ...]] = MappingProxyType({
    GoalCategory.ANXIETY: (
        "Practice deep breathing exercises for 5 minutes daily",
        "Try progressive muscle relaxation before stressful situations",
        "Challenge negative thoughts with evidence-based thinking",
        "Create a calming morning routine to start your day peacefully",
        "Use the 5-4-3-2-1 grounding technique: 5 things you see, 4 you can touch, "
        "3 you hear, 2 you smell, 1 you taste",
        "Write down your worries in a journal to externalize anxious thoughts",
        "Practice mindful observation - focus on one object for 2 minutes",
    ),
    GoalCategory.SLEEP: (
        "Establish a consistent bedtime routine",
        "Avoid screens 1 hour before sleeping",
        "Keep your bedroom cool and dark",
        "Try meditation or gentle stretches before bed",
        "Use a sleep journal to track patterns and identify what helps",
        "Try the 4-7-8 breathing technique: inhale for 4, hold for 7, exhale for 8",
        "Create a wind-down ritual with calming activities like reading or soft music",
    ),
    GoalCategory.STRESS: (
        "Break large tasks into smaller, manageable steps",
        "Practice the 4-7-8 breathing technique",
        "Take regular breaks throughout your day",
        "Identify and address your stress triggers",
        "Use the Pomodoro Technique: 25 minutes focused work, 5 minute break",
        "Try physical exercise to release stress hormones",
        "Practice saying 'no' to commitments that overwhelm you",
    ),
    GoalCategory.MOOD: (
        "Start a gratitude journal - write 3 things daily",
        "Spend time in nature or sunlight",
        "Connect with supportive friends and family",
        "Engage in activities that bring you joy",
        "Practice self-compassion - treat yourself like a good friend",
        "Try mood tracking to identify patterns and triggers",
        "Engage in creative activities like art, music, or writing",
    ),
    GoalCategory.SOCIAL: (
        "Schedule regular check-ins with friends",
        "Join groups or activities that interest you",
        "Practice active listening in conversations",
        "Be vulnerable and share your authentic self",
        "Set small social goals like greeting one person daily",
        "Practice conversation starters to feel more confident",
        "Use social media mindfully - limit comparison and increase genuine connection",
    ),
    GoalCategory.MINDFULNESS: (
        "Start with 5-minute daily meditation sessions",
        "Practice mindful eating during one meal per day",
        "Use mindfulness apps for guided exercises",
        "Focus on your breath when feeling overwhelmed",
        "Try walking meditation - focus on each step",
        "Practice body scan meditation before sleep",
        "Use mindful moments throughout the day - pause and notice your surroundings",
    ),
    GoalCategory.EXERCISE: (
        "Start with 10-15 minutes of daily movement",
        "Find activities you genuinely enjoy",
        "Set realistic weekly exercise goals",
        "Use movement as a stress-relief tool",
        "Try the 'exercise snacking' approach: 2-3 minute bursts throughout the day",
        "Focus on how exercise makes you feel rather than appearance goals",
        "Mix different types of movement: strength, cardio, flexibility, and fun activities",
    ),
    GoalCategory.HABITS: (
        "Focus on one habit at a time",
        "Use habit stacking - link new habits to existing ones",
        "Track your progress visually",
        "Celebrate small wins along the way",
        "Start incredibly small - make it impossible to fail",
        "Use environmental design - make good habits obvious and easy",
        "Practice self-forgiveness when you miss a day - get back on track immediately",
    ),
    GoalCategory.CUSTOM: (),
})


CATEGORY_RESOURCES: Mapping[GoalCategory, Tuple[Resource, ...]] = MappingProxyType({
    GoalCategory.ANXIETY: (
        Resource(
            "Anxiety Relief Breathing Exercise", "exercise",
            "4-7-8 breathing technique for immediate anxiety relief",
            "Inhale for 4 counts, hold for 7, exhale for 8. Repeat 4 times.",
            "beginner",
        ),
        Resource(
            "Progressive Muscle Relaxation", "technique",
            "Systematic tension and release to calm your body",
            "Start with your toes, tense for 5 seconds, then release. Work your way up.",
            "intermediate",
        ),
    ),
    GoalCategory.SLEEP: (
        Resource(
            "Sleep Hygiene Checklist", "checklist",
            "Evidence-based practices for better sleep",
            "Cool room (65-68°F), dark environment, no screens 1 hour before bed, "
            "consistent schedule",
            "beginner",
        ),
    ),
    GoalCategory.MINDFULNESS: (
        Resource(
            "5-Minute Body Scan", "meditation",
            "Quick mindfulness practice for any time of day",
            "Focus on each part of your body from head to toe, noticing without judgment",
            "beginner",
        ),
    ),
    GoalCategory.STRESS: (),
    GoalCategory.MOOD: (),
    GoalCategory.SOCIAL: (),
    GoalCategory.EXERCISE: (),
    GoalCategory.HABITS: (),
    GoalCategory.CUSTOM: (),
})


MESSAGE_POOLS: Mapping[FeedbackType, Tuple[str, ...]] = MappingProxyType({
    FeedbackType.ENCOURAGEMENT: (
        "Excellent work! You're building a great habit! 🌟",
        "Way to go! Every step forward counts! 💪",
        "Fantastic! You're staying committed to your goals! 🎯",
        "Great job today! Consistency is key to success! ✨",
        "Awesome! You're making real progress! 🚀",
        "Proud of you for showing up today! 💙",
        "You're building something amazing, one day at a time! 🌱",
    ),
    FeedbackType.SUPPORT: (
        "That's okay! Tomorrow is a fresh start. You've got this! 💙",
        "No worries! Progress isn't always linear. Keep going! 🌱",
        "Don't be hard on yourself. Every journey has ups and downs! 🤗",
        "It's alright! What matters is that you don't give up! 💪",
        "Remember, even small steps count as progress! 👣",
        "You're human, and that's perfectly okay. Let's refocus! 💙",
        "Setbacks are part of the journey. You're still moving forward! 🌈",
    ),
    FeedbackType.CELEBRATION: (
        "🎉 Amazing achievement! You should be proud of yourself!",
        "🏆 You've reached a major milestone! Incredible work!",
        "🌟 Look at you crushing your goals! Keep it up!",
        "💎 You're absolutely crushing it! This is fantastic progress!",
        "🎊 Celebration time! You've earned this moment of pride!",
        "🚀 You're on fire! This momentum is incredible!",
        "⭐ Star performer! Your dedication is truly inspiring!",
    ),
})


WELCOME_TEMPLATES: Tuple[str, ...] = (
    "Welcome to your {category} journey! I'm excited to support you in achieving "
    "\"{title}\". Remember, every small step counts! 🌟",
    "Great choice setting up \"{title}\"! I'll be here to cheer you on and provide "
    "guidance every step of the way. Let's make this happen! 💪",
    "Amazing goal: \"{title}\"! I believe in your ability to achieve this. Together, "
    "we'll track your progress and celebrate every victory! 🎯",
)


# Default title/description for goals created implicitly by record_activity()
ACTIVITY_GOAL_DEFAULTS: Mapping[GoalCategory, Tuple[str, str]] = MappingProxyType({
    GoalCategory.SOCIAL: (
        "Daily Social Connection",
        "Connect with others through chat and social activities",
    ),
    GoalCategory.MINDFULNESS: (
        "Daily Mindfulness Practice",
        "Practice mindfulness through journaling and reflection",
    ),
    GoalCategory.MOOD: (
        "Daily Mood Tracking",
        "Track and understand your emotional patterns",
    ),
})

DEFAULT_ACTIVITY_GOAL = ("Daily Wellness Activity", "Complete daily wellness activities")


def tips_for(category: GoalCategory) -> Tuple[str, ...]:
    return CATEGORY_TIPS[category]


def resources_for(category: GoalCategory) -> Tuple[Resource, ...]:
    return CATEGORY_RESOURCES[category]
