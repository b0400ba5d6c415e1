"""
Ядро HabitFlow: модели, журнал отметок, серии, бейджи и аналитика
"""

from .models import (
    HabitTrackerError,
    ValidationError,
    NotFoundError,
    Habit,
    CheckRecord,
    Badge,
    BadgeDefinition,
    StreakResult,
    WeeklyRate,
    HabitCompletionSeries,
    WeekdayStat,
    HeatmapDay,
    AnalyticsSnapshot
)

from .badges import BADGE_CATALOG, award_badges
from .streaks import calculate_streaks
from .ledger import CheckLedger
from .registry import HabitRegistry
from .events import EventBus, EventType, HabitEvent

__all__ = [
    # Errors
    'HabitTrackerError',
    'ValidationError',
    'NotFoundError',

    # Models
    'Habit',
    'CheckRecord',
    'Badge',
    'BadgeDefinition',
    'StreakResult',
    'WeeklyRate',
    'HabitCompletionSeries',
    'WeekdayStat',
    'HeatmapDay',
    'AnalyticsSnapshot',

    # Engine parts
    'BADGE_CATALOG',
    'award_badges',
    'calculate_streaks',
    'CheckLedger',
    'HabitRegistry',
    'EventBus',
    'EventType',
    'HabitEvent'
]
