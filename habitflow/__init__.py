"""
HabitFlow - трекер привычек: серии, бейджи и аналитика выполнения
"""

from habitflow.core import (
    HabitTrackerError,
    ValidationError,
    NotFoundError,
    Habit,
    CheckRecord,
    Badge,
    BADGE_CATALOG,
    EventType,
    HabitEvent
)
from habitflow.services import HabitTracker, get_habit_tracker, initialize_habit_tracker

__version__ = "1.0.0"

__all__ = [
    'HabitTrackerError',
    'ValidationError',
    'NotFoundError',
    'Habit',
    'CheckRecord',
    'Badge',
    'BADGE_CATALOG',
    'EventType',
    'HabitEvent',
    'HabitTracker',
    'get_habit_tracker',
    'initialize_habit_tracker',
    '__version__'
]
