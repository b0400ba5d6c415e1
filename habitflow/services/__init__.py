# services/__init__.py

"""
Модуль сервисов HabitFlow

Движок привычек и генератор демо-данных.
"""

from .habit_service import HabitTracker, get_habit_tracker, initialize_habit_tracker
from .demo_data import build_demo_state, DEMO_HABITS

__all__ = [
    'HabitTracker',
    'get_habit_tracker',
    'initialize_habit_tracker',
    'build_demo_state',
    'DEMO_HABITS'
]
