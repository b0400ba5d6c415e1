# services/demo_data.py

"""
Демо-данные для разработки без хранилища: три привычки и случайная
история отметок за последние дни.
"""

import logging
import random
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from habitflow.core.badges import award_badges
from habitflow.core.models import Habit, CheckRecord
from habitflow.core.streaks import calculate_streaks
from habitflow.utils.datetime_utils import format_day

logger = logging.getLogger(__name__)

DEMO_HABITS = [
    {"habit_id": "habit_1", "name": "Morning Exercise", "emoji": "🏃‍♂️", "goal": 5,
     "color": "gradient-success", "created_days_ago": 30},
    {"habit_id": "habit_2", "name": "Read 30 minutes", "emoji": "📚", "goal": 7,
     "color": "gradient-primary", "created_days_ago": 20},
    {"habit_id": "habit_3", "name": "Meditation", "emoji": "🧘‍♀️", "goal": 4,
     "color": "gradient-warning", "created_days_ago": 10},
]


def build_demo_state(now: datetime, rng: Optional[random.Random] = None, days: int = 30,
                     completion_probability: float = 0.7) -> Tuple[List[Habit], List[CheckRecord]]:
    """
    Собрать демо-привычки и отметки за последние days дней (включая сегодня).

    Каждый день каждой привычки отмечается с вероятностью completion_probability.
    Серии и бейджи пересчитываются по сгенерированной истории.
    """
    rng = rng or random.Random()
    today: date = now.date()

    habits = [
        Habit(
            habit_id=spec["habit_id"],
            name=spec["name"],
            emoji=spec["emoji"],
            goal=spec["goal"],
            color=spec["color"],
            created_at=(now - timedelta(days=spec["created_days_ago"])).isoformat()
        )
        for spec in DEMO_HABITS
    ]

    records: List[CheckRecord] = []
    for offset in range(days):
        day = today - timedelta(days=offset)
        day_str = format_day(day)
        for habit in habits:
            if rng.random() < completion_probability:
                records.append(CheckRecord(
                    check_id=f"check_{habit.habit_id}_{day_str}",
                    habit_id=habit.habit_id,
                    date=day_str,
                    completed=True,
                    completed_at=datetime.combine(day, time.min).isoformat()
                ))

    for habit in habits:
        streaks = calculate_streaks((r for r in records if r.habit_id == habit.habit_id), today)
        habit.current_streak = streaks.current_streak
        habit.longest_streak = streaks.longest_streak
        habit.badges = award_badges([], streaks.current_streak, now=lambda: now)

    logger.info(f"🎲 Демо-данные: {len(habits)} привычек, {len(records)} отметок за {days} дней")
    return habits, records
