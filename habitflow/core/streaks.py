# core/streaks.py

from datetime import date, timedelta
from typing import Iterable, List, Set

from habitflow.core.models import CheckRecord, StreakResult


def completed_days(records: Iterable[CheckRecord]) -> Set[date]:
    """Уникальные дни с выполненными отметками"""
    return {record.day for record in records if record.completed}


def current_streak(days: Set[date], today: date) -> int:
    """
    Текущая серия: подряд идущие дни, заканчивающиеся сегодня или вчера.

    Если сегодня отметки нет, а вчера есть, отсчет начинается со вчера
    (льгота в один день). Первый пропуск обрывает серию.
    Серия из N дней, закончившаяся вчера, дает N: не 1 и не N+1.
    """
    cursor = today
    if cursor not in days:
        cursor = today - timedelta(days=1)

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def longest_streak(days: Set[date]) -> int:
    """Самая длинная серия подряд идущих дней за всю историю"""
    ordered: List[date] = sorted(days)
    if not ordered:
        return 0

    longest = 1
    run = 1
    for idx in range(1, len(ordered)):
        if ordered[idx] == ordered[idx - 1] + timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def calculate_streaks(records: Iterable[CheckRecord], today: date) -> StreakResult:
    days = completed_days(records)
    if not days:
        return StreakResult(0, 0)
    return StreakResult(
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days)
    )
