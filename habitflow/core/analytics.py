#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow v1.0 - Analytics
Агрегация отметок для страниц аналитики и дашборда.

Функции только читают реестр и журнал и ничего не меняют.

Версия: 1.0.0
"""

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List

from habitflow.core.ledger import CheckLedger
from habitflow.core.models import (
    Habit, WeeklyRate, HabitCompletionSeries, WeekdayStat, HeatmapDay, AnalyticsSnapshot
)
from habitflow.utils.datetime_utils import (
    WEEKDAY_LABELS, week_start, week_label, month_start, month_end, date_range, format_day
)

DEFAULT_WEEKS = 8
MAX_RATE = 100
HEATMAP_LOOKBACK_DAYS = 30


def _rate_percent(completed: int, goal: int) -> int:
    """Процент от недельной цели, не выше 100"""
    rate = round(completed / goal * 100)
    return min(rate, MAX_RATE)


def weekly_completion_series(habit: Habit, ledger: CheckLedger, today: date,
                             week_count: int = DEFAULT_WEEKS) -> List[WeeklyRate]:
    """
    Процент выполнения цели по неделям за последние week_count недель.

    Недели начинаются с понедельника, старшая неделя первая. В неделю
    входят дни с понедельника по воскресенье включительно.
    """
    days = [r.day for r in ledger.records_for(habit.habit_id) if r.completed]
    current_week = week_start(today)

    series = []
    for offset in range(week_count - 1, -1, -1):
        start = current_week - timedelta(weeks=offset)
        end = start + timedelta(days=6)
        completed = sum(1 for d in days if start <= d <= end)
        series.append(WeeklyRate(week=week_label(start), rate=_rate_percent(completed, habit.goal)))
    return series


def weekday_histogram(ledger: CheckLedger) -> Dict[str, int]:
    """Количество выполненных отметок всех привычек по дням недели, Mon..Sun"""
    histogram = OrderedDict((label, 0) for label in WEEKDAY_LABELS)
    for record in ledger.all_records():
        if record.completed:
            histogram[WEEKDAY_LABELS[record.day.weekday()]] += 1
    return histogram


def build_snapshot(habits: Iterable[Habit], ledger: CheckLedger, today: date,
                   week_count: int = DEFAULT_WEEKS) -> AnalyticsSnapshot:
    completion_rates = [
        HabitCompletionSeries(
            habit_id=habit.habit_id,
            habit_name=habit.name,
            data=weekly_completion_series(habit, ledger, today, week_count)
        )
        for habit in habits
    ]
    weekly_stats = [WeekdayStat(day=day, completed=count) for day, count in weekday_histogram(ledger).items()]
    return AnalyticsSnapshot(completion_rates=completion_rates, weekly_stats=weekly_stats)


def habit_heatmap(habit: Habit, ledger: CheckLedger, today: date) -> List[HeatmapDay]:
    """Календарь отметок: с начала месяца (сегодня - 30 дней) до конца текущего месяца"""
    checked = {r.date for r in ledger.records_for(habit.habit_id) if r.completed}
    start = month_start(today - timedelta(days=HEATMAP_LOOKBACK_DAYS))
    end = month_end(today)
    return [HeatmapDay(date=format_day(d), completed=format_day(d) in checked) for d in date_range(start, end)]


def dashboard_summary(habits: List[Habit], ledger: CheckLedger, today: date) -> Dict[str, object]:
    """Сводка для главной страницы"""
    today_str = format_day(today)
    habit_ids = {h.habit_id for h in habits}
    today_completions = sum(
        1 for r in ledger.all_records()
        if r.completed and r.date == today_str and r.habit_id in habit_ids
    )
    total_habits = len(habits)
    total_streak_days = sum(h.current_streak for h in habits)

    return {
        "total_habits": total_habits,
        "today_completions": today_completions,
        "today_completion_percent": round(today_completions / total_habits * 100) if total_habits else 0,
        "total_streak_days": total_streak_days,
        "total_badges": sum(len(h.badges) for h in habits),
        "average_streak": round(total_streak_days / total_habits) if total_habits else 0,
        "top_habits": [h.habit_id for h in sorted(habits, key=lambda h: h.current_streak, reverse=True)],
    }
