from fastapi import APIRouter, Depends, Query
from typing import Dict

from habitflow.services.habit_service import HabitTracker
from ..dependencies import get_tracker, guarded
from ..schemas import AnalyticsOut, OverviewOut

router = APIRouter(prefix="/api/stats", tags=["statistics"])

@router.get("/overview", response_model=OverviewOut)
def get_overview_stats(tracker: HabitTracker = Depends(get_tracker)):
    """
    Получить общую статистику для главной страницы дашборда
    """
    with guarded():
        return tracker.dashboard_summary()

@router.get("/analytics", response_model=AnalyticsOut)
def get_analytics(
    weeks: int = Query(8, ge=1, le=52),
    tracker: HabitTracker = Depends(get_tracker)
):
    """
    Процент выполнения по неделям для каждой привычки и распределение по дням недели
    """
    with guarded():
        return tracker.get_analytics_data(week_count=weeks).to_dict()

@router.get("/weekdays", response_model=Dict[str, int])
def get_weekday_histogram(tracker: HabitTracker = Depends(get_tracker)):
    with guarded():
        return tracker.weekday_histogram()
