from fastapi import APIRouter, Depends, Response
from typing import List

from habitflow.services.habit_service import HabitTracker
from ..dependencies import get_tracker, guarded
from ..schemas import HabitCreate, HabitUpdate, HabitOut, ToggleResult, HeatmapDayOut

router = APIRouter(prefix="/api/habits", tags=["habits"])

@router.get("", response_model=List[HabitOut])
def list_habits(tracker: HabitTracker = Depends(get_tracker)):
    """
    Получить все привычки в порядке создания
    """
    with guarded():
        return [h.to_dict() for h in tracker.list_habits()]

@router.post("", response_model=HabitOut, status_code=201)
def create_habit(payload: HabitCreate, tracker: HabitTracker = Depends(get_tracker)):
    """
    Создать привычку
    """
    with guarded():
        habit = tracker.create_habit(payload.name, emoji=payload.emoji, goal=payload.goal, color=payload.color)
        return habit.to_dict()

@router.get("/{habit_id}", response_model=HabitOut)
def get_habit(habit_id: str, tracker: HabitTracker = Depends(get_tracker)):
    with guarded():
        return tracker.get_habit(habit_id).to_dict()

@router.patch("/{habit_id}", response_model=HabitOut)
def update_habit(habit_id: str, payload: HabitUpdate, tracker: HabitTracker = Depends(get_tracker)):
    """
    Обновить название, emoji, цель или цвет привычки
    """
    with guarded():
        habit = tracker.update_habit(habit_id, payload.model_dump(exclude_unset=True))
        return habit.to_dict()

@router.delete("/{habit_id}", status_code=204)
def delete_habit(habit_id: str, tracker: HabitTracker = Depends(get_tracker)):
    """
    Удалить привычку вместе с отметками (повторное удаление не ошибка)
    """
    with guarded():
        tracker.delete_habit(habit_id)
    return Response(status_code=204)

@router.post("/{habit_id}/checks/{day}", response_model=ToggleResult)
def toggle_check(habit_id: str, day: str, tracker: HabitTracker = Depends(get_tracker)):
    """
    Переключить отметку за день (YYYY-MM-DD)
    """
    with guarded():
        new_badges = tracker.toggle_check(habit_id, day)
        habit = tracker.get_habit(habit_id)
        return {
            "habit_id": habit_id,
            "date": day,
            "checked": tracker.is_checked(habit_id, day),
            "new_badges": [b.to_dict() for b in new_badges],
            "current_streak": habit.current_streak,
            "longest_streak": habit.longest_streak
        }

@router.get("/{habit_id}/heatmap", response_model=List[HeatmapDayOut])
def get_heatmap(habit_id: str, tracker: HabitTracker = Depends(get_tracker)):
    with guarded():
        return [{"date": d.date, "completed": d.completed} for d in tracker.habit_heatmap(habit_id)]
