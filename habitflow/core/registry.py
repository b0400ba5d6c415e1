# core/registry.py

import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from habitflow.core.models import (
    Habit, ValidationError, NotFoundError, validate_text, validate_goal, new_id,
    DEFAULT_EMOJI, DEFAULT_COLOR, MAX_NAME_LENGTH
)
from habitflow.utils.datetime_utils import now_in

logger = logging.getLogger(__name__)


class HabitRegistry:
    """
    Реестр привычек (порядок вставки сохраняется)

    Возможности:
    - Создание, обновление, удаление привычек
    - Валидация полей до изменения состояния
    """

    def __init__(self):
        self._habits: Dict[str, Habit] = {}

    def __len__(self) -> int:
        return len(self._habits)

    def __contains__(self, habit_id: str) -> bool:
        return habit_id in self._habits

    def create(self, name: str, emoji: str = DEFAULT_EMOJI, goal: int = 5,
               color: str = DEFAULT_COLOR, created_at: Optional[datetime] = None) -> Habit:
        """Создать новую привычку с нулевыми сериями"""
        habit = Habit(
            habit_id=new_id(),
            name=name,
            emoji=emoji,
            goal=goal,
            color=color,
            created_at=(created_at or now_in()).isoformat()
        )
        self._habits[habit.habit_id] = habit
        return habit

    def add(self, habit: Habit) -> None:
        """Добавить готовую привычку (восстановление состояния, демо-данные)"""
        if habit.habit_id in self._habits:
            raise ValidationError(f"Привычка {habit.habit_id} уже существует")
        self._habits[habit.habit_id] = habit

    def get(self, habit_id: str) -> Habit:
        habit = self._habits.get(habit_id)
        if habit is None:
            raise NotFoundError(f"Привычка {habit_id} не найдена")
        return habit

    def update(self, habit_id: str, fields: Mapping[str, Any]) -> Habit:
        """
        Обновить редактируемые поля привычки.

        Серии и бейджи через этот путь не меняются. Все поля проверяются
        до применения, при ошибке привычка остается прежней.
        """
        habit = self.get(habit_id)

        unknown = set(fields) - set(Habit.EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Поля нельзя изменить: {sorted(unknown)}")

        validated: Dict[str, Any] = {}
        for key, value in fields.items():
            if key == "name":
                validated[key] = validate_text(value, min_length=1, max_length=MAX_NAME_LENGTH, field_name="name")
            elif key == "goal":
                validated[key] = validate_goal(value)
            elif key == "emoji":
                validated[key] = validate_text(value, min_length=1, max_length=16, field_name="emoji")
            else:
                validated[key] = validate_text(value, min_length=1, max_length=50, field_name="color")

        for key, value in validated.items():
            setattr(habit, key, value)
        return habit

    def remove(self, habit_id: str) -> Optional[Habit]:
        return self._habits.pop(habit_id, None)

    def list(self) -> List[Habit]:
        return list(self._habits.values())

    def clear(self) -> None:
        self._habits.clear()
