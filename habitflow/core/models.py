#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow v1.0 - Core Data Models
Модели данных привычек, отметок и бейджей с валидацией

Версия: 1.0.0
"""

import uuid
from datetime import date
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict
import logging

from habitflow.utils.datetime_utils import parse_day, format_day, now_in, DayLike

logger = logging.getLogger(__name__)

MIN_GOAL = 1
MAX_GOAL = 7
MAX_NAME_LENGTH = 100

DEFAULT_EMOJI = "🎯"
DEFAULT_COLOR = "gradient-primary"

# ===== ИСКЛЮЧЕНИЯ =====

class HabitTrackerError(Exception):
    """Базовая ошибка движка привычек"""
    pass

class ValidationError(HabitTrackerError):
    """Ошибка валидации данных"""
    pass

class NotFoundError(HabitTrackerError):
    """Привычка не найдена"""
    pass

# ===== VALIDATION HELPERS =====

def validate_text(text: str, min_length: int = 1, max_length: int = 1000, field_name: str = "text") -> str:
    """Валидация текстовых полей"""
    if not isinstance(text, str):
        raise ValidationError(f"{field_name} должен быть строкой")

    text = text.strip()
    if len(text) < min_length:
        raise ValidationError(f"{field_name} должен содержать минимум {min_length} символов")

    if len(text) > max_length:
        raise ValidationError(f"{field_name} должен содержать максимум {max_length} символов")

    return text

def validate_goal(goal: Any) -> int:
    """Цель - количество дней в неделю, от 1 до 7"""
    if isinstance(goal, bool) or not isinstance(goal, int):
        raise ValidationError("goal должен быть целым числом")
    if not MIN_GOAL <= goal <= MAX_GOAL:
        raise ValidationError(f"goal должен быть от {MIN_GOAL} до {MAX_GOAL}")
    return goal

def validate_day(value: DayLike) -> str:
    """Нормализация даты к каноничному виду YYYY-MM-DD"""
    try:
        return format_day(parse_day(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Неверный формат даты: {value!r}")

def new_id() -> str:
    return str(uuid.uuid4())

# ===== CORE MODELS =====

@dataclass(frozen=True)
class BadgeDefinition:
    """Запись каталога бейджей (неизменяемая)"""
    name: str
    description: str
    emoji: str
    milestone: int  # длина серии в днях

    def unlock(self, unlocked_at: str) -> "Badge":
        """Создать разблокированный экземпляр бейджа"""
        return Badge(
            badge_id=new_id(),
            name=self.name,
            description=self.description,
            emoji=self.emoji,
            milestone=self.milestone,
            unlocked_at=unlocked_at
        )

@dataclass
class Badge:
    """Разблокированный бейдж привычки"""
    badge_id: str
    name: str
    description: str
    emoji: str
    milestone: int
    unlocked_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Badge":
        return cls(**data)

@dataclass
class CheckRecord:
    """Отметка о выполнении привычки за календарный день"""
    check_id: str
    habit_id: str
    date: str  # ISO формат даты (YYYY-MM-DD)
    completed: bool = True
    completed_at: Optional[str] = None

    def __post_init__(self):
        """Валидация после создания объекта"""
        self.date = validate_day(self.date)

    @property
    def day(self) -> date:
        """Дата отметки как объект date"""
        return date.fromisoformat(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckRecord":
        return cls(**data)

@dataclass
class Habit:
    """Модель привычки"""
    habit_id: str
    name: str
    emoji: str = DEFAULT_EMOJI
    goal: int = 5  # дней в неделю
    color: str = DEFAULT_COLOR
    current_streak: int = 0
    longest_streak: int = 0
    badges: List[Badge] = field(default_factory=list)
    created_at: str = field(default_factory=lambda: now_in().isoformat())

    EDITABLE_FIELDS = ("name", "emoji", "goal", "color")

    def __post_init__(self):
        """Валидация после создания объекта"""
        self.name = validate_text(self.name, min_length=1, max_length=MAX_NAME_LENGTH, field_name="name")
        self.emoji = validate_text(self.emoji, min_length=1, max_length=16, field_name="emoji")
        self.color = validate_text(self.color, min_length=1, max_length=50, field_name="color")
        self.goal = validate_goal(self.goal)

        for streak_field in ("current_streak", "longest_streak"):
            value = getattr(self, streak_field)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError(f"{streak_field} должен быть неотрицательным целым числом")

        if self.longest_streak < self.current_streak:
            raise ValidationError(
                f"longest_streak ({self.longest_streak}) меньше current_streak ({self.current_streak})"
            )

        milestones = self.badge_milestones
        if len(set(milestones)) != len(milestones):
            raise ValidationError(f"Повторяющиеся бейджи: {milestones}")

    @property
    def badge_milestones(self) -> List[int]:
        return [badge.milestone for badge in self.badges]

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь"""
        return {
            "habit_id": self.habit_id,
            "name": self.name,
            "emoji": self.emoji,
            "goal": self.goal,
            "color": self.color,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "badges": [b.to_dict() for b in self.badges],
            "created_at": self.created_at
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        """Десериализация из словаря"""
        try:
            return cls(
                habit_id=data["habit_id"],
                name=data["name"],
                emoji=data.get("emoji", DEFAULT_EMOJI),
                goal=data.get("goal", 5),
                color=data.get("color", DEFAULT_COLOR),
                current_streak=data.get("current_streak", 0),
                longest_streak=data.get("longest_streak", 0),
                badges=[Badge.from_dict(b) for b in data.get("badges", [])],
                created_at=data.get("created_at") or now_in().isoformat()
            )
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Некорректные данные привычки: {e}")

# ===== ПРОИЗВОДНЫЕ ПРЕДСТАВЛЕНИЯ =====

@dataclass(frozen=True)
class StreakResult:
    """Текущая и самая длинная серия"""
    current_streak: int = 0
    longest_streak: int = 0

@dataclass(frozen=True)
class WeeklyRate:
    """Процент выполнения цели за неделю"""
    week: str
    rate: int

@dataclass
class HabitCompletionSeries:
    habit_id: str
    habit_name: str
    data: List[WeeklyRate] = field(default_factory=list)

@dataclass(frozen=True)
class WeekdayStat:
    day: str
    completed: int

@dataclass(frozen=True)
class HeatmapDay:
    date: str
    completed: bool

@dataclass
class AnalyticsSnapshot:
    """Снимок аналитики, пересчитывается при каждом запросе"""
    completion_rates: List[HabitCompletionSeries] = field(default_factory=list)
    weekly_stats: List[WeekdayStat] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
