from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional, Dict

from habitflow.core.models import MAX_NAME_LENGTH

# Модели запросов

def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError('Название привычки не может быть пустым')
    if len(v) > MAX_NAME_LENGTH:
        raise ValueError(f'Название привычки длиннее {MAX_NAME_LENGTH} символов')
    return v

class HabitCreate(BaseModel):
    name: str
    emoji: str = "🎯"
    goal: int = Field(5, ge=1, le=7)
    color: str = "gradient-primary"

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

class HabitUpdate(BaseModel):
    name: Optional[str] = None
    emoji: Optional[str] = None
    goal: Optional[int] = Field(None, ge=1, le=7)
    color: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return v if v is None else _clean_name(v)

# Модели ответов

class BadgeOut(BaseModel):
    badge_id: str
    name: str
    description: str
    emoji: str
    milestone: int
    unlocked_at: Optional[str] = None

class HabitOut(BaseModel):
    habit_id: str
    name: str
    emoji: str
    goal: int
    color: str
    current_streak: int
    longest_streak: int
    badges: List[BadgeOut] = []
    created_at: str

class ToggleResult(BaseModel):
    habit_id: str
    date: str
    checked: bool
    new_badges: List[BadgeOut] = []
    current_streak: int
    longest_streak: int

class HeatmapDayOut(BaseModel):
    date: str
    completed: bool

class WeeklyRateOut(BaseModel):
    week: str
    rate: int = Field(..., ge=0, le=100)

class HabitSeriesOut(BaseModel):
    habit_id: str
    habit_name: str
    data: List[WeeklyRateOut]

class WeekdayStatOut(BaseModel):
    day: str
    completed: int

class AnalyticsOut(BaseModel):
    completion_rates: List[HabitSeriesOut]
    weekly_stats: List[WeekdayStatOut]

class OverviewOut(BaseModel):
    total_habits: int
    today_completions: int
    today_completion_percent: int
    total_streak_days: int
    total_badges: int
    average_streak: int
    top_habits: List[str]

class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    uptime: float  # секунды с запуска
    config: Dict[str, Any] = {}
