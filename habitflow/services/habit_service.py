# services/habit_service.py

import logging
import random
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from habitflow.config import get_config
from habitflow.core.analytics import (
    weekly_completion_series, weekday_histogram, build_snapshot, habit_heatmap, dashboard_summary
)
from habitflow.core.badges import award_badges, get_badge_definition
from habitflow.core.events import EventBus, EventType, HabitEvent, Listener
from habitflow.core.ledger import CheckLedger
from habitflow.core.models import (
    Habit, CheckRecord, Badge, StreakResult, WeeklyRate, HeatmapDay, AnalyticsSnapshot,
    HabitTrackerError, ValidationError, validate_day, DEFAULT_EMOJI, DEFAULT_COLOR
)
from habitflow.core.registry import HabitRegistry
from habitflow.core.streaks import calculate_streaks
from habitflow.services.demo_data import build_demo_state
from habitflow.utils.datetime_utils import DayLike, now_in

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# ===== ОСНОВНОЙ СЕРВИС ПРИВЫЧЕК =====

class HabitTracker:
    """
    Движок трекера привычек

    Возможности:
    - Создание, обновление, удаление привычек (с каскадом на отметки)
    - Переключение отметок с пересчетом серий и выдачей бейджей
    - Аналитика по неделям и дням недели
    - Подписка на изменения состояния
    - Экспорт и импорт состояния в виде словаря

    Все операции синхронные. Для конкурентного доступа вызывающая сторона
    должна держать одну блокировку на экземпляр.
    """

    def __init__(self, clock: Optional[Clock] = None, timezone: Optional[str] = None,
                 analytics_weeks: Optional[int] = None):
        if clock is None or timezone is None or analytics_weeks is None:
            config = get_config()
            timezone = timezone or config.timezone
            analytics_weeks = analytics_weeks or config.analytics.weeks

        self.timezone = timezone
        self.analytics_weeks = analytics_weeks
        self._clock: Clock = clock or (lambda: now_in(self.timezone))

        self.registry = HabitRegistry()
        self.ledger = CheckLedger()
        self.events = EventBus()
        logger.info("✅ HabitTracker инициализирован")

    # ===== ВРЕМЯ =====

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self._clock().date()

    # ===== ПОДПИСКА =====

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписаться на события движка, возвращает функцию отписки"""
        return self.events.subscribe(listener)

    def _emit(self, event_type: EventType, habit_id: Optional[str] = None, **payload: Any) -> None:
        self.events.publish(HabitEvent(event_type=event_type, habit_id=habit_id, payload=payload))

    # ===== РЕЕСТР ПРИВЫЧЕК =====

    def create_habit(self, name: str, emoji: str = DEFAULT_EMOJI, goal: int = 5,
                     color: str = DEFAULT_COLOR) -> Habit:
        """Создать новую привычку"""
        try:
            habit = self.registry.create(name, emoji=emoji, goal=goal, color=color, created_at=self.now())
        except ValidationError as e:
            logger.warning(f"⚠️ Привычка не создана: {e}")
            raise

        logger.info(f"✅ Создана привычка {habit.habit_id}: {habit.name}")
        self._emit(EventType.HABIT_CREATED, habit.habit_id)
        return habit

    def update_habit(self, habit_id: str, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Habit:
        """Обновить name/emoji/goal/color привычки"""
        updates = dict(fields or {}, **kwargs)
        try:
            habit = self.registry.update(habit_id, updates)
        except HabitTrackerError as e:
            logger.warning(f"⚠️ Привычка {habit_id} не обновлена: {e}")
            raise

        logger.info(f"✏️ Обновлена привычка {habit_id}: {sorted(updates)}")
        self._emit(EventType.HABIT_UPDATED, habit_id, fields=sorted(updates))
        return habit

    def delete_habit(self, habit_id: str) -> bool:
        """
        Удалить привычку и все ее отметки.

        Удаление несуществующей привычки не является ошибкой, возвращает False.
        """
        habit = self.registry.remove(habit_id)
        if habit is None:
            logger.debug(f"Привычка {habit_id} уже удалена")
            return False

        removed_checks = self.ledger.remove_habit(habit_id)
        logger.info(f"🗑️ Удалена привычка {habit_id} и {removed_checks} отметок")
        self._emit(EventType.HABIT_DELETED, habit_id, removed_checks=removed_checks)
        return True

    def get_habit(self, habit_id: str) -> Habit:
        return self.registry.get(habit_id)

    def list_habits(self) -> List[Habit]:
        return self.registry.list()

    # ===== ОТМЕТКИ И СЕРИИ =====

    def toggle_check(self, habit_id: str, day: DayLike) -> List[Badge]:
        """
        Переключить отметку привычки за день.

        Существующая отметка удаляется, серии и бейджи при этом не
        пересчитываются. Новая отметка пересчитывает серии и возвращает
        новые бейджи по возрастанию milestone.
        """
        try:
            day_str = validate_day(day)
            habit = self.registry.get(habit_id)
        except HabitTrackerError as e:
            logger.warning(f"⚠️ Отметка не переключена: {e}")
            raise

        checked, _ = self.ledger.toggle(habit_id, day_str, completed_at=self.now())
        if not checked:
            logger.info(f"↩️ Снята отметка {habit_id} за {day_str}")
            self._emit(EventType.CHECK_REMOVED, habit_id, date=day_str)
            return []

        streaks = self.calculate_streaks(habit_id)
        new_badges = award_badges(habit.badges, streaks.current_streak, now=self._clock)

        habit.current_streak = streaks.current_streak
        habit.longest_streak = max(habit.longest_streak, streaks.current_streak)
        habit.badges.extend(new_badges)

        logger.info(f"✅ Отметка {habit_id} за {day_str}, серия {habit.current_streak}")
        self._emit(EventType.CHECK_ADDED, habit_id, date=day_str,
                   current_streak=habit.current_streak, longest_streak=habit.longest_streak)

        if new_badges:
            logger.info(f"🏆 Привычка {habit_id} получила бейджи: {[b.name for b in new_badges]}")
            self._emit(EventType.BADGES_UNLOCKED, habit_id, milestones=[b.milestone for b in new_badges])

        return new_badges

    def is_checked(self, habit_id: str, day: DayLike) -> bool:
        self.registry.get(habit_id)
        record = self.ledger.get(habit_id, validate_day(day))
        return record is not None and record.completed

    def checks_for_habit(self, habit_id: str) -> List[CheckRecord]:
        self.registry.get(habit_id)
        return sorted(self.ledger.records_for(habit_id), key=lambda r: r.date)

    def calculate_streaks(self, habit_id: str, today: Optional[date] = None) -> StreakResult:
        """Серии привычки по журналу (не меняет привычку)"""
        self.registry.get(habit_id)
        return calculate_streaks(self.ledger.records_for(habit_id), today or self.today())

    # ===== АНАЛИТИКА =====

    def _resolve(self, habit: Union[Habit, str]) -> Habit:
        return self.registry.get(habit if isinstance(habit, str) else habit.habit_id)

    def _weeks(self, week_count: Optional[int]) -> int:
        weeks = self.analytics_weeks if week_count is None else week_count
        if isinstance(weeks, bool) or not isinstance(weeks, int) or weeks < 1:
            raise ValidationError("week_count должен быть положительным целым числом")
        return weeks

    def weekly_completion_series(self, habit: Union[Habit, str], week_count: Optional[int] = None) -> List[WeeklyRate]:
        return weekly_completion_series(self._resolve(habit), self.ledger, self.today(), self._weeks(week_count))

    def weekday_histogram(self) -> Dict[str, int]:
        return weekday_histogram(self.ledger)

    def get_analytics_data(self, week_count: Optional[int] = None) -> AnalyticsSnapshot:
        return build_snapshot(self.registry.list(), self.ledger, self.today(), self._weeks(week_count))

    def habit_heatmap(self, habit_id: str) -> List[HeatmapDay]:
        return habit_heatmap(self.registry.get(habit_id), self.ledger, self.today())

    def dashboard_summary(self) -> Dict[str, Any]:
        return dashboard_summary(self.registry.list(), self.ledger, self.today())

    # ===== СОСТОЯНИЕ =====

    def export_state(self) -> Dict[str, List[Dict[str, Any]]]:
        """Состояние в виде словаря простых типов"""
        return {
            "habits": [h.to_dict() for h in self.registry.list()],
            "checks": [r.to_dict() for r in self.ledger.all_records()],
        }

    def import_state(self, data: Mapping[str, Any]) -> None:
        """
        Заменить состояние данными из export_state.

        При любой ошибке текущее состояние не меняется.
        """
        try:
            if not isinstance(data, Mapping):
                raise ValidationError(f"Состояние должно быть словарем, получено {type(data).__name__}")
            habits = [self._habit_from_dict(h) for h in self._entries(data, "habits")]
            records = [self._record_from_dict(r) for r in self._entries(data, "checks")]
        except HabitTrackerError as e:
            logger.warning(f"⚠️ Импорт состояния отклонен: {e}")
            raise
        self._replace_state(habits, records)

    @staticmethod
    def _entries(data: Mapping[str, Any], key: str) -> List[Any]:
        entries = data.get(key, [])
        if not isinstance(entries, (list, tuple)):
            raise ValidationError(f"{key} должен быть списком")
        return list(entries)

    @staticmethod
    def _habit_from_dict(data: Any) -> Habit:
        if not isinstance(data, Mapping):
            raise ValidationError(f"Некорректные данные привычки: {data!r}")
        return Habit.from_dict(data)

    @staticmethod
    def _record_from_dict(data: Any) -> CheckRecord:
        try:
            return CheckRecord.from_dict(dict(data))
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Некорректные данные отметки: {e}")

    def _replace_state(self, habits: List[Habit], records: List[CheckRecord]) -> None:
        registry = HabitRegistry()
        ledger = CheckLedger()
        try:
            for habit in habits:
                unknown = [m for m in habit.badge_milestones if get_badge_definition(m) is None]
                if unknown:
                    raise ValidationError(f"Привычка {habit.habit_id}: бейджей {unknown} нет в каталоге")
                registry.add(habit)
            for record in records:
                if record.habit_id not in registry:
                    raise ValidationError(f"Отметка {record.check_id} ссылается на неизвестную привычку {record.habit_id}")
                ledger.insert(record)
        except ValidationError as e:
            logger.warning(f"⚠️ Состояние не загружено: {e}")
            raise

        self.registry = registry
        self.ledger = ledger
        logger.info(f"📂 Загружено состояние: {len(registry)} привычек, {len(ledger)} отметок")
        self._emit(EventType.STATE_LOADED, habits=len(registry), checks=len(ledger))

    def load_demo_data(self, rng: Optional[random.Random] = None, days: Optional[int] = None,
                       completion_probability: Optional[float] = None) -> None:
        """Заменить состояние демо-привычками со случайной историей"""
        demo = get_config().demo
        if rng is None and demo.seed is not None:
            rng = random.Random(demo.seed)
        habits, records = build_demo_state(
            self.now(),
            rng=rng,
            days=days or demo.days,
            completion_probability=demo.completion_probability if completion_probability is None else completion_probability
        )
        self._replace_state(habits, records)

# ===== ГЛОБАЛЬНЫЙ ЭКЗЕМПЛЯР =====

_global_habit_tracker: Optional[HabitTracker] = None

def get_habit_tracker() -> HabitTracker:
    """Получить глобальный экземпляр HabitTracker"""
    global _global_habit_tracker
    if _global_habit_tracker is None:
        _global_habit_tracker = HabitTracker()
    return _global_habit_tracker

def initialize_habit_tracker(clock: Optional[Clock] = None) -> HabitTracker:
    """Инициализация глобального HabitTracker"""
    global _global_habit_tracker
    _global_habit_tracker = HabitTracker(clock=clock)
    return _global_habit_tracker
