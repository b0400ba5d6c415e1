# core/events.py

"""
Уведомления об изменениях состояния для UI и других слоев.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Типы событий движка"""
    HABIT_CREATED = "habit_created"
    HABIT_UPDATED = "habit_updated"
    HABIT_DELETED = "habit_deleted"
    CHECK_ADDED = "check_added"
    CHECK_REMOVED = "check_removed"
    BADGES_UNLOCKED = "badges_unlocked"
    STATE_LOADED = "state_loaded"


@dataclass(frozen=True)
class HabitEvent:
    event_type: EventType
    habit_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[HabitEvent], None]


class EventBus:
    """Синхронная рассылка событий подписчикам в порядке подписки"""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписаться на события, возвращает функцию отписки"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def publish(self, event: HabitEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # ошибка подписчика не должна откатывать уже примененное изменение
                logger.exception(f"❌ Ошибка подписчика на {event.event_type.value}")
