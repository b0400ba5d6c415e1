#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Dashboard Dependencies
Провайдеры зависимостей для FastAPI приложения

Версия: 1.0.0
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import HTTPException

from habitflow.core.models import NotFoundError, ValidationError
from habitflow.services.habit_service import HabitTracker, get_habit_tracker

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ ПЕРЕМЕННЫЕ =====

# toggle_check - это чтение-изменение-запись, все обращения к движку
# из обработчиков идут под одной блокировкой
_tracker_lock = threading.RLock()

_tracker: Optional[HabitTracker] = None

# ===== ИНИЦИАЛИЗАЦИЯ =====

def init_tracker(tracker: Optional[HabitTracker] = None) -> HabitTracker:
    """Инициализация движка для дашборда"""
    global _tracker

    if tracker is not None or _tracker is None:
        logger.info("🔄 Инициализация HabitTracker для дашборда...")
        _tracker = tracker or get_habit_tracker()
        logger.info("✅ HabitTracker готов")

    return _tracker

def reset_tracker() -> None:
    global _tracker
    _tracker = None

# ===== ПРОВАЙДЕРЫ ЗАВИСИМОСТЕЙ =====

def get_tracker() -> HabitTracker:
    """Получить экземпляр HabitTracker"""
    if _tracker is None:
        return init_tracker()
    return _tracker

@contextmanager
def guarded() -> Iterator[None]:
    """
    Блокировка движка и перевод доменных ошибок в HTTP.

    Обработчики синхронные и держат блокировку в своем потоке.
    """
    with _tracker_lock:
        try:
            yield
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
