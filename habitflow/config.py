#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow v1.0 - Configuration
Централизованная конфигурация движка привычек с валидацией

Версия: 1.0.0
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class LoggingConfig:
    """Конфигурация логирования"""
    level: LogLevel = LogLevel.INFO
    to_file: bool = True
    log_dir: Path = Path("logs")
    max_bytes: int = 10_000_000
    backup_count: int = 5

    @property
    def log_file(self) -> Optional[str]:
        return str(self.log_dir / "habitflow.log") if self.to_file else None

@dataclass
class AnalyticsConfig:
    """Конфигурация аналитики"""
    weeks: int = 8

@dataclass
class DemoConfig:
    """Конфигурация демо-данных"""
    days: int = 30
    completion_probability: float = 0.7
    seed: Optional[int] = None

@dataclass
class ServerConfig:
    """Конфигурация веб-дашборда"""
    host: str = "0.0.0.0"
    port: int = 8000

class HabitFlowConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        self.logging = LoggingConfig(
            level=LogLevel(os.getenv('LOG_LEVEL', 'INFO').upper()),
            to_file=os.getenv('LOG_TO_FILE', 'true').lower() == 'true',
            log_dir=Path(os.getenv('LOG_DIR', 'logs')),
            max_bytes=int(os.getenv('LOG_MAX_BYTES', 10_000_000)),
            backup_count=int(os.getenv('LOG_BACKUP_COUNT', 5))
        )

        # Часовой пояс определяет, какой календарный день считается "сегодня"
        self.timezone = os.getenv('TIMEZONE', 'UTC')

        self.analytics = AnalyticsConfig(
            weeks=int(os.getenv('ANALYTICS_WEEKS', 8))
        )

        seed = os.getenv('DEMO_SEED')
        self.demo = DemoConfig(
            days=int(os.getenv('DEMO_DAYS', 30)),
            completion_probability=float(os.getenv('DEMO_COMPLETION_PROBABILITY', 0.7)),
            seed=int(seed) if seed else None
        )

        self.server = ServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', 8000))
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.timezone not in pytz.all_timezones_set:
            errors.append(f"TIMEZONE неизвестен: {self.timezone}")

        if self.analytics.weeks < 1:
            errors.append("ANALYTICS_WEEKS должен быть больше 0")

        if self.demo.days < 1:
            errors.append("DEMO_DAYS должен быть больше 0")

        if not 0.0 <= self.demo.completion_probability <= 1.0:
            errors.append("DEMO_COMPLETION_PROBABILITY должен быть от 0 до 1")

        if not 1 <= self.server.port <= 65535:
            errors.append(f"PORT вне диапазона: {self.server.port}")

        if errors:
            raise ValueError("Ошибки конфигурации: " + "; ".join(errors))

    def get_summary(self) -> dict:
        """Сводка конфигурации для логов и /health"""
        return {
            "environment": self.environment.value,
            "log_level": self.logging.level.value,
            "timezone": self.timezone,
            "analytics_weeks": self.analytics.weeks,
            "demo_days": self.demo.days,
        }

_config: Optional[HabitFlowConfig] = None

def get_config() -> HabitFlowConfig:
    """Получить глобальную конфигурацию (создается при первом обращении)"""
    global _config
    if _config is None:
        _config = HabitFlowConfig()
        logging.getLogger(__name__).debug(f"🔧 Конфигурация загружена: {_config.get_summary()}")
    return _config

def reset_config() -> None:
    """Сбросить кэшированную конфигурацию (перечитать окружение при следующем обращении)"""
    global _config
    _config = None
