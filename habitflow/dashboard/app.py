#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow Web Dashboard - FastAPI Application
JSON API поверх движка привычек: привычки, отметки, аналитика

Версия: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends
import uvicorn

from habitflow import __version__
from habitflow.config import get_config
from habitflow.services.habit_service import HabitTracker
from habitflow.utils.logger import setup_logger
from .api import habits, stats
from .dependencies import init_tracker, get_tracker, guarded
from .schemas import HealthCheck

logger = logging.getLogger(__name__)

app_start_time = time.time()

def create_app(tracker: Optional[HabitTracker] = None) -> FastAPI:
    """Создать приложение; tracker передается явно в тестах"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        global app_start_time

        logger.info("🚀 Запуск HabitFlow Web Dashboard...")
        app_start_time = time.time()
        init_tracker(tracker)
        yield
        logger.info("🛑 HabitFlow Web Dashboard остановлен")

    app = FastAPI(
        title="HabitFlow Dashboard",
        version=__version__,
        lifespan=lifespan
    )

    app.include_router(habits.router)
    app.include_router(stats.router)

    @app.get("/health", response_model=HealthCheck)
    def health_check():
        return HealthCheck(
            status="healthy",
            service="habitflow-dashboard",
            version=__version__,
            uptime=time.time() - app_start_time,
            config=get_config().get_summary()
        )

    @app.post("/api/demo", status_code=204)
    def load_demo(tracker: HabitTracker = Depends(get_tracker)):
        """Заменить данные демо-привычками"""
        with guarded():
            tracker.load_demo_data()

    return app

def main():
    """Запуск дашборда через uvicorn"""
    config = get_config()
    setup_logger(
        config.logging.log_file,
        level=config.logging.level.value,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count
    )

    logger.info(f"🌐 Хост: {config.server.host}, порт: {config.server.port}")
    uvicorn.run(
        create_app(),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.value.lower(),
        server_header=False,
        date_header=False
    )

if __name__ == "__main__":
    main()
