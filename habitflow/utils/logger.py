import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logger(log_file: Optional[str] = "logs/habitflow.log", level: str = "INFO",
                 max_bytes: int = 10_000_000, backup_count: int = 5) -> logging.Logger:
    logger = logging.getLogger("habitflow")
    logger.setLevel(getattr(logging, level))
    formatter = logging.Formatter(LOG_FORMAT)

    # повторный вызов не должен дублировать обработчики
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        Path(log_file).parent.mkdir(exist_ok=True, parents=True)
        handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
