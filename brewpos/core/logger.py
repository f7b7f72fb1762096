"""
Application logger
Configures the shared "brewpos" logger once: console output always,
a daily rotating file when settings.log_dir is set.
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config.settings import settings

LOGGER_NAME = "brewpos"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(log_dir: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure and return the application logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.log_level).upper())

    # Avoid duplicate handlers if called more than once
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    directory = log_dir or settings.log_dir
    if directory:
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            filename=path / "brewpos.log",
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logger initialized")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. get_logger("orders") -> brewpos.orders"""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
