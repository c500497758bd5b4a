"""Centralised logging for the trainer calendar.

Every module asks for a child of the ``trainer_calendar`` logger::

    from trainer_calendar.core.logging_config import get_logger
    logger = get_logger(__name__)

Console output is always on. When ``log_dir`` is configured, rotating files
are written there as well (one for everything, one for errors only).
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from trainer_calendar.core.config import get_settings

ROOT_LOGGER_NAME = "trainer_calendar"

MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(environment: str | None = None, log_dir: str | None = None) -> logging.Logger:
    """Configure the package logger once and return it."""
    settings = get_settings()
    environment = environment or settings.environment
    log_dir = settings.log_dir if log_dir is None else log_dir

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if root_logger.handlers:
        return root_logger

    root_logger.setLevel(settings.log_level.upper())
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if environment == "dev" else logging.INFO)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            directory / "trainer_calendar.log",
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        error_handler = RotatingFileHandler(
            directory / "trainer_calendar_errors.log",
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)
        root_logger.addHandler(error_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, configuring it on first use."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        setup_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
