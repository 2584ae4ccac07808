# src/geojsonify/config/logging.py
from __future__ import annotations

import logging
import sys
from typing import Optional

from geojsonify.config.settings import get_settings

ROOT_LOGGER_NAME = "geojsonify"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO", logger_name: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler to the root logger for scripts and notebooks.

    The library itself never calls this; it only emits through get_logger().
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=handlers,
    )

    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger of `geojsonify`, level taken from GEOJSONIFY_LOG_LEVEL."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.level == logging.NOTSET:
        root.setLevel(getattr(logging, get_settings().log_level.upper(), logging.WARNING))

    return logging.getLogger(name)
