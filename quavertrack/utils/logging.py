"""Logging helpers."""
from __future__ import annotations

import logging
import os
from logging import Logger

LOG_FORMAT = "%(asctime)s | %(levelname)8s | %(name)s | %(message)s"


def _level_from_env(default: int) -> int:
    raw = os.getenv("QUAVERTRACK_LOG_LEVEL")
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def configure_logging(level: int | None = None) -> None:
    logging.basicConfig(
        level=level if level is not None else _level_from_env(logging.INFO),
        format=LOG_FORMAT,
    )


def get_logger(name: str) -> Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)
