from __future__ import annotations

import logging
import os
from typing import Literal

ALLOWED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__package__)


def set_log_level(level: int | Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]) -> None:
    if not isinstance(level, (int, str)):
        msg = f"log_level must be an int or a str, got {type(level).__name__}"
        raise TypeError(msg)
    if isinstance(level, str) and level not in ALLOWED_LOG_LEVELS:
        msg = f"string log_level must be one of {ALLOWED_LOG_LEVELS}, got {level!r}"
        raise ValueError(msg)

    logger.setLevel(level)


if not logger.handlers:
    formatter = logging.Formatter(
        "[%(asctime)s] [%(name)s::%(threadName)s] [%(levelname)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    level = os.environ.get("THENABLE_LOG_LEVEL", "WARNING")
    set_log_level(int(level) if level.isdigit() else level.upper())  # type: ignore[arg-type]
    logger.propagate = False
