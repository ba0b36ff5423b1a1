from __future__ import annotations
import logging
import os
import sys
from typing import Optional, TextIO

import structlog

LEVEL_ENV_VAR = "STATECTL_LOG_LEVEL"
DEBUG_ENV_VAR = "STATECTL_DEBUG"


def _env_level() -> Optional[int]:
    value = (os.getenv(LEVEL_ENV_VAR) or "").strip()
    if value:
        if value.isdigit():
            return int(value)
        level = logging.getLevelName(value.upper())
        if isinstance(level, int):
            return level
    if (os.getenv(DEBUG_ENV_VAR) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def configure_logging(debug: bool = False, json: bool = True, stream: Optional[TextIO] = None, cache: bool = True) -> int:
    """
    Configure structlog (and stdlib logging underneath). Returns the effective level.

    Environment overrides:
      - STATECTL_LOG_LEVEL: explicit level name or number
      - STATECTL_DEBUG: truthy -> DEBUG
    """
    level = _env_level() or (logging.DEBUG if debug else logging.INFO)
    timestamper = structlog.processors.TimeStamper(fmt="iso")
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=cache,
    )

    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=level)
    return level
