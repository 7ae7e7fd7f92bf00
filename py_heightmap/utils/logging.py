"""Structured logging setup."""

import logging
import sys
from typing import Optional

import structlog

from ..config import settings


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Log level name, defaults to settings.log_level
        log_format: "json" or "plain", defaults to settings.log_format
    """
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    elif log_format == "plain":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        raise ValueError(f"Unknown log format: {log_format!r}")

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
