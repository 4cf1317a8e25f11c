"""structlog setup for applications embedding gdatalib."""

import logging

import structlog

from gdatalib.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure structlog to print leveled console output."""
    log_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level or settings.log_level}")

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )
