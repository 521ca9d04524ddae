import logging
import sys
from typing import Any

import structlog

from poised.config import LoggingConfig


def configure_logging(settings: LoggingConfig | None = None) -> None:
    """Configure structured logging for the application.

    Logs go to stderr; stdout carries the interactive prompts and tables.
    """
    settings = settings or LoggingConfig()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.json_logs:
        processors = shared_processors + [
            structlog.processors.JSONRenderer()
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False)
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if settings.log_file is not None and settings.log_file.parent.exists():
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=settings.level.upper(),
        force=True,
    )
