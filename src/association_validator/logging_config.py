"""Structured logging for the Association Validator.

Every log line carries the application name and version from Settings, plus
the CLI command and API mode of the current run once bind_run_context has
been called. Production renders one JSON object per line; anything else gets
the console renderer. Output goes to stderr so stdout stays free for the CLI's
JSON summary.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from association_validator.config import Settings

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


class AppContext:
    """Processor stamping every event with the application identity."""

    def __init__(self, settings: Settings):
        self.app = settings.APP_NAME
        self.version = settings.APP_VERSION
        self.environment = settings.ENVIRONMENT

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", self.app)
        event_dict.setdefault("version", self.version)
        event_dict.setdefault("environment", self.environment)
        return event_dict


def bind_run_context(command: str, mode: str) -> None:
    """Attach the CLI command and API mode to every subsequent log line."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, mode=mode)


def _renderer(settings: Settings, stream: TextIO) -> Processor:
    if settings.ENVIRONMENT.lower() == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(settings: Settings, stream: Optional[TextIO] = None) -> None:
    """Configure structlog and the stdlib root logger from settings.

    Args:
        settings: Source of LOG_LEVEL, ENVIRONMENT and the app identity
        stream: Destination for log lines (defaults to the current sys.stderr)
    """
    stream = stream or sys.stderr
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        AppContext(settings),
    ]
    renderer = _renderer(settings, stream)
    if isinstance(renderer, structlog.processors.JSONRenderer):
        # ConsoleRenderer formats exc_info itself
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
