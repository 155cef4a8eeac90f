"""
structlog setup for ormdemo.

Events are printed one per line: JSON with ECS field names when stdout is
not a TTY (or ``LOG_FORMAT=json``), a coloured console line otherwise.

Examples:
    >>> from ormdemo.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.info("demo.insert.done", last_insert_id="...")
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog._config import BoundLoggerLazyProxy
from structlog.types import EventDict, Processor, WrappedLogger


def _ecs_fields(service: str) -> Processor:
    """Rename structlog keys to their ECS equivalents and stamp the service."""

    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service.name", service)
        if "level" in event_dict:
            event_dict["log.level"] = event_dict.pop("level")
        if "logger" in event_dict:
            event_dict["log.logger"] = event_dict.pop("logger")
        return event_dict

    return processor


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "ormdemo",
) -> None:
    """Configure structlog (and stdlib logging for SQLAlchemy / Alembic).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for JSON unless stdout is a tty
        service: Value of ``service.name`` in JSON output
    """
    if json_format is None:
        json_format = not sys.stdout.isatty()
    log_level = getattr(logging, level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if json_format:
        processors += [
            structlog.processors.TimeStamper(fmt="iso", key="@timestamp"),
            _ecs_fields(service),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    # PrintLogger resolves sys.stdout when created; loggers are not cached so
    # a swapped stdout (CliRunner, capsys) is picked up on the next event.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(levelname)s [%(name)s] %(message)s", level=log_level)


def get_logger(name: str | None = None) -> Any:
    """structlog logger carrying *name* as ``logger`` (``log.logger`` in JSON)."""
    if name is None:
        return structlog.get_logger()
    # structlog.get_logger(logger=...) collides with wrap_logger's ``logger``
    # parameter, so build the same lazy proxy with the initial value directly.
    return BoundLoggerLazyProxy(None, initial_values={"logger": name})


class LogContext:
    """Bind keys to every event logged inside the block.

    Example:
        async with LogContext(verb="insert"):
            logger.info("demo.insert.done")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self._context)

    async def __aenter__(self) -> LogContext:
        return self.__enter__()

    async def __aexit__(self, *args: Any) -> None:
        self.__exit__(*args)


__all__ = ["configure_logging", "get_logger", "LogContext"]
