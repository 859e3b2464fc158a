"""
Structured Logging with structlog

Events are snake_case names with keyword context, e.g.
``logger.warning("fragment_unavailable", path=...)``.

The bzlmod packages are libraries and never configure logging on import.
Until the host process calls ``configure_logging`` (or ``setup_logging``),
structlog's default configuration applies: every event, debug included, is
printed to stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import structlog
from structlog.contextvars import merge_contextvars

if TYPE_CHECKING:
    from bzlmod_shared.infra.config.settings import Settings


def setup_logging(
    level: str = "INFO",
    format: str = "console",  # "json" or "console"
    include_caller: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """
    Route structlog through stdlib logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for machines, "console" for humans)
        include_caller: Include caller information (file, line, function)
        stream: Destination of the root handler (default: stderr, keeping
            stdout free for tool output)
    """
    stream = stream or sys.stderr
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        *_renderers(format, stream),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _renderers(format: str, stream: IO[str]) -> list[Any]:
    if format == "json":
        return [structlog.processors.EventRenamer("message"), structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=stream.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(),
        )
    ]


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the observability group of the given (or global) settings."""
    if settings is None:
        from bzlmod_shared.infra.config.settings import settings as global_settings

        settings = global_settings

    observability = settings.observability
    setup_logging(
        level=observability.log_level,
        format=observability.log_format,
        include_caller=observability.include_caller,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    message: str,
    error: Exception | None = None,
    **extra: Any,
) -> None:
    """
    Log an error event with the exception's type and message attached.

    Args:
        logger: Logger instance
        message: Event name
        error: Exception object
        **extra: Additional context
    """
    if error is not None:
        extra.update(error_type=type(error).__name__, error_message=str(error))
    logger.error(message, **extra)
