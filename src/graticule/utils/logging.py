"""Structured logging configuration using structlog.

Provides render context (active projection, frame counter) for tracing
grid recomputations and configurable output formats (JSON for production,
colored console for dev).
"""

import logging
import sys
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any, TextIO, cast

import structlog
from structlog.types import Processor

from graticule.config import settings

# Context variables for the frame being rendered
_projection: ContextVar[str | None] = ContextVar("projection", default=None)
_frame: ContextVar[int | None] = ContextVar("frame", default=None)

PACKAGE_LOGGER = "graticule"


def set_render_context(
    projection: str | None = None,
    frame: int | None = None,
) -> None:
    """Set render context for the current frame.

    Args:
        projection: Code of the active projection (e.g., "EPSG:3857")
        frame: Sequence number of the frame being rendered
    """
    if projection is not None:
        _projection.set(projection)
    if frame is not None:
        _frame.set(frame)


def clear_render_context() -> None:
    """Clear all render context variables."""
    _projection.set(None)
    _frame.set(None)


def _add_render_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add render context to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    projection = _projection.get()
    frame = _frame.get()

    if projection is not None:
        event_dict["projection"] = projection
    if frame is not None:
        event_dict["frame"] = frame

    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the ``graticule`` stdlib logger.

    Log lines go to stderr unless another stream is given, so grid output
    printed on stdout stays parseable. Calling again replaces the handler
    installed by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
        stream: Destination for log lines. Defaults to sys.stderr.
    """
    level = (level or settings.LOG_LEVEL).upper()
    log_format = log_format or settings.LOG_FORMAT
    if stream is None:
        stream = sys.stderr

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_render_context,
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # No ANSI codes when piped
        colors = stream.isatty()
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=colors),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
