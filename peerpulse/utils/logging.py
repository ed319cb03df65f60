# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging for the aggregation engine.

Two kinds of loggers write through one renderer:
- structlog loggers from ``get_logger`` (event names plus key/value fields)
- standard library loggers under ``peerpulse`` (the domain modules use
  ``logging.getLogger(__name__)`` with %-style messages)

Output is colored console text in development or with debug enabled,
and one JSON object per line everywhere else.

Example:
    >>> from peerpulse.core.config import get_settings
    >>> from peerpulse.utils.logging import bind_context, get_logger, setup_logging
    >>> setup_logging(get_settings())
    >>> bind_context(view="admin-dashboard")
    >>> get_logger(__name__).info("refresh_published", token=3)
"""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from peerpulse.core.config.settings import Settings

ENGINE_LOGGER = "peerpulse"


def _renderer(settings: "Settings") -> list[Processor]:
    if settings.is_development or settings.debug:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def setup_logging(settings: "Settings", stream: TextIO | None = None) -> None:
    """Configure structlog on top of the standard library logging tree.

    structlog loggers and plain ``logging`` loggers under ``peerpulse``
    share one handler and one renderer. Calling this again replaces the
    previous configuration.

    Args:
        settings: Settings providing log_level, debug and environment.
        stream: Output stream (defaults to stdout).
    """
    stream = stream or sys.stdout
    log_level = logging.getLevelName(settings.log_level)

    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderer(settings),
            ],
        )
    )

    engine = logging.getLogger(ENGINE_LOGGER)
    engine.handlers = [handler]
    engine.setLevel(log_level)
    engine.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module name.

    Args:
        name: Usually __name__ of the calling module. Names under
            ``peerpulse`` are rendered by the engine handler.

    Returns:
        A lazy structlog logger backed by the stdlib logger of that name.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log calls in this context.

    Args:
        **kwargs: Key-value pairs to bind to the logging context.

    Example:
        >>> bind_context(view="admin-dashboard", token=7)
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
