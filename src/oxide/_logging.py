"""Structured logging for oxide.

oxide only emits `debug` events (for exceptions captured by `safe`). Loggers
wrap stdlib loggers, so nothing is written until the application configures
logging, either through its own setup or through `configure_logging`.

Uses structlog's ProcessorFormatter to unify structlog and stdlib logging
output, so third-party libraries also emit structured logs once configured.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

__all__ = ['configure_logging', 'get_logger']

_ROOT_LOGGER_NAME = 'oxide'


def _get_shared_processors() -> list[Any]:
    """Get processors shared between structlog and stdlib foreign logs."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.stdlib.ExtraAdder(),
    ]


def _get_structlog_processors() -> list[Any]:
    """Get the full processor chain for structlog loggers."""
    return [
        structlog.stdlib.filter_by_level,
        *_get_shared_processors(),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _get_renderer(json_output: bool = True) -> Any:
    """Get the appropriate renderer based on output format."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    logger_name: str | None = None,
) -> None:
    """Configure structlog with ProcessorFormatter for unified output.

    Both structlog loggers and standard library loggers emit consistent
    structured logs to stderr afterwards.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON logs. If False, use colored console output.
        logger_name: Install the handler on this stdlib logger only, leaving the
            root logger and its handlers alone. None = the root logger.
    """
    structlog.configure(
        processors=_get_structlog_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    target = logging.getLogger(logger_name)
    target.handlers.clear()
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))
    if logger_name is not None:
        target.propagate = False


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger backed by the stdlib logger `name`.

    Args:
        name: Logger name. Defaults to the package logger "oxide".

    Returns:
        A structlog BoundLogger (lazy proxy) wrapping `logging.getLogger(name)`.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or _ROOT_LOGGER_NAME),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
