"""Logging infrastructure for the kernel selector.

Components receive a LoggerProtocol through their constructor and bind a
``component`` field. Code without an injected logger falls back to the
context-bound logger from get_current_logger().

Usage:
    from kernel_selector.logging import configure_logging, get_component_logger

    configure_logging("DEBUG", json_output=False)
    logger = get_component_logger("spec_registry")
    logger.info("kernelspecs_loaded", count=3)
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

from kernel_selector.protocols import LoggerProtocol

# Module state
_CONFIGURED = False

_current_logger: ContextVar[Optional[LoggerProtocol]] = ContextVar(
    "current_logger",
    default=None
)


class Logger:
    """LoggerProtocol implementation backed by structlog."""

    def __init__(
        self,
        base_logger: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize logger.

        Args:
            base_logger: Underlying structlog logger (created if None)
            context: Bound context fields
        """
        self._logger = base_logger or structlog.get_logger()
        self._context = context or {}

        if self._context:
            self._logger = self._logger.bind(**self._context)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._logger.exception(msg, **kwargs)

    def bind(self, **kwargs: Any) -> "Logger":
        """Create child logger with additional context."""
        new_context = {**self._context, **kwargs}
        return Logger(
            base_logger=structlog.get_logger(),
            context=new_context,
        )


def configure_logging(
    level: str = "INFO",
    *,
    json_output: bool = True,
) -> None:
    """Configure stdlib logging and structlog.

    Call once at application startup; later calls are ignored.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, render JSON lines; otherwise console format
    """
    global _CONFIGURED

    if _CONFIGURED:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
    )

    # Silence noisy libraries
    for noisy in ["httpx", "httpcore"]:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    if json_output:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _CONFIGURED = True


def create_logger(component: str, **context: Any) -> LoggerProtocol:
    """Create a logger for dependency injection."""
    return Logger(context={"component": component, **context})


def get_current_logger() -> LoggerProtocol:
    """Get the context-bound logger, or a default one."""
    logger = _current_logger.get()
    if logger is None:
        return Logger()
    return logger


def set_current_logger(logger: LoggerProtocol) -> None:
    _current_logger.set(logger)


def get_component_logger(
    component: str,
    logger: Optional[LoggerProtocol] = None,
) -> LoggerProtocol:
    """Get a logger bound to a component name.

    This is the canonical way to initialize a logger in a component.

    Args:
        component: Component name (e.g., "spec_registry")
        logger: Optional injected logger. If None, uses context logger.

    Returns:
        LoggerProtocol bound to the component name
    """
    base_logger = logger or get_current_logger()
    return base_logger.bind(component=component)


__all__ = [
    "configure_logging",
    "create_logger",
    "get_component_logger",
    "get_current_logger",
    "set_current_logger",
    "Logger",
]
