"""Structured logging setup.

All devspace log output goes through structlog to stderr.  The level
threshold is adjusted once per invocation from the global ``--silent`` /
``--debug`` flags by swapping in a filtering bound logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _stderr_logger_factory(*_args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per call so redirected streams are honoured.
    return structlog.PrintLogger(sys.stderr)


def configure_logging(level: int = logging.INFO) -> None:
    """Install the devspace processor chain."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )


def set_level(level: int) -> None:
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


def ensure_configured() -> None:
    """Configure logging unless the application or a test already did."""
    if not structlog.is_configured():
        configure_logging()
