"""
Structured logging for iconspine: structlog setup, per-icon context and step timing.

Usage:
    from iconspine.framework.logging import configure_logging, get_logger, log_step

    configure_logging(level="DEBUG", format="json")
    log = get_logger(__name__)

    with log_step("registry.build") as timer:
        ...
        timer.add_metric("records", len(registry))
"""

from iconspine.framework.logging.config import configure_logging, is_configured
from iconspine.framework.logging.context import (
    LogContext,
    bind_context,
    clear_context,
    get_context,
    get_logger,
    push_context,
)
from iconspine.framework.logging.timing import StepTimer, log_step, log_timing

__all__ = [
    # Configuration
    "configure_logging",
    "is_configured",
    # Context
    "LogContext",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "push_context",
    # Timing
    "StepTimer",
    "log_step",
    "log_timing",
]
