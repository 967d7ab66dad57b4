"""
structlog setup for the CLI.

Level and format come from the arguments, falling back to
``ICONSPINE_LOG_LEVEL`` (default INFO) and ``ICONSPINE_LOG_FORMAT``
(``console`` or ``json``, default console). Everything is written to stderr,
leaving stdout to the progress bar and ``inspect --json``.
"""

import logging
import os
import sys

import structlog
from structlog.types import Processor

from iconspine.framework.logging.context import add_context_processor

_configured = False


def _processors(log_format: str) -> list[Processor]:
    chain: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_context_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return chain


def configure_logging(level: str | None = None, format: str | None = None, force: bool = False) -> None:
    """Configure structlog and the stdlib root logger once (again with ``force``)."""
    global _configured
    if _configured and not force:
        return

    log_level = getattr(logging, (level or os.environ.get("ICONSPINE_LOG_LEVEL", "INFO")).upper())
    log_format = (format or os.environ.get("ICONSPINE_LOG_FORMAT", "console")).lower()

    structlog.configure(
        processors=_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level, force=True)
    logging.getLogger("iconspine").setLevel(log_level)

    _configured = True


def is_configured() -> bool:
    return _configured
