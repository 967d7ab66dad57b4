"""
Per-run and per-icon logging context.

The export attaches the run id, the icon being processed, the variant being
produced and the current timing span to every log entry through
``add_context_processor``, without threading them through each call.
The context lives in a ``ContextVar``, so every export worker thread starts
empty and never sees another worker's icon.
"""

import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass, fields, replace
from typing import Any

import structlog


def new_span_id() -> str:
    return uuid.uuid4().hex[:8]


@dataclass(frozen=True)
class LogContext:
    """Fields merged into every log entry; ``None`` fields are omitted."""

    run_id: str | None = None
    identifier: str | None = None
    variant: str | None = None
    step: str | None = None
    span_id: str | None = None
    parent_span_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    def merge(self, **values: Any) -> "LogContext":
        """Copy with the non-None ``values`` applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


_EMPTY = LogContext()
_current: ContextVar[LogContext] = ContextVar("iconspine_log_context", default=_EMPTY)


def get_context() -> LogContext:
    return _current.get()


def bind_context(**values: Any) -> LogContext:
    """Merge ``values`` into the current context for the rest of this thread."""
    ctx = _current.get().merge(**values)
    _current.set(ctx)
    return ctx


def clear_context() -> None:
    _current.set(_EMPTY)


class ScopedContext:
    """Handle returned by :func:`push_context`; ``restore()`` undoes the push."""

    def __init__(self, token: Token[LogContext]) -> None:
        self._token = token

    def restore(self) -> None:
        _current.reset(self._token)


def push_context(**values: Any) -> ScopedContext:
    """
    Merge ``values`` for a limited scope.

    Usage:
        scope = push_context(identifier="chat--bubble")
        try:
            render_icon(record)
        finally:
            scope.restore()
    """
    return ScopedContext(_current.set(_current.get().merge(**values)))


def add_context_processor(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: add context fields the call did not set explicitly."""
    for key, value in get_context().to_dict().items():
        event_dict.setdefault(key, value)
    return event_dict


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)
