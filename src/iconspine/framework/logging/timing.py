"""
Timed, span-linked log events around pipeline steps.

``log_step("registry.build")`` logs ``registry.build.start`` at DEBUG, then
``registry.build.end`` with ``duration_ms`` and any metrics the block added,
or ``registry.build.error`` (and re-raises) if the block fails. Nested steps
carry the enclosing step's span as ``parent_span_id``.
"""

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from iconspine.framework.logging.context import get_context, get_logger, new_span_id, push_context

F = TypeVar("F", bound=Callable[..., Any])

TIMING_LOGGER = "iconspine.timing"


@dataclass
class StepTimer:
    """Span of one step: timing plus the metrics reported on its end event."""

    step: str
    parent_span_id: str | None = None
    span_id: str = field(default_factory=new_span_id)
    metrics: dict[str, Any] = field(default_factory=dict)
    _started: float = field(default_factory=time.perf_counter, repr=False)
    _ended: float | None = field(default=None, repr=False)

    def add_metric(self, key: str, value: Any) -> "StepTimer":
        self.metrics[key] = value
        return self

    def stop(self) -> None:
        if self._ended is None:
            self._ended = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        end = self._ended if self._ended is not None else time.perf_counter()
        return (end - self._started) * 1000

    def span_fields(self) -> dict[str, Any]:
        result: dict[str, Any] = {"span_id": self.span_id}
        if self.parent_span_id:
            result["parent_span_id"] = self.parent_span_id
        return result

    def end_fields(self) -> dict[str, Any]:
        return {"duration_ms": round(self.duration_ms, 2), **self.span_fields(), **self.metrics}


@contextmanager
def log_step(event: str, log_start: bool = True, level: str = "info", **metrics: Any) -> Iterator[StepTimer]:
    """
    Log a step's start, end and duration.

    Usage:
        with log_step("export.run", total=len(registry)) as timer:
            ...
            timer.add_metric("exported", summary.exported)
    """
    log = get_logger(TIMING_LOGGER)
    timer = StepTimer(step=event, parent_span_id=get_context().span_id, metrics=dict(metrics))
    scope = push_context(step=event, span_id=timer.span_id, parent_span_id=timer.parent_span_id)

    if log_start:
        log.debug(f"{event}.start", **timer.span_fields(), **metrics)
    try:
        yield timer
    except Exception as e:
        timer.stop()
        log.error(
            f"{event}.error",
            **timer.end_fields(),
            status="error",
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise
    finally:
        timer.stop()
        scope.restore()

    getattr(log, level)(f"{event}.end", **timer.end_fields())


def log_timing(step: str | None = None, log_start: bool = True, level: str = "info") -> Callable[[F], F]:
    """Decorator form of :func:`log_step`; the step defaults to the function name."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with log_step(step or func.__name__, log_start=log_start, level=level):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
