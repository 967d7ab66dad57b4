"""Pipeline interface shared by everything the CLI can run."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class PipelineStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """Outcome of one ``Pipeline.run()``.

    ``metrics`` holds counts on success and the error type and category on
    failure; ``error`` is the failure message.
    """

    status: PipelineStatus
    started_at: datetime
    completed_at: datetime | None = None
    error: str | None = None
    metrics: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status is PipelineStatus.COMPLETED

    @property
    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()


class Pipeline(ABC):
    """A named unit of work returning a :class:`PipelineResult` instead of raising domain errors."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def run(self) -> PipelineResult: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
