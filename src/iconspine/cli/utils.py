"""
CLI utility helpers: consoles, settings loading, error exit and the progress bar.
"""

from __future__ import annotations

from typing import Any, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from iconspine.core.errors import ConfigError, IconSpineError
from iconspine.core.models import SIGNATURE_COLOR, ProgressEvent
from iconspine.core.settings import ExportSettings

console = Console()
err_console = Console(stderr=True)


def load_settings(**overrides: Any) -> ExportSettings:
    """Build settings from env/.env, with non-None CLI options on top."""
    try:
        return ExportSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}", cause=e) from e


def fail(error: IconSpineError) -> NoReturn:
    """Print a fatal error and exit non-zero."""
    err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {escape(error.message)}")
    context = error.context.to_dict()
    if context:
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        err_console.print(f"  [dim]{escape(details)}[/dim]")
    raise typer.Exit(code=1)


class RichProgressObserver:
    """Progress bar: ``█████░░░ | 42% | 840/2000 | ETA | Chat / Chat Bubble``."""

    def __init__(self, target: Console | None = None) -> None:
        self._progress = Progress(
            BarColumn(complete_style=SIGNATURE_COLOR, finished_style=SIGNATURE_COLOR),
            TaskProgressColumn(),
            MofNCompleteColumn(),
            TextColumn("icons"),
            TimeRemainingColumn(),
            TextColumn("[bold]{task.fields[label]}"),
            console=target or console,
        )
        self._task: TaskID | None = None

    def start(self, total: int) -> None:
        self._progress.start()
        self._task = self._progress.add_task("export", total=total, label="")

    def advance(self, event: ProgressEvent) -> None:
        if self._task is None:
            return
        self._progress.update(
            self._task,
            completed=event.current,
            label=escape(f"{event.category} / {event.friendly_name}"),
        )

    def finish(self) -> None:
        self._progress.stop()
