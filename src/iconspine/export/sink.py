"""Write and progress collaborators for the export driver.

The driver only talks to these protocols, so the CLI can plug in a rich
progress bar and tests can capture output in memory.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Protocol

from iconspine.core.errors import ExportWriteError
from iconspine.core.models import ProgressEvent


class Sink(Protocol):
    def write(self, relative_path: PurePosixPath, data: bytes | str) -> None: ...


class ProgressObserver(Protocol):
    def start(self, total: int) -> None: ...

    def advance(self, event: ProgressEvent) -> None: ...

    def finish(self) -> None: ...


class FileSink:
    """Writes artifacts under ``root``, creating parent directories."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.written: list[Path] = []

    def write(self, relative_path: PurePosixPath, data: bytes | str) -> None:
        target = self.root.joinpath(*relative_path.parts)
        payload = data.encode("utf-8") if isinstance(data, str) else data
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        except OSError as e:
            raise ExportWriteError(f"Cannot write {target}: {e}", cause=e).with_context(path=str(target)) from e
        self.written.append(target)


class MemorySink:
    """Keeps artifacts in a dict keyed by relative path."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}

    def write(self, relative_path: PurePosixPath, data: bytes | str) -> None:
        self.files[str(relative_path)] = data.encode("utf-8") if isinstance(data, str) else data


class NullObserver:
    def start(self, total: int) -> None:
        pass

    def advance(self, event: ProgressEvent) -> None:
        pass

    def finish(self) -> None:
        pass
