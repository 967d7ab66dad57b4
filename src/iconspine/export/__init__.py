"""Export of the icon registry into the published library layout."""

from iconspine.export.driver import IconArtifacts, export_registry, render_icon
from iconspine.export.paths import OutputLayout
from iconspine.export.sink import FileSink, MemorySink, NullObserver, ProgressObserver, Sink

__all__ = [
    "FileSink",
    "IconArtifacts",
    "MemorySink",
    "NullObserver",
    "OutputLayout",
    "ProgressObserver",
    "Sink",
    "export_registry",
    "render_icon",
]
