"""Output path scheme.

::

    svg-{tier}/{variant}/{category}/{friendly name}.svg
    png-{width}/{variant}/{category}/{friendly name}.png

Paths are relative to the output root; the sink resolves them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from iconspine.core.models import IconRecord, Variant


@dataclass(frozen=True)
class OutputLayout:
    vector_tier: int = 32
    raster_width: int = 1024

    @property
    def vector_dir(self) -> str:
        return f"svg-{self.vector_tier}"

    @property
    def raster_dir(self) -> str:
        return f"png-{self.raster_width}"

    def vector_path(self, record: IconRecord, variant: Variant) -> PurePosixPath:
        return PurePosixPath(self.vector_dir, variant.name, record.category, f"{record.friendly_name}.svg")

    def raster_path(self, record: IconRecord, variant: Variant) -> PurePosixPath:
        return PurePosixPath(self.raster_dir, variant.name, record.category, f"{record.friendly_name}.png")
