"""Per-icon transforms: recolor (+ optimize) and rasterize."""

from iconspine.transform.optimize import optimize, parse_svg
from iconspine.transform.rasterize import DEFAULT_RASTER_WIDTH, rasterize
from iconspine.transform.recolor import NO_FILL, recolor

__all__ = [
    "DEFAULT_RASTER_WIDTH",
    "NO_FILL",
    "optimize",
    "parse_svg",
    "rasterize",
    "recolor",
]
