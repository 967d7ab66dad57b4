"""PNG rendering of SVG markup via CairoSVG.

Only the output width is passed to the renderer, so the height follows the
document's declared aspect ratio (``height * width_px / width``).
"""

from __future__ import annotations

import cairosvg

from iconspine.core.errors import RenderFailure
from iconspine.transform.optimize import parse_svg

DEFAULT_RASTER_WIDTH = 1024


def rasterize(markup: str, width: int = DEFAULT_RASTER_WIDTH) -> bytes:
    """Render ``markup`` to RGBA PNG bytes, ``width`` pixels wide.

    Raises:
        ValueError: ``width`` is not positive.
        MalformedAsset: the markup cannot be parsed.
        RenderFailure: the renderer failed on well-formed markup.
    """
    if width <= 0:
        raise ValueError(f"Raster width must be positive, got {width}")

    parse_svg(markup)

    try:
        png = cairosvg.svg2png(bytestring=markup.encode("utf-8"), output_width=width)
    except Exception as e:  # noqa: BLE001 - renderer raises assorted types
        raise RenderFailure(f"Rendering failed: {e}", cause=e) from e

    if not png:
        raise RenderFailure("Renderer returned no data")
    return png
