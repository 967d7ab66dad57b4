"""
iconspine - publish an SVG icon set as a recolored SVG/PNG library.

- iconspine.core: errors, models, settings
- iconspine.registry: metadata indexes and the asset registry
- iconspine.transform: recolor, optimize, rasterize
- iconspine.export: path scheme, sinks and the export driver
- iconspine.pipeline: end-to-end pipeline
"""

__version__ = "0.1.0"
