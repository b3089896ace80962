"""
Export modules for rendered outlines.

Supported formats:
- SVG (.svg) - Vector output, one path per merged outline
- PNG (.png) - Raster preview
"""

from .svg_exporter import SVGExporter, make_path_data
from .png_exporter import PNGExporter

__all__ = ["SVGExporter", "PNGExporter", "make_path_data"]
