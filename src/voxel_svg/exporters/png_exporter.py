"""
PNG Preview Exporter

Rasterizes outlines with Pillow for quick previews where an SVG viewer is
not at hand. Polygons are drawn on a supersampled canvas and downsampled
with a Lanczos filter for smooth edges.
"""

from pathlib import Path
from typing import Iterable, List, Union

from PIL import Image, ImageDraw

from ..merger import Outline


class PNGExporter:
    """Export outlines to a PNG raster preview."""

    def __init__(self, background: str = "gray", supersample: int = 2):
        """
        Initialize the exporter.

        Args:
            background: Canvas color (any Pillow color string)
            supersample: Drawing scale before downsampling (1 disables it)
        """
        if supersample < 1:
            raise ValueError(f"supersample must be >= 1, got {supersample}")
        self.background = background
        self.supersample = supersample

    def render(
        self,
        outlines: Iterable[Outline],
        width: float,
        height: float
    ) -> Image.Image:
        """
        Rasterize outlines.

        Args:
            outlines: Outlines in draw order
            width, height: Surface dimensions in pixels

        Returns:
            RGB image of size (width, height)
        """
        size = (int(round(width)), int(round(height)))
        scale = self.supersample
        canvas = Image.new(
            "RGB", (size[0] * scale, size[1] * scale), self.background
        )
        draw = ImageDraw.Draw(canvas)

        for outline in outlines:
            if len(outline.points) < 3:
                continue
            draw.polygon(
                [(x * scale, y * scale) for x, y in outline.points],
                fill=outline.color
            )

        if scale > 1:
            canvas = canvas.resize(size, Image.Resampling.LANCZOS)
        return canvas

    def export(
        self,
        outlines: List[Outline],
        output_path: Union[str, Path],
        width: float,
        height: float
    ):
        """
        Export outlines to a PNG file.

        Args:
            outlines: Outlines in draw order
            output_path: Output file path (.png)
            width, height: Surface dimensions in pixels
        """
        if len(outlines) == 0:
            raise ValueError("Cannot export an empty outline set")

        self.render(outlines, width, height).save(Path(output_path), format="PNG")
