"""
SVG Exporter

Writes merged outlines as an SVG document:
- A background rectangle covering the whole viewBox
- One <path> per outline, filled with the outline color,
  shaped by "M x0 y0 L x1 y1 ... Z"

Outlines are written in the order given; later paths paint over earlier ones.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Sequence, Union

from ..merger import Outline

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


def format_number(value: float, precision: int = 3) -> str:
    """Format a coordinate with at most `precision` decimals, no trailing zeros."""
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def make_path_data(points: Sequence, precision: int = 3) -> str:
    """
    Build SVG path data from a point list.

    Args:
        points: Sequence of (x, y) points
        precision: Decimals kept per coordinate

    Returns:
        "M x0 y0 L x1 y1 ... Z", or "" for an empty point list
    """
    if not points:
        return ""
    commands = []
    for i, (x, y) in enumerate(points):
        command = "M" if i == 0 else "L"
        commands.append(
            f"{command} {format_number(x, precision)} {format_number(y, precision)}"
        )
    commands.append("Z")
    return " ".join(commands)


class SVGExporter:
    """
    Export outlines to SVG.

    Supports:
    - In-memory serialization (to_string)
    - File export (export)
    """

    def __init__(self, background: str = "gray", precision: int = 3):
        """
        Initialize the exporter.

        Args:
            background: Fill of the background rectangle (None to omit it)
            precision: Decimals kept per coordinate
        """
        self.background = background
        self.precision = precision

    def build_tree(
        self,
        outlines: Iterable[Outline],
        width: float,
        height: float
    ) -> ET.Element:
        """
        Build the SVG element tree.

        Args:
            outlines: Outlines in draw order
            width, height: Surface dimensions (also the viewBox)

        Returns:
            Root <svg> element
        """
        svg = ET.Element("svg", {
            "xmlns": SVG_NAMESPACE,
            "width": format_number(width),
            "height": format_number(height),
            "viewBox": f"0 0 {format_number(width)} {format_number(height)}",
        })

        if self.background:
            ET.SubElement(svg, "rect", {
                "width": "100%",
                "height": "100%",
                "fill": self.background,
            })

        for outline in outlines:
            if not outline.points:
                continue
            ET.SubElement(svg, "path", {
                "id": f"chunk-{outline.id.replace('#', '')}",
                "d": make_path_data(outline.points, self.precision),
                "fill": outline.color,
            })

        return svg

    def to_string(
        self,
        outlines: Iterable[Outline],
        width: float,
        height: float
    ) -> str:
        """Serialize outlines to an SVG string."""
        return ET.tostring(self.build_tree(outlines, width, height), encoding="unicode")

    def export(
        self,
        outlines: List[Outline],
        output_path: Union[str, Path],
        width: float,
        height: float
    ):
        """
        Export outlines to an SVG file.

        Args:
            outlines: Outlines in draw order
            output_path: Output file path (.svg)
            width, height: Surface dimensions
        """
        output_path = Path(output_path)

        if len(outlines) == 0:
            raise ValueError("Cannot export an empty outline set")

        content = self.to_string(outlines, width, height)
        output_path.write_text(
            '<?xml version="1.0" encoding="UTF-8"?>\n' + content + "\n",
            encoding="utf-8"
        )
