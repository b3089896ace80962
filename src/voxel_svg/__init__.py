"""
SVG Voxel Engine
================

Isometric voxel scenes rendered as minimal flat-shaded SVG outlines.

This package turns a sparse 3D voxel grid into an isometric SVG picture in
which every connected region of same-colored visible faces is drawn as a
single closed path, instead of one path per triangle.

Key Features:
- Exact isometric projection of 1-indexed voxel grids
- Shell-based occlusion culling (only the closest voxel per screen cell survives)
- Integer adjacency grid, no floating point comparisons
- Edge cancellation and boundary walking into one outline per region
- Light / shadow face shading with hue rotation
- Export to SVG, with PNG raster previews

Example Usage:
    from voxel_svg import VoxelEngine

    engine = VoxelEngine(width=500, height=500, size=8)
    engine.add_full_slab(1, "#00FF00")
    engine.add_box((3, 3, 2), "#FF0000", x_size=2, y_size=2, z_size=2)
    engine.render()
    engine.export_svg("scene.svg")
"""

__version__ = "1.0.0"
__author__ = "SVG Voxel Engine Team"

from .engine import VoxelEngine
from .projection import IsometricProjection
from .voxels import Position, Voxel, VoxelStore
from .faces import Orientation, TrianglePath
from .shell import Shell, ShellKey, ShellKeyResolver
from .merger import Outline, OutlineMerger
from .color import ColorShader, LightConfig, lighten_color, darken_color, hue_shift

__all__ = [
    "VoxelEngine",
    "IsometricProjection",
    "Position",
    "Voxel",
    "VoxelStore",
    "Orientation",
    "TrianglePath",
    "Shell",
    "ShellKey",
    "ShellKeyResolver",
    "Outline",
    "OutlineMerger",
    "ColorShader",
    "LightConfig",
    "lighten_color",
    "darken_color",
    "hue_shift",
]
