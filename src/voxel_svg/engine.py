"""
Main VoxelEngine Class

This is the primary interface of the rendering pipeline.
It orchestrates:
1. Voxel storage (insert / delete voxels and boxes)
2. Projection and face construction
3. Undershell erasure (occlusion culling)
4. Chunking of same-colored adjacent triangles
5. Outline merging
6. Export to SVG / PNG

Example Usage:
    engine = VoxelEngine(width=500, height=500, size=8)
    engine.add_full_slab(1, "#00FF00")
    engine.add_box((3, 3, 2), "#FF0000", x_size=2, y_size=2, z_size=2)
    engine.render()
    engine.export_svg("scene.svg")
"""

import logging
import time
from pathlib import Path
from typing import Dict, List, Optional, Union

from .adjacency import AdjacencyIndexer
from .chunking import build_chunks
from .color import ColorShader, LightConfig
from .exporters import PNGExporter, SVGExporter
from .faces import build_triangle_paths
from .merger import Outline, OutlineMerger, compare_path_stats
from .projection import IsometricProjection
from .shell import ShellKeyResolver
from .visibility import erase_undershell
from .voxels import Voxel, VoxelStore, box_coordinates

logger = logging.getLogger(__name__)


class VoxelEngine:
    """
    High-level interface for isometric voxel scenes.

    A scene holds a sparse voxel set and renders it into merged outlines,
    one per connected region of same-colored visible faces.

    Attributes:
        projection: Screen projection of the scene
        shader: Face color shader
        store: Voxel storage
        outlines: Outlines of the last render pass
    """

    def __init__(
        self,
        width: float = 500,
        height: float = 500,
        size: int = 16,
        depth_ratio: float = 0.5,
        light_cfg: Optional[Union[LightConfig, Dict]] = None,
        voxel_offset: float = 1,
        target_id: Optional[str] = None
    ):
        """
        Initialize the engine.

        Args:
            width: Width of the output surface
            height: Height of the output surface
            size: Grid edge length in voxels
            depth_ratio: Display ratio voxel y size / voxel x size
            light_cfg: LightConfig or mapping of light options
            voxel_offset: Margin around the grid on the x axis, in voxels
            target_id: Identifier of the host surface; kept for callers
                attaching the SVG, not used by the pipeline
        """
        if isinstance(light_cfg, dict):
            light_cfg = LightConfig.from_dict(light_cfg)

        self.width = width
        self.height = height
        self.size = size
        self.target_id = target_id

        self.projection = IsometricProjection(
            width=width,
            height=height,
            size=size,
            depth_ratio=depth_ratio,
            voxel_offset=voxel_offset
        )
        self.shader = ColorShader(light_cfg)
        self.store = VoxelStore(size)

        self._outlines: List[Outline] = []
        self._stats: Dict = {}
        self._dirty = True

    # ------------------------------------------------------------------
    # Voxel mutation
    # ------------------------------------------------------------------

    def add_voxel(self, position, color: str = "#FF0000") -> Optional[Voxel]:
        """
        Insert a voxel, replacing any voxel at the same position.

        Args:
            position: (x, y, z), 1-indexed
            color: Hex color

        Returns:
            The stored Voxel, or None if out of bounds
        """
        voxel = self.store.set_voxel(position, color)
        self._invalidate_caches()
        return voxel

    def delete_voxel(self, position):
        """Delete the voxel at a position (no-op when empty)."""
        self.store.clear_voxel(position)
        self._invalidate_caches()

    def add_box(
        self,
        position,
        color: str = "#FF0000",
        x_size: int = 1,
        y_size: int = 1,
        z_size: int = 1
    ) -> List[Voxel]:
        """
        Insert a box of voxels.

        Args:
            position: Box corner with the smallest coordinates
            color: Hex color
            x_size, y_size, z_size: Box extent

        Returns:
            The stored voxels (out-of-bounds cells are skipped)
        """
        voxels = []
        for point in box_coordinates(position, x_size, y_size, z_size):
            voxel = self.add_voxel(point, color)
            if voxel is not None:
                voxels.append(voxel)
        return voxels

    def delete_box(
        self,
        position,
        x_size: int = 1,
        y_size: int = 1,
        z_size: int = 1
    ):
        """Delete every voxel of a box."""
        for point in box_coordinates(position, x_size, y_size, z_size):
            self.delete_voxel(point)

    def add_full_slab(
        self,
        stage: int = 1,
        color: str = "#00FF00",
        offset: int = 0
    ) -> List[Voxel]:
        """
        Fill a whole stage, leaving `offset` free cells on every side.

        Args:
            stage: Height layer to fill
            color: Hex color
            offset: Inset from the grid border

        Returns:
            The stored voxels
        """
        return self.add_box(
            (1 + offset, 1 + offset, stage),
            color,
            x_size=self.size - 2 * offset,
            y_size=self.size - 2 * offset,
            z_size=1
        )

    def clear(self):
        """Remove every voxel."""
        self.store.clear()
        self._invalidate_caches()

    def get_voxel_at(self, position) -> Optional[Voxel]:
        """Get the voxel at a position, or None."""
        return self.store.get_voxel(position)

    def _invalidate_caches(self):
        # max z is invalidated by the store itself
        self.shader.clear_cache()
        self._dirty = True

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> List[Outline]:
        """
        Run one full render pass.

        Returns:
            Outlines sorted for drawing; they replace the previous set
        """
        start_time = time.time()
        max_z = self.store.max_z

        resolver = ShellKeyResolver(self.size, max_z)
        indexer = AdjacencyIndexer(self.size, max_z)

        triangles = build_triangle_paths(
            self.store.voxels_by_depth(), self.projection, self.shader, resolver
        )
        visible = erase_undershell(triangles, self.store)
        indexed = indexer.index_triangles(visible, resolver)
        chunks = build_chunks(indexed, indexer)

        merger = OutlineMerger()
        self._outlines = merger.merge_chunks(chunks)
        self._dirty = False

        self._stats = compare_path_stats(len(visible), self._outlines)
        self._stats.update({
            "voxel_count": self.store.count_voxels(),
            "triangle_count": len(triangles),
            "visible_triangle_count": len(visible),
            "chunk_count": len(chunks),
            "max_z": max_z,
        })

        logger.debug(
            "Rendered %d voxels: %d triangles, %d visible, %d chunks, %d outlines in %.3fs",
            self.store.count_voxels(), len(triangles), len(visible),
            len(chunks), len(self._outlines), time.time() - start_time
        )
        return self._outlines

    def to_svg(self, background: str = "gray") -> str:
        """
        Serialize the current outlines to an SVG string.

        Renders first if the scene changed since the last pass.
        """
        if self._dirty:
            self.render()
        return SVGExporter(background=background).to_string(
            self._outlines, self.width, self.height
        )

    def export_svg(self, output_path: Union[str, Path], background: str = "gray"):
        """
        Export to SVG.

        Args:
            output_path: Output file path
            background: Background rectangle fill
        """
        if self._dirty:
            self.render()
        exporter = SVGExporter(background=background)
        exporter.export(self._outlines, output_path, self.width, self.height)

    def export_png(
        self,
        output_path: Union[str, Path],
        background: str = "gray",
        supersample: int = 2
    ):
        """
        Export a raster preview to PNG.

        Args:
            output_path: Output file path
            background: Canvas color
            supersample: Drawing scale before downsampling
        """
        if self._dirty:
            self.render()
        exporter = PNGExporter(background=background, supersample=supersample)
        exporter.export(self._outlines, output_path, self.width, self.height)

    def export_all(
        self,
        base_path: Union[str, Path],
        formats: Optional[list] = None
    ):
        """
        Export to multiple formats at once.

        Args:
            base_path: Base file path (without extension)
            formats: List of formats to export (default: svg)
        """
        base_path = Path(base_path)
        formats = formats or ["svg"]

        if "svg" in formats:
            self.export_svg(base_path.with_suffix(".svg"))

        if "png" in formats:
            self.export_png(base_path.with_suffix(".png"))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def outlines(self) -> List[Outline]:
        """Outlines of the last render pass."""
        return self._outlines

    @property
    def max_z(self) -> int:
        """Highest stage in the scene, 0 when empty."""
        return self.store.max_z

    @property
    def voxel_count(self) -> int:
        """Number of stored voxels."""
        return self.store.count_voxels()

    @property
    def viewbox(self) -> str:
        """SVG viewBox of the scene."""
        return self.projection.viewbox

    def get_render_stats(self) -> dict:
        """
        Get statistics of the last render pass.

        Returns:
            Dictionary with triangle, chunk and outline counts
        """
        if not self._stats:
            return {"error": "Nothing rendered"}
        return dict(self._stats)
