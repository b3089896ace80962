"""
Global Grid Indexing

Every visible triangle gets an integer index in a virtual rhombic grid of
width 2 * (size + maxZ), built from its top shell chart coordinates. Two
triangles are adjacent when their indexes are grid neighbors, which is
decided by parity alone:

    odd index  i -> i - 1, i + 1, i - offset
    even index i -> i + offset, i + 1, i - 1

with offset = 2 * (size + maxZ) - 1. No floating point comparison is
involved.
"""

from dataclasses import replace
from typing import Iterable, List

from .faces import TrianglePath


class AdjacencyIndexer:
    """Assign global grid indexes and enumerate grid neighbors."""

    def __init__(self, size: int, max_z: int):
        """
        Args:
            size: Grid edge length
            max_z: Highest stage among all voxels of the scene
        """
        self.size = size
        self.max_z = max_z

    @property
    def grid_width(self) -> int:
        """Number of triangle cells per grid row."""
        return (self.size + self.max_z) * 2

    @property
    def neighbor_offset(self) -> int:
        """Index distance to the neighbor in the adjacent row."""
        return self.grid_width - 1

    def global_grid_index(self, top_x: int, top_y: int) -> int:
        """
        Index of a top chart cell.

        Args:
            top_x, top_y: Raw top shell chart coordinates

        Returns:
            Integer index in the global grid
        """
        return self.grid_width * (top_x + self.max_z - 1) + top_y

    def neighbor_indexes(self, index: int) -> List[int]:
        """The three neighbor indexes of a grid cell."""
        offset = self.neighbor_offset
        if index % 2:
            return [index - 1, index + 1, index - offset]
        return [index + offset, index + 1, index - 1]

    def index_triangle(self, triangle: TrianglePath, resolver) -> TrianglePath:
        """
        Fill the adjacency fields of a triangle.

        Args:
            triangle: Triangle without adjacency fields
            resolver: ShellKeyResolver of the same render pass

        Returns:
            A copy with top_face_x, top_face_y and global_grid_index set
        """
        top_x, top_y = resolver.top_face_coordinates(
            triangle.position, triangle.orientation, triangle.face_index
        )
        return replace(
            triangle,
            top_face_x=top_x + self.max_z,
            top_face_y=top_y,
            global_grid_index=self.global_grid_index(top_x, top_y),
        )

    def index_triangles(self, triangles: Iterable[TrianglePath], resolver) -> List[TrianglePath]:
        """Index every triangle, preserving order."""
        return [self.index_triangle(triangle, resolver) for triangle in triangles]
