"""
Voxel Data Structures

This module provides:
- Position: 1-indexed integer grid coordinates (x, y, z)
- Voxel: A colored cell with its depth ordering value
- VoxelStore: Sparse position-keyed storage for one scene

The store is sparse (a dict keyed by Position) rather than a dense array:
isometric scenes are small and mostly empty, and every render pass iterates
voxels in depth order anyway.

Coordinate system: x and y in [1, size] span the ground rhombus, z is the
stage (height layer) starting at 1.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, NamedTuple, Optional

from .color import normalize_hex

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    """Integer voxel position, 1-indexed."""
    x: int
    y: int
    z: int


def compute_z_index(position: Position, size: int) -> int:
    """
    Compute the depth ordering value of a position.

    Higher values are closer to the viewer. The value is only used as a
    total order, never as a distance.

    Args:
        position: Voxel position
        size: Grid edge length

    Returns:
        z * (2 * size - 1) - (size - x) - (y - 1)
    """
    x, y, z = position
    max_per_stage = z * (size * 2 - 1)
    return max_per_stage - (size - x) - (y - 1)


@dataclass(frozen=True)
class Voxel:
    """A single colored voxel."""
    position: Position
    color: str
    z_index: int


@dataclass
class VoxelStore:
    """
    Sparse voxel storage keyed by Position.

    Inserting at an occupied position overwrites the previous voxel.
    The highest stage is memoized and invalidated on every mutation.
    """

    size: int
    _voxels: Dict[Position, Voxel] = field(init=False, repr=False)
    _max_z: Optional[int] = field(init=False, repr=False)

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}")
        self._voxels = {}
        self._max_z = None

    def __len__(self) -> int:
        return len(self._voxels)

    def __contains__(self, position) -> bool:
        return Position(*position) in self._voxels

    def __iter__(self) -> Iterator[Voxel]:
        return iter(self._voxels.values())

    def __getitem__(self, position) -> Voxel:
        return self._voxels[Position(*position)]

    @property
    def max_z(self) -> int:
        """Highest stage among stored voxels, 0 when empty."""
        if self._max_z is None:
            self._max_z = max(
                (voxel.position.z for voxel in self._voxels.values()),
                default=0
            )
        return self._max_z

    def set_voxel(self, position, color: str) -> Optional[Voxel]:
        """
        Insert or overwrite a voxel.

        Args:
            position: (x, y, z) tuple or Position
            color: Hex color string (#RGB or #RRGGBB)

        Returns:
            The stored Voxel, or None if the position is out of bounds
        """
        position = Position(*position)
        if not self._in_bounds(position):
            logger.debug("Ignoring out-of-bounds voxel at %s", position)
            return None

        voxel = Voxel(
            position=position,
            color=normalize_hex(color),
            z_index=compute_z_index(position, self.size)
        )
        self._voxels[position] = voxel
        self._invalidate()
        return voxel

    def get_voxel(self, position) -> Optional[Voxel]:
        """Get the voxel at a position, or None if empty."""
        return self._voxels.get(Position(*position))

    def is_solid(self, position) -> bool:
        """Check if a voxel exists at the given position."""
        return Position(*position) in self._voxels

    def clear_voxel(self, position):
        """Remove a voxel. Removing an empty position is a no-op."""
        if self._voxels.pop(Position(*position), None) is not None:
            self._invalidate()

    def clear(self):
        """Remove all voxels."""
        self._voxels.clear()
        self._invalidate()

    def count_voxels(self) -> int:
        """Count the stored voxels."""
        return len(self._voxels)

    def voxels_by_depth(self) -> List[Voxel]:
        """Voxels sorted back to front (ascending z_index)."""
        return sorted(self._voxels.values(), key=lambda voxel: voxel.z_index)

    def _in_bounds(self, position: Position) -> bool:
        return (
            1 <= position.x <= self.size and
            1 <= position.y <= self.size and
            position.z >= 1
        )

    def _invalidate(self):
        self._max_z = None


def box_coordinates(
    position,
    x_size: int = 1,
    y_size: int = 1,
    z_size: int = 1
) -> List[Position]:
    """
    Enumerate the positions of a box.

    Args:
        position: Corner position with the smallest coordinates
        x_size, y_size, z_size: Box extent along each axis

    Returns:
        Positions ordered x-major, then y, then z
    """
    x, y, z = position
    return [
        Position(x + dx, y + dy, z + dz)
        for dx in range(x_size)
        for dy in range(y_size)
        for dz in range(z_size)
    ]
