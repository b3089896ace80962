"""
Projection Mathematics for Isometric Voxel Scenes

This module maps integer voxel positions to 2D screen (SVG) coordinates.

Every voxel is a unit cube whose ground face projects to a rhombus:
- The rhombus is voxel_x_size wide and voxel_y_size tall
- voxel_y_size = depth_ratio * voxel_x_size (0.5 gives the classic 2:1 look)
- Stepping +x moves the rhombus half a tile right and down,
  stepping +y moves it half a tile right and up,
  stepping +z moves it one voxel_y_size up

Screen space is y-down, like SVG and image coordinates.
"""

from dataclasses import dataclass, field
from typing import Tuple
import numpy as np


@dataclass
class IsometricProjection:
    """
    Isometric projection for one scene.

    Attributes:
        width: Width of the target surface
        height: Height of the target surface
        size: Grid edge length in voxels
        depth_ratio: Ratio voxel_y_size / voxel_x_size
        voxel_offset: Margin around the grid, in voxels
    """

    width: float = 500.0
    height: float = 500.0
    size: int = 16
    depth_ratio: float = 0.5
    voxel_offset: float = 1.0
    voxel_x_size: float = field(init=False)
    voxel_y_size: float = field(init=False)
    offset: float = field(init=False)

    def __post_init__(self):
        """Precompute tile dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Surface dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.size < 1:
            raise ValueError(f"Grid size must be positive, got {self.size}")

        self.voxel_x_size = self.width / (self.voxel_offset * 2 + self.size)
        self.voxel_y_size = self.depth_ratio * self.voxel_x_size
        # Horizontal margin on the svg-x axis
        self.offset = (self.width / self.size) * self.voxel_offset

    def stage_y(self, stage: int) -> float:
        """
        Screen y of the ground rhombus left corner for a given stage.

        Args:
            stage: Height layer (z), starting at 1

        Returns:
            Screen y coordinate
        """
        return self.height - (
            (self.size / 2) * self.voxel_y_size +
            self.offset +
            (stage - 1) * self.voxel_y_size
        )

    def voxel_origin(self, position) -> Tuple[float, float]:
        """
        Screen coordinates of the voxel's (x0, y0, z0) corner.

        Args:
            position: (x, y, z) voxel position

        Returns:
            (x, y) screen coordinates
        """
        x, y, z = position
        half_x = 0.5 * self.voxel_x_size
        half_y = 0.5 * self.voxel_y_size
        return (
            self.offset + half_x * (x - 1) + half_x * (y - 1),
            self.stage_y(z) + half_y * (x - 1) - half_y * (y - 1),
        )

    def horizontal_face_coordinates(self, origin) -> np.ndarray:
        """
        The 4 rhombus corners of a horizontal face.

        Args:
            origin: (x, y) screen coordinates of the left corner

        Returns:
            Array of shape (4, 2): left, back, right, front corners
        """
        ox, oy = origin
        half_x = 0.5 * self.voxel_x_size
        half_y = 0.5 * self.voxel_y_size
        return np.array([
            [ox, oy],
            [ox + half_x, oy - half_y],
            [ox + self.voxel_x_size, oy],
            [ox + half_x, oy + half_y],
        ], dtype=np.float64)

    def voxel_corners(self, position) -> np.ndarray:
        """
        Project the 8 corners of a voxel.

        Args:
            position: (x, y, z) voxel position

        Returns:
            Array of shape (8, 2). Rows 0-3 are the bottom face corners
            (p1..p4), rows 4-7 the same corners lifted by voxel_y_size (p5..p8).
        """
        bottom = self.horizontal_face_coordinates(self.voxel_origin(position))
        top = bottom - np.array([0.0, self.voxel_y_size])
        return np.vstack([bottom, top])

    def voxel_corners_batch(self, positions: np.ndarray) -> np.ndarray:
        """
        Batch projection of voxel corners.

        Args:
            positions: Array of shape (N, 3) with voxel positions

        Returns:
            Array of shape (N, 8, 2) with screen coordinates
        """
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        half_x = 0.5 * self.voxel_x_size
        half_y = 0.5 * self.voxel_y_size

        x = positions[:, 0] - 1
        y = positions[:, 1] - 1
        z = positions[:, 2]

        origin_x = self.offset + half_x * x + half_x * y
        stage = self.height - (
            (self.size / 2) * self.voxel_y_size +
            self.offset +
            (z - 1) * self.voxel_y_size
        )
        origin_y = stage + half_y * x - half_y * y

        # Rhombus corner offsets relative to the origin
        corner_offsets = np.array([
            [0.0, 0.0],
            [half_x, -half_y],
            [self.voxel_x_size, 0.0],
            [half_x, half_y],
        ])
        corner_offsets = np.vstack([
            corner_offsets,
            corner_offsets - np.array([0.0, self.voxel_y_size])
        ])

        origins = np.stack([origin_x, origin_y], axis=-1)
        return origins[:, np.newaxis, :] + corner_offsets[np.newaxis, :, :]

    @property
    def viewbox(self) -> str:
        """SVG viewBox covering the whole surface."""
        return f"0 0 {self.width:g} {self.height:g}"
