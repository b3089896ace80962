"""
Voxel Face Construction

Each voxel exposes three visible orientations in the isometric view
(top, right, left). Every orientation is split into two triangles with a
fixed vertex assignment; neighboring faces therefore share edges with a
consistent winding, which the outline merger relies on.

Corner indices (see IsometricProjection.voxel_corners):
    p1..p4 = bottom rhombus (left, back, right, front)
    p5..p8 = top rhombus (left, back, right, front)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple
import numpy as np


class Orientation(str, Enum):
    """Visible face orientations, in emission order."""
    TOP = "top"
    RIGHT = "right"
    LEFT = "left"


class Point(NamedTuple):
    """Screen-space point."""
    x: float
    y: float


# Zero-based corner indices of the two triangles of each orientation
FACE_CORNERS: Dict[Orientation, Tuple[Tuple[int, int, int], Tuple[int, int, int]]] = {
    Orientation.TOP: ((4, 5, 7), (5, 6, 7)),     # (p5, p6, p8), (p6, p7, p8)
    Orientation.RIGHT: ((7, 6, 2), (7, 2, 3)),   # (p8, p7, p3), (p8, p3, p4)
    Orientation.LEFT: ((4, 7, 0), (0, 7, 3)),    # (p5, p8, p1), (p1, p8, p4)
}


@dataclass(frozen=True)
class TrianglePath:
    """
    One of the two triangles composing a voxel face.

    The voxel is referenced by its position (a key into the VoxelStore),
    never by the Voxel object itself. The adjacency fields stay None until
    the AdjacencyIndexer has run.
    """

    id: str
    points: Tuple[Point, Point, Point]
    color: str
    position: Tuple[int, int, int]
    orientation: Orientation
    face_index: int
    shell_key: Optional[tuple] = None
    top_face_x: Optional[int] = None
    top_face_y: Optional[int] = None
    global_grid_index: Optional[int] = None


def build_faces(corners: np.ndarray) -> Dict[Orientation, Tuple[Tuple[Point, ...], ...]]:
    """
    Build the triangles of the three visible faces of a voxel.

    Args:
        corners: Array of shape (8, 2) from IsometricProjection.voxel_corners

    Returns:
        Mapping orientation -> (triangle 1, triangle 2), each a tuple of 3 Points
    """
    points = [Point(float(cx), float(cy)) for cx, cy in corners]
    return {
        orientation: tuple(
            tuple(points[i] for i in triangle) for triangle in triangles
        )
        for orientation, triangles in FACE_CORNERS.items()
    }


def build_triangle_paths(
    voxels: Iterable,
    projection,
    shader,
    resolver
) -> List[TrianglePath]:
    """
    Emit the six triangles of every voxel.

    Args:
        voxels: Voxels in render order (ascending z_index)
        projection: IsometricProjection of the scene
        shader: ColorShader deriving face colors
        resolver: ShellKeyResolver classifying each triangle

    Returns:
        List of TrianglePath, six per voxel, orientations in
        top / right / left order
    """
    voxels = list(voxels)
    if not voxels:
        return []

    corners = projection.voxel_corners_batch(
        np.array([voxel.position for voxel in voxels])
    )

    paths = []
    for voxel_index, (voxel, voxel_corners) in enumerate(zip(voxels, corners)):
        for orientation, triangles in build_faces(voxel_corners).items():
            color = shader.face_color(orientation, voxel.color)
            for face_index, triangle in enumerate(triangles, start=1):
                paths.append(TrianglePath(
                    id=f"i{voxel_index}f{orientation.value}s{face_index}",
                    points=triangle,
                    color=color,
                    position=voxel.position,
                    orientation=orientation,
                    face_index=face_index,
                    shell_key=resolver.shell_key(
                        voxel.position, orientation, face_index
                    ),
                ))
    return paths
