"""
Shell Classification (visibility keys)

The visible surface of the whole solid is made of three "shells": the top
shell, the left shell and the right shell. Each shell has its own discrete
triangle grid. A triangle of any voxel face is mapped to exactly one cell of
exactly one shell; two triangles sharing a cell compete for the same screen
area, and only the voxel closest to the viewer may keep it.

For a triangle of the voxel at (px, py, pz), with zDiff = maxZ - pz:

    right shell  if size - px - X < zDiff  and  py > size - px + X2
    left shell   elif py - 1 - Y < zDiff  and  size - px + 1 > py - 1 + Y2
    top shell    otherwise

X, X2, Y, Y2 are 0/1 offsets depending on the orientation and face index.
Cell coordinates per shell:

    top    x = tx - zDiff + py            y = ty + (px + zDiff) * 2
    right  x = sx + px + py - size        y = ty + (zDiff - (size - px)) * 2
    left   x = sx + px + py               y = ly + (zDiff - py + 1) * 2

tx, ty, sx, ly are small integer offsets, again per orientation and face.
"""

from enum import Enum
from typing import Dict, NamedTuple, Tuple

from .faces import Orientation


class Shell(str, Enum):
    """The three outward surfaces of the solid."""
    TOP = "t"
    LEFT = "l"
    RIGHT = "r"


class ShellKey(NamedTuple):
    """Discrete (shell, x, y) identifier of a visible screen cell."""
    shell: Shell
    x: int
    y: int

    def __str__(self) -> str:
        return f"f{self.shell.value}x{self.x}y{self.y}"


class FaceOffsets(NamedTuple):
    """Per (orientation, face index) offsets."""
    x: int          # right shell test, first term
    x2: int         # right shell test, second term
    y: int          # left shell test, first term
    y2: int         # left shell test, second term
    top_x: int      # top chart x
    top_y: int      # top chart y, also right chart y
    side_x: int     # right and left chart x
    left_y: int     # left chart y


FACE_OFFSETS: Dict[Tuple[Orientation, int], FaceOffsets] = {
    (Orientation.TOP, 1): FaceOffsets(0, 1, 0, 0, 0, -1, -1, 0),
    (Orientation.TOP, 2): FaceOffsets(0, 0, 0, 1, 0, 0, 0, -1),
    (Orientation.RIGHT, 1): FaceOffsets(1, 0, 0, 1, 0, 1, 0, 0),
    (Orientation.RIGHT, 2): FaceOffsets(1, 0, 1, 1, -1, 2, 0, 1),
    (Orientation.LEFT, 1): FaceOffsets(0, 1, 1, 0, -1, 0, -1, 1),
    (Orientation.LEFT, 2): FaceOffsets(1, 1, 1, 0, -1, 1, -1, 2),
}


def get_face_offsets(orientation, face_index: int) -> FaceOffsets:
    """
    Look up the offsets of a triangle.

    Raises:
        ValueError: For an unknown orientation or a face index other than 1 or 2
    """
    try:
        return FACE_OFFSETS[(Orientation(orientation), face_index)]
    except (KeyError, ValueError):
        raise ValueError(
            f"No face offsets for orientation={orientation!r}, face_index={face_index!r}"
        ) from None


class ShellKeyResolver:
    """
    Classify triangles into shell cells for one render pass.

    The resolver is bound to the grid size and the current highest stage;
    build a new one whenever the voxel set changes.
    """

    def __init__(self, size: int, max_z: int):
        """
        Args:
            size: Grid edge length
            max_z: Highest stage among all voxels of the scene
        """
        self.size = size
        self.max_z = max_z

    def shell_key(self, position, orientation, face_index: int) -> ShellKey:
        """
        Compute the shell key of a triangle.

        Args:
            position: (x, y, z) of the owning voxel
            orientation: Face orientation
            face_index: 1 or 2

        Returns:
            ShellKey of the screen cell covered by the triangle
        """
        px, py, pz = position
        offsets = get_face_offsets(orientation, face_index)
        z_diff = self.max_z - pz
        size = self.size

        if size - px - offsets.x < z_diff and py > size - px + offsets.x2:
            return ShellKey(
                Shell.RIGHT,
                offsets.side_x + px + py - size,
                offsets.top_y + (z_diff - (size - px)) * 2,
            )
        if py - 1 - offsets.y < z_diff and size - px + 1 > py - 1 + offsets.y2:
            return ShellKey(
                Shell.LEFT,
                offsets.side_x + px + py,
                offsets.left_y + (z_diff - py + 1) * 2,
            )
        x, y = self.top_face_coordinates(position, orientation, face_index)
        return ShellKey(Shell.TOP, x, y)

    def top_face_coordinates(self, position, orientation, face_index: int) -> Tuple[int, int]:
        """
        Coordinates of a triangle in the top shell chart.

        Applied to every triangle regardless of its real shell, this gives
        one shared triangle grid over the whole picture.

        Returns:
            (x, y) cell coordinates
        """
        px, py, pz = position
        offsets = get_face_offsets(orientation, face_index)
        z_diff = self.max_z - pz
        return (
            offsets.top_x - z_diff + py,
            offsets.top_y + (px + z_diff) * 2,
        )
