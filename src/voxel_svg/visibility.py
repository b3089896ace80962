"""
Undershell Erasure (occlusion culling)

Triangles sharing a shell key cover the same screen cell. Only the one whose
voxel has the greatest z_index (closest to the viewer) is kept.
"""

import logging
from typing import Iterable, List, Mapping

from .faces import TrianglePath

logger = logging.getLogger(__name__)


def erase_undershell(
    triangles: Iterable[TrianglePath],
    voxels: Mapping
) -> List[TrianglePath]:
    """
    Keep one triangle per shell key.

    Args:
        triangles: Triangle paths with their shell keys set
        voxels: Position -> Voxel lookup (e.g. a VoxelStore)

    Returns:
        Surviving triangles, ordered by first appearance of their shell key
    """
    shell = {}
    best_z = {}
    count = 0

    for triangle in triangles:
        count += 1
        z_index = voxels[triangle.position].z_index
        key = triangle.shell_key
        if key not in shell or best_z[key] < z_index:
            shell[key] = triangle
            best_z[key] = z_index

    logger.debug("Undershell erasure kept %d of %d triangles", len(shell), count)
    return list(shell.values())
