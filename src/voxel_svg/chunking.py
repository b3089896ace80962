"""
Chunk Building

Groups visible triangles into chunks: maximal sets of same-colored
triangles connected through global grid adjacency. This is a flood fill
run one color at a time.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .faces import TrianglePath

logger = logging.getLogger(__name__)


@dataclass
class Chunk:
    """A connected group of same-colored triangles."""
    group_id: int
    color: str
    triangles: List[TrianglePath] = field(default_factory=list)

    @property
    def id(self) -> str:
        return f"{self.group_id}{self.color}"

    def __len__(self) -> int:
        return len(self.triangles)


def group_by_color(triangles: Iterable[TrianglePath]) -> Dict[str, List[TrianglePath]]:
    """Group triangles by color, colors in first-seen order."""
    groups: Dict[str, List[TrianglePath]] = {}
    for triangle in triangles:
        groups.setdefault(triangle.color, []).append(triangle)
    return groups


def build_chunks(triangles: Iterable[TrianglePath], indexer) -> List[Chunk]:
    """
    Flood fill the adjacency graph, one color at a time.

    Within a color, triangles are pooled by global grid index (a later
    triangle at the same index replaces an earlier one). The first remaining
    triangle seeds a chunk; its grid neighbors still in the pool are moved
    into the chunk and onto the work list until the list is empty. Group ids
    start at 1 for every color.

    Args:
        triangles: Indexed triangles (global_grid_index set)
        indexer: AdjacencyIndexer of the same render pass

    Returns:
        Chunks in color order, then discovery order
    """
    chunks = []

    for color, color_triangles in group_by_color(triangles).items():
        pool = {triangle.global_grid_index: triangle for triangle in color_triangles}

        group_id = 1
        while pool:
            seed = pool.pop(next(iter(pool)))
            chunk = Chunk(group_id, color)
            work_list = [seed]

            while work_list:
                triangle = work_list.pop()
                chunk.triangles.append(triangle)

                neighbors = [
                    pool.pop(index)
                    for index in indexer.neighbor_indexes(triangle.global_grid_index)
                    if index in pool
                ]
                work_list.extend(neighbors)

            chunks.append(chunk)
            group_id += 1

    logger.debug("Built %d chunks", len(chunks))
    return chunks
