"""
Outline Merging

Turns each chunk of triangles into a single closed outline, so that a
region of same-colored faces is drawn as one path instead of one path per
triangle (no seams between neighbors, far fewer SVG elements).

Algorithm Overview:
1. Edge Extraction: every triangle yields 3 edges in shell grid coordinates
2. Cancellation: an edge seen twice (either direction) is interior and is
   dropped; what remains is the chunk boundary
3. Boundary Walk: starting from the triangle with the highest global grid
   index, boundary edges are chained end to start; only direction changes
   are recorded as outline points

Known limitation: a boundary vertex shared by more than two boundary edges
(junction) or a second boundary loop (hole) is not traced. The walk stops,
the outline stays open, and its residual `length` is non-zero.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from .chunking import Chunk
from .faces import Point, TrianglePath

logger = logging.getLogger(__name__)


class Vertex(NamedTuple):
    """Boundary vertex: shell grid coordinates plus the screen point."""
    x: int
    y: int
    point: Point

    @property
    def key(self) -> Tuple[int, int]:
        return (self.x, self.y)


class Edge(NamedTuple):
    """Directed triangle edge; `triangle` indexes the chunk's triangle list."""
    start: Vertex
    end: Vertex
    triangle: int

    @property
    def key(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Undirected key: both orientations of an edge share it."""
        a, b = self.start.key, self.end.key
        return (a, b) if a <= b else (b, a)

    @property
    def direction(self) -> int:
        return edge_direction(self)

    def reversed(self) -> "Edge":
        return Edge(self.end, self.start, self.triangle)


class Outline(NamedTuple):
    """
    Final renderable unit.

    Attributes:
        id: Chunk identifier ("{group_id}{color}")
        color: Fill color
        points: Ordered polygon points in screen space
        length: Number of boundary edges left unconsumed by the walk
    """
    id: str
    color: str
    points: Tuple[Point, ...]
    length: int

    @property
    def is_closed(self) -> bool:
        return self.length == 0


def edge_direction(edge: Edge) -> int:
    """
    Direction signature of an edge: |dx| - |dy|.

    Shell grid edges only take three values: 1, 0 or -1.
    """
    dx = abs(edge.start.x - edge.end.x)
    dy = abs(edge.start.y - edge.end.y)
    return dx - dy


def edges_from_triangle(triangle: TrianglePath, index: int = 0) -> List[Edge]:
    """
    The 3 directed edges of a triangle in shell grid coordinates.

    The vertex template depends on the parity of the global grid index
    (odd cells point one way, even cells the other).

    Args:
        triangle: Indexed triangle
        index: Position of the triangle in its chunk

    Returns:
        [p1 -> p2, p2 -> p3, p3 -> p1]
    """
    x = triangle.top_face_x
    h = triangle.top_face_y // 2
    p1, p2, p3 = triangle.points

    if triangle.global_grid_index % 2:
        v1 = Vertex(x - 1, h, p1)
        v2 = Vertex(x, h, p2)
        v3 = Vertex(x - 1, h + 1, p3)
    else:
        v1 = Vertex(x, h - 1, p1)
        v2 = Vertex(x, h, p2)
        v3 = Vertex(x - 1, h, p3)

    return [Edge(v1, v2, index), Edge(v2, v3, index), Edge(v3, v1, index)]


def boundary_edges(triangles: Iterable[TrianglePath]) -> List[Edge]:
    """
    Cancel shared edges and return the boundary.

    An edge already present (in either direction) is removed; otherwise it
    is inserted. Returned edges keep insertion order.
    """
    edges: Dict[tuple, Edge] = {}
    for index, triangle in enumerate(triangles):
        for edge in edges_from_triangle(triangle, index):
            if edge.key in edges:
                del edges[edge.key]
            else:
                edges[edge.key] = edge
    return list(edges.values())


class OutlineMerger:
    """
    Merge chunks into outlines.

    Attributes:
        open_outlines: Ids of outlines whose walk stopped early during the
            last merge_chunks call
    """

    def __init__(self):
        self.open_outlines: List[str] = []

    def merge_chunk(self, chunk: Chunk) -> Optional[Outline]:
        """
        Trace the boundary of one chunk.

        Args:
            chunk: Chunk of indexed triangles

        Returns:
            Outline, or None for an empty chunk
        """
        triangles = chunk.triangles
        edges = boundary_edges(triangles)
        if not edges:
            return None

        # Vertex -> edges touching it, in boundary order
        touching = defaultdict(list)
        for i, edge in enumerate(edges):
            touching[edge.start.key].append(i)
            touching[edge.end.key].append(i)

        first = max(
            range(len(edges)),
            key=lambda i: triangles[edges[i].triangle].global_grid_index
        )
        current = edges[first]
        if current.start.x + current.start.y > current.end.x + current.end.y:
            current = current.reversed()
        used = {first}

        points = [current.start]
        first_direction = last_direction = current.direction

        while len(used) < len(edges):
            last_point = current.end.key
            candidates = [i for i in touching[last_point] if i not in used]
            if not candidates:
                break

            i = candidates[0]
            next_edge = edges[i]
            if next_edge.end.key == last_point:
                next_edge = next_edge.reversed()

            direction = next_edge.direction
            if direction != last_direction:
                points.append(next_edge.start)
            last_direction = direction
            current = next_edge
            used.add(i)

        # The starting point sits mid-segment when the loop closes straight
        if first_direction == last_direction:
            points.pop(0)

        residual = len(edges) - len(used)
        if residual:
            logger.warning(
                "Chunk %s: boundary walk stopped with %d unmatched edges "
                "(hole or junction); outline left open",
                chunk.id, residual
            )

        return Outline(
            id=chunk.id,
            color=chunk.color,
            points=tuple(vertex.point for vertex in points),
            length=residual,
        )

    def merge_chunks(self, chunks: Iterable[Chunk]) -> List[Outline]:
        """
        Merge every chunk and sort the outlines for drawing.

        Outlines with more unconsumed edges are drawn first; the sort is
        stable, so equal lengths keep chunk order.

        Returns:
            Outlines sorted by descending length
        """
        outlines = []
        for chunk in chunks:
            outline = self.merge_chunk(chunk)
            if outline is not None:
                outlines.append(outline)

        self.open_outlines = [outline.id for outline in outlines if not outline.is_closed]
        return sorted(outlines, key=lambda outline: outline.length, reverse=True)


def compare_path_stats(triangle_count: int, outlines: List[Outline]) -> dict:
    """
    Compare the merged outline count with one path per triangle.

    Args:
        triangle_count: Number of visible triangles
        outlines: Merged outlines

    Returns:
        Dictionary with comparison statistics
    """
    outline_count = len(outlines)
    reduction = (1 - outline_count / triangle_count) * 100 if triangle_count > 0 else 0
    return {
        "triangle_paths": triangle_count,
        "outline_paths": outline_count,
        "open_outlines": sum(1 for outline in outlines if not outline.is_closed),
        "path_reduction_percent": reduction,
    }
