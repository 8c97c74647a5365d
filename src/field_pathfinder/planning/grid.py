"""
grid.py

Grid overlay of a field polygon for A* planning.

Key design:
- Sample the polygon interior on horizontal scan-lines `width` apart,
  `width` apart along each line.
- Keep half the implement width clear of the boundary, so the whole
  working width stays inside the field, not just its centerline.
- Number columns per sample position, accepted or not, so neighbors are
  always at column +-1 even where samples are skipped.
- Index grid nodes by (row, column) in a sparse dict instead of a dense
  array; the interior of an irregular field is sparse in its bounding box.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..obstacles import FruitOracle
from ..utils.geometry import Point2D, generate_parallel_tracks, get_bounding_box


GridCoord = Tuple[int, int]


@dataclass(eq=False)
class Node:
    """
    Vertex of the traversal graph.

    Nodes compare and hash by identity: two nodes at the same spot are still
    different vertices.

    neighbor_indexes lists collection indices of neighbors recorded when an
    off-grid node was spliced in next to this one.
    """

    x: float
    y: float
    obstructed: bool = False
    neighbor_indexes: List[int] = field(default_factory=list)

    @property
    def position(self) -> Point2D:
        return self.x, self.y


@dataclass(eq=False)
class GridNode(Node):
    """Node produced by regular sampling, addressed by (row, column)."""

    row: int = 0
    column: int = 0

    @property
    def grid_coord(self) -> GridCoord:
        return self.row, self.column


@dataclass(eq=False)
class OffGridNode(Node):
    """Node injected at an arbitrary location (start or goal)."""


class NodeCollection:
    """
    Append-only list of nodes plus a sparse (row, column) -> index map.

    Every GridNode is registered in the map under its own coordinate when it
    is appended. Nothing is ever removed, so map entries never go stale.
    """

    def __init__(self, spacing: float) -> None:
        self.spacing = float(spacing)
        self.nodes: List[Node] = []
        self.map: Dict[GridCoord, int] = {}
        # Bookkeeping only; the map is the source of truth for lookups.
        self.width = 0
        self.height = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    def append(self, node: Node) -> int:
        """Append a node and return its index."""
        index = len(self.nodes)
        self.nodes.append(node)
        if isinstance(node, GridNode):
            self.map[node.grid_coord] = index
        return index

    def index_of(self, row: int, column: int) -> Optional[int]:
        return self.map.get((row, column))

    def node_at(self, row: int, column: int) -> Optional[Node]:
        index = self.map.get((row, column))
        return None if index is None else self.nodes[index]

    def grid_nodes(self) -> List[GridNode]:
        return [n for n in self.nodes if isinstance(n, GridNode)]

    def off_grid_nodes(self) -> List[Node]:
        return [n for n in self.nodes if not isinstance(n, GridNode)]


def generate_grid_for_polygon(
    polygon: Sequence[Point2D],
    width: float,
    oracle: FruitOracle,
) -> NodeCollection:
    """
    Cover a polygon with a grid of nodes `width` apart.

    Args:
        polygon: Field boundary as (x, y) points (internal convention).
        width: Grid spacing, the implement width (meters).
        oracle: Answers whether a sample location has fruit.

    Returns:
        NodeCollection of GridNodes. Empty when the polygon is too small
        for a single scan-line or a single sample with margin.
    """
    grid = NodeCollection(width)

    bbox = get_bounding_box(polygon)
    horizontal_lines = generate_parallel_tracks(polygon, width, bounding_box=bbox)
    if not horizontal_lines:
        return grid

    # All lines start at the same x and have the same length.
    grid.width = int(math.floor(horizontal_lines[0].length / width))
    grid.height = len(horizontal_lines)

    margin = width / 2.0
    for row, line in enumerate(horizontal_lines, start=1):
        spans = line.interior_spans()
        n_samples = int(math.floor(line.length / width + 1e-9)) + 1
        y = line.y
        for i in range(n_samples):
            column = i + 1
            x = line.start[0] + i * width
            for left, right in spans:
                if left + margin < x < right - margin:
                    has_fruit = oracle.has_obstacle(x, y, width)
                    grid.append(GridNode(x, y, obstructed=has_fruit, row=row, column=column))
                    break

    return grid
