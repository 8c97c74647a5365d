"""
neighbors.py

Graph neighbor model on top of the grid overlay:
- NeighborCheck:     distance/obstruction predicate A* uses to confirm moves
- get_neighbors:     neighbor generation callback for A*
- add_off_grid_node: splice an arbitrary point into an existing grid
"""

from typing import Callable, List

from ..utils.geometry import squared_distance
from .grid import GridNode, Node, NodeCollection


IsValidNeighborFn = Callable[[Node, Node], bool]

# Offsets of the 8 surrounding grid coordinates (row, column).
GRID_NEIGHBOR_OFFSETS = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]


class NeighborCheck:
    """
    Is `node` a valid neighbor of `the_node`?

    Valid means:
    - closer than distance_factor * grid_spacing (a little more than sqrt(2)
      to allow diagonals)
    - `node` has no fruit

    The obstruction of `the_node` itself is not checked.

    Usage:
        check = NeighborCheck(grid_spacing=10.0)
        check(a, b)
        check.calls  # number of evaluations so far
    """

    def __init__(self, grid_spacing: float, distance_factor: float = 1.5) -> None:
        self.grid_spacing = float(grid_spacing)
        self.distance_factor = float(distance_factor)
        self.max_distance = self.distance_factor * self.grid_spacing
        self._max_distance_sq = self.max_distance * self.max_distance
        self.calls = 0

    def __call__(self, the_node: Node, node: Node) -> bool:
        self.calls += 1
        d2 = squared_distance(the_node.position, node.position)
        return d2 < self._max_distance_sq and not node.obstructed


def get_neighbors(the_node: Node, nodes: NodeCollection) -> List[Node]:
    """
    Valid, fruit-free neighbors of `the_node`.

    Grid nodes look up their (up to) eight surrounding grid coordinates in
    the sparse map instead of scanning the whole collection. Any node may
    also carry explicit neighbor indexes recorded by add_off_grid_node; both
    sources are combined.
    """
    neighbors: List[Node] = []

    if isinstance(the_node, GridNode):
        for d_row, d_column in GRID_NEIGHBOR_OFFSETS:
            index = nodes.index_of(the_node.row + d_row, the_node.column + d_column)
            if index is None:
                continue
            neighbor = nodes[index]
            if not neighbor.obstructed:
                neighbors.append(neighbor)

    for index in the_node.neighbor_indexes:
        neighbor = nodes[index]
        if not neighbor.obstructed:
            neighbors.append(neighbor)

    return neighbors


def add_off_grid_node(
    nodes: NodeCollection,
    new_node: Node,
    is_valid_neighbor: IsValidNeighborFn,
) -> int:
    """
    Add a non-grid node to the grid and link it to its neighbors.

    Every existing node that is a valid neighbor of `new_node` learns the
    index the new node is about to get, and the new node learns theirs.
    The node is appended only after the scan, so the recorded index is
    exactly len(nodes) at call time. Existing indexes never change.

    Args:
        nodes: Collection to extend.
        new_node: Node to insert (typically start or goal).
        is_valid_neighbor: Predicate deciding which nodes become neighbors.

    Returns:
        Index of the inserted node.
    """
    new_index = len(nodes)
    for index, node in enumerate(nodes):
        if node is new_node or not is_valid_neighbor(new_node, node):
            continue
        # tell the new node about its neighbor
        new_node.neighbor_indexes.append(index)
        # tell the other node about the new node
        node.neighbor_indexes.append(new_index)

    return nodes.append(new_node)
