"""
astar_core.py

Generic A* search over arbitrary node objects.

This module ONLY handles:
- Open/closed set management
- Cost and heuristic bookkeeping
- Path reconstruction

It does not know about grids. Neighbors come exclusively from the
`get_neighbors` callback and every move is confirmed with the
`is_valid_neighbor` callback, so off-grid nodes work like any other.
"""

import heapq
import itertools
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar


N = TypeVar("N")

IsValidNeighborFn = Callable[[N, N], bool]
GetNeighborsFn = Callable[[N, Sequence[N]], List[N]]
CostFn = Callable[[N, N], float]


def distance(a, b) -> float:
    """Euclidean distance between two nodes with x / y attributes."""
    return math.hypot(b.x - a.x, b.y - a.y)


def a_star_path(
    start: N,
    goal: N,
    nodes: Sequence[N],
    is_valid_neighbor: IsValidNeighborFn,
    get_neighbors: GetNeighborsFn,
    heuristic: CostFn = distance,
    cost: CostFn = distance,
) -> Optional[List[N]]:
    """
    Find a path from start to goal.

    Nodes are tracked by identity, so they need not be hashable by value.

    Args:
        start: Start node, the root of the search.
        goal: Goal node.
        nodes: The whole node collection, passed through to get_neighbors.
        is_valid_neighbor: is_valid_neighbor(current, candidate) -> bool.
        get_neighbors: get_neighbors(node, nodes) -> list of candidates.
        heuristic: Estimated remaining cost from a node to the goal.
        cost: Cost of moving between two neighboring nodes.

    Returns:
        List of nodes from start to goal (inclusive), or None if no path.
    """
    # Open set: (f_score, tie-breaker, node)
    counter = itertools.count()
    open_set: List[Tuple[float, int, N]] = []
    heapq.heappush(open_set, (heuristic(start, goal), next(counter), start))

    came_from: Dict[int, N] = {}
    g_score: Dict[int, float] = {id(start): 0.0}
    closed: set = set()

    while open_set:
        _, _, current = heapq.heappop(open_set)
        current_key = id(current)

        if current is goal:
            return _reconstruct_path(came_from, current)

        if current_key in closed:
            # Stale heap entry
            continue
        closed.add(current_key)

        current_g = g_score[current_key]
        for neighbor in get_neighbors(current, nodes):
            neighbor_key = id(neighbor)
            if neighbor_key in closed:
                continue
            if not is_valid_neighbor(current, neighbor):
                continue

            tentative_g = current_g + cost(current, neighbor)
            if neighbor_key not in g_score or tentative_g < g_score[neighbor_key]:
                came_from[neighbor_key] = current
                g_score[neighbor_key] = tentative_g
                f = tentative_g + heuristic(neighbor, goal)
                heapq.heappush(open_set, (f, next(counter), neighbor))

    # No path found
    return None


def _reconstruct_path(came_from: Dict[int, N], current: N) -> List[N]:
    """Backtrack from goal to start."""
    path = [current]
    while id(current) in came_from:
        current = came_from[id(current)]
        path.append(current)
    path.reverse()
    return path
