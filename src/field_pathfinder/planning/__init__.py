"""
planning package

Exposes the grid-overlay path finder and its building blocks:
- PathFinder / find_path: public entry point
- generate_grid_for_polygon: grid overlay of a field polygon
- get_neighbors / add_off_grid_node / NeighborCheck: graph neighbor model
- a_star_path: generic A* search
- smooth: corner-cutting path smoother
"""

from .astar_core import a_star_path
from .grid import GridNode, Node, NodeCollection, OffGridNode, generate_grid_for_polygon
from .neighbors import NeighborCheck, add_off_grid_node, get_neighbors
from .pathfinder import InvalidInputError, PathFinder, find_path
from .smoothing import smooth

__all__ = [
    "a_star_path",
    "GridNode",
    "Node",
    "NodeCollection",
    "OffGridNode",
    "generate_grid_for_polygon",
    "NeighborCheck",
    "add_off_grid_node",
    "get_neighbors",
    "InvalidInputError",
    "PathFinder",
    "find_path",
    "smooth",
]
