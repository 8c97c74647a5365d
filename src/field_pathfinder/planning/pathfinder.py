"""
pathfinder.py

Find a fruit-free path between two points inside a field polygon.

Pipeline (one call, nothing shared between calls):
1. Convert polygon and endpoints from caller (x, z) to internal (x, y).
2. Cover the polygon with a grid `width` apart (grid.py).
3. Splice start, then goal into the grid (neighbors.py).
4. Run A* with the grid-aware neighbor callback (astar_core.py).
5. Cut sharp corners (smoothing.py) and convert back to (x, z).

A missing path is a normal outcome (None), not an error. Only malformed
input raises, before any grid work starts.
"""

import math
import numbers
from typing import Any, List, Optional, Sequence, Tuple

from ..config_loader import validate_pathfinder_config
from ..obstacles import FruitOracle, RandomFruit
from ..utils.geometry import (
    Point2D,
    calculate_polyline_data,
    point_to_xy,
    points_to_xy,
    points_to_xz,
)
from .astar_core import a_star_path
from .grid import NodeCollection, OffGridNode, generate_grid_for_polygon
from .neighbors import NeighborCheck, add_off_grid_node, get_neighbors
from .smoothing import smooth


class InvalidInputError(ValueError):
    """Raised when a path finding request is malformed (bad width or polygon)."""


def _validate_input(
    start: Any,
    goal: Any,
    polygon: Sequence[Any],
    width: float,
) -> Tuple[Point2D, Point2D, List[Point2D]]:
    """Check the request and convert it to the internal convention."""
    if isinstance(width, bool) or not isinstance(width, numbers.Real):
        raise InvalidInputError(f"width must be a number, got {type(width).__name__}")
    if not math.isfinite(width) or width <= 0:
        raise InvalidInputError(f"width must be a positive finite number, got {width}")

    if polygon is None or len(polygon) < 3:
        n = 0 if polygon is None else len(polygon)
        raise InvalidInputError(f"polygon needs at least 3 points, got {n}")

    try:
        polygon_xy = points_to_xy(polygon)
        start_xy = point_to_xy(start)
        goal_xy = point_to_xy(goal)
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidInputError(f"Invalid point: {e}") from e

    for x, y in [start_xy, goal_xy] + polygon_xy:
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidInputError(f"Points must have finite coordinates, got ({x}, {-y})")

    return start_xy, goal_xy, polygon_xy


class PathFinder:
    """
    Grid-overlay A* path finder for a vehicle with a wide implement.

    Usage:
        finder = PathFinder(oracle=FruitField(patches))
        path, grid = finder.find_path(start, goal, boundary, width=6.0)
    """

    def __init__(self, config: Optional[dict] = None, oracle: Optional[FruitOracle] = None) -> None:
        """
        Args:
            config: 'pathfinder' config section (see config/pathfinder.yaml);
                missing keys fall back to defaults.
            oracle: Fruit oracle. Defaults to RandomFruit from the
                'standalone_fruit' section.
        """
        self.config = validate_pathfinder_config(config or {})
        if oracle is None:
            fruit_cfg = self.config["standalone_fruit"]
            oracle = RandomFruit(probability=fruit_cfg["probability"], seed=fruit_cfg["seed"])
        self.oracle = oracle
        self.verbose = bool(self.config["verbose"])

    def _debug(self, msg: str) -> None:
        if self.verbose:
            print(f"[PathFinder] {msg}")

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    def find_path(
        self,
        start: Any,
        goal: Any,
        polygon: Sequence[Any],
        width: float,
    ) -> Tuple[Optional[List[Point2D]], NodeCollection]:
        """
        Find a path between start and goal in polygon.

        Args:
            start: Start point in caller coordinates (x, z).
            goal: Goal point in caller coordinates (x, z).
            polygon: Field boundary in caller coordinates.
            width: Implement width, used as grid spacing (meters).

        Returns:
            (path, grid): path as list of (x, z) points or None if there is
            no fruit-free route; grid is the node collection including the
            spliced start and goal, for diagnostics and plotting.

        Raises:
            InvalidInputError: width <= 0, fewer than 3 polygon points, or
                unreadable points.
        """
        start_xy, goal_xy, polygon_xy = _validate_input(start, goal, polygon, width)
        width = float(width)

        grid = generate_grid_for_polygon(polygon_xy, width, self.oracle)
        self._debug(f"Grid generated with {len(grid)} points")

        is_valid_neighbor = NeighborCheck(width, self.config["neighbor_distance_factor"])

        from_node = OffGridNode(*start_xy)
        to_node = OffGridNode(*goal_xy)
        add_off_grid_node(grid, from_node, is_valid_neighbor)
        add_off_grid_node(grid, to_node, is_valid_neighbor)

        path = a_star_path(from_node, to_node, grid, is_valid_neighbor, get_neighbors)
        self._debug(f"is_valid_neighbor called {is_valid_neighbor.calls} times")

        if path is None:
            print("[PathFinder] No path found.")
            return None, grid

        points = [node.position for node in path]
        data = calculate_polyline_data(points)
        self._debug(f"Path generated with {len(points)} points, length {data.length:.1f} m")

        smoothing = self.config["smoothing"]
        points = smooth(
            points,
            max_angle=math.radians(smoothing["max_turn_angle_deg"]),
            min_passes=smoothing["min_passes"],
            force=True,
            max_passes=smoothing["max_passes"],
            min_points=smoothing["min_points"],
        )
        return points_to_xz(points), grid


def find_path(
    start: Any,
    goal: Any,
    polygon: Sequence[Any],
    width: float,
    oracle: Optional[FruitOracle] = None,
    config: Optional[dict] = None,
) -> Tuple[Optional[List[Point2D]], NodeCollection]:
    """Convenience wrapper: PathFinder(config, oracle).find_path(...)."""
    return PathFinder(config=config, oracle=oracle).find_path(start, goal, polygon, width)
