"""
Geometry utilities for the field_pathfinder project.

Centralizes the small polygon helpers the grid planner leans on:
- distances and angle wrapping
- bounding boxes and horizontal scan-lines with boundary crossings
- aggregate polyline data (length, headings, turn angles)
- conversion between the caller (x, z) and internal (x, y) conventions

Conventions:
- Caller points are (x, z) pairs, or mappings with 'x'/'z' (or 'cx'/'cz').
- Internally everything works in (x, y) with y = -z.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np


Point2D = Tuple[float, float]


def wrap_to_pi(angle: float) -> float:
    """
    Wrap an angle to the range [-pi, pi].

    Args:
        angle: Angle in radians (unbounded).

    Returns:
        Wrapped angle in [-pi, pi].
    """
    # Use atan2(sin, cos) for robust wrapping
    return math.atan2(math.sin(angle), math.cos(angle))


def angle_diff(target: float, source: float) -> float:
    """Smallest signed angular difference from source -> target."""
    return wrap_to_pi(target - source)


def euclidean_distance(p1: Point2D, p2: Point2D) -> float:
    """
    Euclidean distance between two 2D points.

    Args:
        p1: (x1, y1)
        p2: (x2, y2)

    Returns:
        Distance between p1 and p2.
    """
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    return math.hypot(dx, dy)


def squared_distance(p1: Point2D, p2: Point2D) -> float:
    """Squared Euclidean distance (avoids sqrt if you only compare distances)."""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    return dx * dx + dy * dy


# -----------------------------------------------------------------------------
# Coordinate conventions
# -----------------------------------------------------------------------------
def point_to_xy(point: Any) -> Point2D:
    """
    Convert one caller point to the internal (x, y) convention.

    Accepts an (x, z) sequence or a mapping with 'x'/'z' or 'cx'/'cz' keys.
    """
    if isinstance(point, Mapping):
        x = point.get("x", point.get("cx"))
        z = point.get("z", point.get("cz"))
        if x is None or z is None:
            raise ValueError(
                f"Point mapping must contain 'x'/'z' or 'cx'/'cz' keys. Got: {point!r}"
            )
    else:
        x, z = point[0], point[1]
    return float(x), -float(z)


def points_to_xy(points: Sequence[Any]) -> List[Point2D]:
    """Convert caller points to the internal (x, y) convention."""
    return [point_to_xy(p) for p in points]


def point_to_xz(point: Point2D) -> Point2D:
    """Convert one internal (x, y) point back to the caller (x, z) convention."""
    return float(point[0]), -float(point[1])


def points_to_xz(points: Sequence[Point2D]) -> List[Point2D]:
    """Convert internal points back to the caller (x, z) convention."""
    return [point_to_xz(p) for p in points]


# -----------------------------------------------------------------------------
# Polygons & scan-lines
# -----------------------------------------------------------------------------
class BoundingBox(NamedTuple):
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def get_bounding_box(polygon: Sequence[Point2D]) -> BoundingBox:
    """Axis-aligned bounding box of a polygon given in (x, y)."""
    pts = np.asarray(polygon, dtype=float)
    if pts.ndim != 2 or len(pts) == 0:
        raise ValueError("Polygon must be a non-empty sequence of (x, y) points")
    return BoundingBox(
        float(pts[:, 0].min()),
        float(pts[:, 0].max()),
        float(pts[:, 1].min()),
        float(pts[:, 1].max()),
    )


def polygon_area(polygon: Sequence[Point2D]) -> float:
    """Signed shoelace area, positive for counter-clockwise polygons."""
    pts = np.asarray(polygon, dtype=float)
    if len(pts) < 3:
        return 0.0
    x, y = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


@dataclass
class ScanLine:
    """
    One horizontal line swept across a polygon's bounding box.

    intersections holds the boundary crossings ordered by x. Consecutive
    pairs (0, 1), (2, 3), ... enclose the polygon interior along the line.
    """

    start: Point2D
    end: Point2D
    intersections: List[Point2D] = field(default_factory=list)

    @property
    def y(self) -> float:
        return self.start[1]

    @property
    def length(self) -> float:
        return euclidean_distance(self.start, self.end)

    def interior_spans(self) -> List[Tuple[float, float]]:
        """x-ranges inside the polygon. A trailing unpaired crossing is ignored."""
        xs = [p[0] for p in self.intersections]
        return [(xs[j], xs[j + 1]) for j in range(0, len(xs) - 1, 2)]


def _crossings_at(y: float, edges_start: np.ndarray, edges_end: np.ndarray) -> List[Point2D]:
    x1, y1 = edges_start[:, 0], edges_start[:, 1]
    x2, y2 = edges_end[:, 0], edges_end[:, 1]

    # Half-open on edge end-points so a vertex on the line is counted once;
    # horizontal edges never match.
    crosses = ((y1 <= y) & (y < y2)) | ((y2 <= y) & (y < y1))
    if not np.any(crosses):
        return []

    t = (y - y1[crosses]) / (y2[crosses] - y1[crosses])
    xs = np.sort(x1[crosses] + t * (x2[crosses] - x1[crosses]))
    return [(float(x), y) for x in xs]


def generate_parallel_tracks(
    polygon: Sequence[Point2D],
    spacing: float,
    bounding_box: Optional[BoundingBox] = None,
) -> Optional[List[ScanLine]]:
    """
    Generate horizontal scan-lines `spacing` apart covering the polygon.

    Lines sit at y = min_y + spacing / 2 + k * spacing (y <= max_y) and span
    the whole bounding box in x, so all of them share the same start x and
    length.

    Args:
        polygon: Closed polygon as (x, y) points (last point not repeated).
        spacing: Distance between lines (the implement width).
        bounding_box: Precomputed bounding box, computed if omitted.

    Returns:
        List of ScanLine ordered by increasing y, or None if the polygon is
        too low for a single line.
    """
    if spacing <= 0:
        raise ValueError(f"spacing must be positive, got {spacing}")

    bbox = bounding_box if bounding_box is not None else get_bounding_box(polygon)
    first_y = bbox.min_y + spacing / 2.0
    if first_y > bbox.max_y:
        return None

    n_lines = int(math.floor((bbox.max_y - first_y) / spacing + 1e-9)) + 1

    pts = np.asarray(polygon, dtype=float)
    edges_start = pts
    edges_end = np.roll(pts, -1, axis=0)

    tracks: List[ScanLine] = []
    for k in range(n_lines):
        y = first_y + k * spacing
        tracks.append(
            ScanLine(
                start=(bbox.min_x, y),
                end=(bbox.max_x, y),
                intersections=_crossings_at(y, edges_start, edges_end),
            )
        )
    return tracks


# -----------------------------------------------------------------------------
# Polyline bookkeeping
# -----------------------------------------------------------------------------
@dataclass
class PolylineData:
    """Aggregate geometry of an open polyline."""

    length: float
    edge_lengths: List[float]
    headings: List[float]
    turn_angles: List[float]

    @property
    def max_turn(self) -> float:
        return max((abs(a) for a in self.turn_angles), default=0.0)


def calculate_polyline_data(points: Sequence[Point2D]) -> PolylineData:
    """
    Recompute length, edge headings and turn angles of a polyline.

    turn_angles[i] is the signed heading change at interior vertex i + 1.
    """
    if len(points) < 2:
        return PolylineData(0.0, [], [], [])

    pts = np.asarray(points, dtype=float)
    deltas = np.diff(pts, axis=0)
    edge_lengths = np.hypot(deltas[:, 0], deltas[:, 1])
    headings = np.arctan2(deltas[:, 1], deltas[:, 0])
    turns = [angle_diff(float(b), float(a)) for a, b in zip(headings[:-1], headings[1:])]

    return PolylineData(
        length=float(edge_lengths.sum()),
        edge_lengths=[float(v) for v in edge_lengths],
        headings=[float(v) for v in headings],
        turn_angles=turns,
    )
