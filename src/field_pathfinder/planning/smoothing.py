"""
Path Smoothing Module for the field path finder

Corner cutting for grid paths so a vehicle towing a wide implement does not
have to turn on the spot at every grid node.

Usage:
    from field_pathfinder.planning.smoothing import smooth

    smoothed = smooth(points, max_angle=math.radians(30), min_passes=1, force=True)
"""

from typing import List, Sequence, Tuple

import numpy as np

from ..utils.geometry import calculate_polyline_data


# Type aliases
WorldPoint = Tuple[float, float]

# Chaikin ratio: cut points sit this far from the vertex along each edge.
CUT_RATIO = 0.25


def _drop_duplicates(points: Sequence[WorldPoint], eps: float = 1e-9) -> List[WorldPoint]:
    """Remove consecutive duplicate points (zero-length edges have no heading)."""
    result: List[WorldPoint] = []
    for p in points:
        if result and abs(p[0] - result[-1][0]) < eps and abs(p[1] - result[-1][1]) < eps:
            continue
        result.append((float(p[0]), float(p[1])))
    return result


def _cut_sharp_corners(points: List[WorldPoint], max_angle: float) -> Tuple[List[WorldPoint], bool]:
    """
    One Chaikin pass over the corners turning more than max_angle.

    Returns:
        (new points, whether any corner was cut)
    """
    data = calculate_polyline_data(points)
    pts = np.asarray(points, dtype=float)

    smoothed: List[WorldPoint] = [points[0]]
    cut = False
    for i in range(1, len(points) - 1):
        if abs(data.turn_angles[i - 1]) <= max_angle:
            smoothed.append(points[i])
            continue
        p = pts[i]
        q = p + CUT_RATIO * (pts[i - 1] - p)
        r = p + CUT_RATIO * (pts[i + 1] - p)
        smoothed.append((float(q[0]), float(q[1])))
        smoothed.append((float(r[0]), float(r[1])))
        cut = True
    smoothed.append(points[-1])
    return smoothed, cut


def smooth(
    points: Sequence[WorldPoint],
    max_angle: float,
    min_passes: int = 1,
    force: bool = False,
    max_passes: int = 5,
    min_points: int = 5,
) -> List[WorldPoint]:
    """
    Smooth a path by cutting corners sharper than max_angle.

    Only corners whose heading change exceeds max_angle are cut, so straight
    stretches keep their original vertices. The first and last points never
    move.

    Args:
        points: Path as (x, y) points
        max_angle: Largest turn (radians) left uncut at a vertex
        min_passes: Passes to run at least
        force: Smooth even paths shorter than min_points
        max_passes: Upper bound on passes while sharp corners remain
        min_points: Paths with fewer points are left alone unless forced

    Returns:
        Smoothed path as list of (x, y) points
    """
    pts = _drop_duplicates(points)
    if len(pts) < 3:
        return pts
    if len(pts) < min_points and not force:
        return pts

    limit = max(min_passes, max_passes, 1)
    passes = 0
    while passes < limit:
        pts, cut = _cut_sharp_corners(pts, max_angle)
        passes += 1
        if passes >= min_passes and not cut:
            break

    return pts
