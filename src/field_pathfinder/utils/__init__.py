"""
Utility subpackage for field_pathfinder.

Contains small, reusable geometry helpers shared by the grid builder,
the smoother and the path finder.
"""

from .geometry import (
    BoundingBox,
    PolylineData,
    ScanLine,
    calculate_polyline_data,
    euclidean_distance,
    generate_parallel_tracks,
    get_bounding_box,
    point_to_xy,
    point_to_xz,
    points_to_xy,
    points_to_xz,
    polygon_area,
    squared_distance,
    wrap_to_pi,
)

__all__ = [
    "BoundingBox",
    "PolylineData",
    "ScanLine",
    "calculate_polyline_data",
    "euclidean_distance",
    "generate_parallel_tracks",
    "get_bounding_box",
    "point_to_xy",
    "point_to_xz",
    "points_to_xy",
    "points_to_xz",
    "polygon_area",
    "squared_distance",
    "wrap_to_pi",
]
