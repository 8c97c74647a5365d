"""
field_pathfinder

Fruit-avoiding path finder for relocating a vehicle with a wide implement
between two points inside a field.
"""

from .planning import InvalidInputError, PathFinder, find_path

__all__ = [
    "InvalidInputError",
    "PathFinder",
    "find_path",
]
