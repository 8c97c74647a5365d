#!/usr/bin/env python3
"""
Fruit (standing crop) oracles for the path finder.

The grid builder asks an oracle whether the area around a sample location
currently has fruit:

    oracle.has_obstacle(x, y, width) -> bool

Queries arrive in the internal (x, y) convention. Implementations:
- NoFruit:     empty field (stubble, already harvested)
- RandomFruit: standalone stand-in for the simulation state
- FruitField:  fixed crop patches given in caller (x, z) coordinates
"""

import random
from typing import Dict, Iterable, List, Optional

import numpy as np


class FruitOracle:
    """
    Base class for fruit oracles.

    Oracles are treated as pure queries: asking twice about the same
    location must not change the answer of any other query.
    """

    def has_obstacle(self, x: float, y: float, width: float) -> bool:
        """
        Does the area of `width` around (x, y) have fruit?

        Args:
            x, y: Sample location (internal convention, y = -z)
            width: Implement width (meters)
        """
        raise NotImplementedError


class NoFruit(FruitOracle):
    """Oracle for a field without any standing crop."""

    def has_obstacle(self, x: float, y: float, width: float) -> bool:
        return False


class RandomFruit(FruitOracle):
    """
    Random fruit for testing outside the simulation.

    Each query independently reports fruit with the given probability.
    A private RNG keeps runs reproducible for a fixed seed without touching
    the global `random` state.
    """

    def __init__(self, probability: float = 0.2, seed: Optional[int] = None):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be in [0, 1], got {probability}")
        self.probability = probability
        self.rng = random.Random(seed)

    def has_obstacle(self, x: float, y: float, width: float) -> bool:
        return self.rng.random() < self.probability


class FruitPatch:
    """
    Circular patch of standing crop.

    Characteristics:
    - Center given in caller coordinates (x, z)
    - Radius in meters
    """

    def __init__(self, x: float, z: float, radius: float):
        if radius < 0:
            raise ValueError(f"radius must be non-negative, got {radius}")
        self.pos = np.array([x, z], dtype=float)
        self.radius = float(radius)

    def overlaps(self, x: float, z: float, clearance: float) -> bool:
        """True if a circle of `clearance` around (x, z) touches the patch."""
        d = float(np.hypot(x - self.pos[0], z - self.pos[1]))
        return d < self.radius + clearance

    def get_state(self) -> dict:
        return {"x": float(self.pos[0]), "z": float(self.pos[1]), "radius": self.radius}


class FruitField(FruitOracle):
    """
    Oracle backed by a fixed list of fruit patches.

    Like the simulation lookup, the query is converted back to caller
    coordinates (x, -y) and the implement footprint is approximated by a
    circle of radius width / 2.
    """

    def __init__(self, patches: Iterable[FruitPatch] = ()):
        self.patches: List[FruitPatch] = list(patches)

    def has_obstacle(self, x: float, y: float, width: float) -> bool:
        z = -y
        clearance = width / 2.0
        return any(patch.overlaps(x, z, clearance) for patch in self.patches)


def fruit_field_from_config(entries: Optional[Iterable[Dict]]) -> FruitField:
    """
    Build a FruitField from config dicts with 'x', 'z', 'radius' keys.

    Raises:
        ValueError: If an entry is not a dict or misses a key.
    """
    patches = []
    for i, entry in enumerate(entries or []):
        if not isinstance(entry, dict) or not all(k in entry for k in ("x", "z", "radius")):
            raise ValueError(
                f"Fruit patch {i} must be a dict with 'x', 'z', 'radius'. Got: {entry!r}"
            )
        patches.append(FruitPatch(float(entry["x"]), float(entry["z"]), float(entry["radius"])))
    return FruitField(patches)
