#!/usr/bin/env python3
"""
Plotting helpers for path finder results.

Draws, in caller (x, z) coordinates:
- the field boundary
- free and fruit-obstructed grid nodes
- spliced (off-grid) start / goal nodes
- fruit patches, when known
- the smoothed path
"""

from typing import Any, Iterable, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt

from ..obstacles.fruit import FruitPatch
from ..planning.grid import GridNode, NodeCollection
from .geometry import point_to_xy, point_to_xz


Point2D = Tuple[float, float]


def plot_grid_and_path(
    polygon: Sequence[Any],
    nodes: Optional[NodeCollection],
    path: Optional[Sequence[Point2D]],
    ax=None,
    title: Optional[str] = None,
    fruit_patches: Optional[Iterable[FruitPatch]] = None,
):
    """
    Plot a field, its grid and a path on a matplotlib axis.

    Args:
        polygon: Field boundary in caller coordinates.
        nodes: Node collection returned by find_path (internal coordinates).
        path: Path returned by find_path (caller coordinates) or None.
        ax: Axis to draw on; a new figure is created if None.
        title: Optional axis title.
        fruit_patches: Patches to outline, in caller coordinates.

    Returns:
        The matplotlib axis.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    boundary = np.array([point_to_xz(point_to_xy(p)) for p in polygon], dtype=float)
    closed = np.vstack([boundary, boundary[:1]])
    ax.plot(closed[:, 0], closed[:, 1], "k-", linewidth=1.5, label="Field boundary")

    for i, patch in enumerate(fruit_patches or []):
        state = patch.get_state()
        circle = plt.Circle(
            (state["x"], state["z"]),
            state["radius"],
            color="tab:orange",
            alpha=0.25,
            label="Fruit patch" if i == 0 else None,
        )
        ax.add_patch(circle)

    if nodes is not None and len(nodes) > 0:
        free = [point_to_xz(n.position) for n in nodes if isinstance(n, GridNode) and not n.obstructed]
        fruit = [point_to_xz(n.position) for n in nodes if isinstance(n, GridNode) and n.obstructed]
        spliced = [point_to_xz(n.position) for n in nodes.off_grid_nodes()]

        if free:
            pts = np.array(free)
            ax.scatter(pts[:, 0], pts[:, 1], s=6, c="tab:gray", label="Grid")
        if fruit:
            pts = np.array(fruit)
            ax.scatter(pts[:, 0], pts[:, 1], s=12, c="tab:orange", marker="x", label="Fruit")
        if spliced:
            pts = np.array(spliced)
            ax.scatter(pts[:, 0], pts[:, 1], s=60, c="tab:blue", marker="*", label="Start / goal")

    if path:
        pts = np.array(path, dtype=float)
        ax.plot(pts[:, 0], pts[:, 1], "g-", linewidth=2.5, label="Path")

    ax.set_aspect("equal")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("z [m]")
    ax.legend(loc="upper right")
    if title:
        ax.set_title(title)
    return ax
