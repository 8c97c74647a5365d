#!/usr/bin/env python3
"""
Plan a fruit-free path across a sample field from fields.yaml.

Examples:
    plan_path --field l_shape --plot l_shape.png
    plan_path --field square_100 --fruit random --seed 3 --verbose
    plan_path --field square_100 --start 0 0 --goal 50 90 --width 8
"""

import argparse
import sys
from typing import List, Optional

from .config_loader import load_field_config, load_pathfinder_config
from .obstacles import FruitField, FruitOracle, NoFruit, RandomFruit, fruit_field_from_config
from .planning import InvalidInputError, PathFinder
from .utils.geometry import calculate_polyline_data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find a fruit-free path inside a field.")
    parser.add_argument("--field", default="square_100", help="Field name in fields.yaml")
    parser.add_argument("--fields-file", default=None, help="Alternative fields.yaml")
    parser.add_argument("--config", default=None, help="Alternative pathfinder.yaml")
    parser.add_argument("--start", nargs=2, type=float, metavar=("X", "Z"), help="Override start")
    parser.add_argument("--goal", nargs=2, type=float, metavar=("X", "Z"), help="Override goal")
    parser.add_argument("--width", type=float, default=None, help="Override implement width (m)")
    parser.add_argument(
        "--fruit",
        choices=["none", "random", "field"],
        default="field",
        help="Fruit source: none, random stand-in, or the field's patches",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --fruit random")
    parser.add_argument("--plot", default=None, metavar="FILE", help="Save a PNG of grid and path")
    parser.add_argument("--verbose", action="store_true", help="Print planner diagnostics")
    return parser


def _build_oracle(args, config: dict, field_cfg: dict) -> FruitOracle:
    if args.fruit == "none":
        return NoFruit()
    if args.fruit == "random":
        fruit_cfg = config["standalone_fruit"]
        seed = args.seed if args.seed is not None else fruit_cfg["seed"]
        return RandomFruit(probability=fruit_cfg["probability"], seed=seed)
    return fruit_field_from_config(field_cfg["fruit"])


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_pathfinder_config(args.config)
        field_cfg = load_field_config(args.field, args.fields_file)
        oracle = _build_oracle(args, config, field_cfg)
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error loading config: {e}")
        return 1

    if args.verbose:
        config["verbose"] = True

    start = tuple(args.start) if args.start else field_cfg.get("start")
    goal = tuple(args.goal) if args.goal else field_cfg.get("goal")
    width = args.width if args.width is not None else field_cfg["width"]
    if start is None or goal is None:
        print(f"Field '{args.field}' has no start/goal, pass --start and --goal")
        return 2

    finder = PathFinder(config=config, oracle=oracle)
    try:
        path, grid = finder.find_path(start, goal, field_cfg["boundary"], width)
    except InvalidInputError as e:
        print(f"Invalid input: {e}")
        return 2

    print(f"=== Field: {args.field} (width {width:.1f} m) ===")
    print(f"Grid nodes: {len(grid)} ({sum(n.obstructed for n in grid)} with fruit)")

    if path is None:
        print("No path found.")
    else:
        length = calculate_polyline_data(path).length
        print(f"Path: {len(path)} points, {length:.1f} m")
        for x, z in path:
            print(f"  ({x:8.2f}, {z:8.2f})")

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")  # do not open a GUI window
        import matplotlib.pyplot as plt

        from .utils.visualization import plot_grid_and_path

        patches = oracle.patches if isinstance(oracle, FruitField) else None
        ax = plot_grid_and_path(
            field_cfg["boundary"], grid, path, title=f"Path finder: {args.field}", fruit_patches=patches
        )
        ax.figure.savefig(args.plot)
        plt.close(ax.figure)
        print(f"Saved plot to {args.plot}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
