from __future__ import annotations

import copy
from pathlib import Path

import yaml


DEFAULT_PATHFINDER_CONFIG = {
    "neighbor_distance_factor": 1.5,
    "smoothing": {
        "max_turn_angle_deg": 30.0,
        "min_passes": 1,
        "max_passes": 5,
        "min_points": 5,
    },
    "standalone_fruit": {
        "probability": 0.2,
        "seed": None,
    },
    "verbose": False,
}


def _get_config_path(filename: str) -> Path:
    """
    Find a config file shipped with the package.

    Layout:
      <site-packages or src>/field_pathfinder/config/<filename>
    """
    here = Path(__file__).resolve()
    return here.parent / "config" / filename


def load_raw_yaml(path: str | Path) -> dict:
    """
    Load and return a whole YAML file as a raw dictionary (no validation).
    Useful for debugging, introspection, or listing all available fields.
    """
    config_path = Path(path)
    with config_path.open("r") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected dict in {config_path}, got {type(data).__name__}")
    return data


def _merge(defaults: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_pathfinder_config(cfg: dict) -> dict:
    """
    Fill defaults into a (partial) pathfinder config section and validate it.

    Raises:
        ValueError: If a value is out of range or of the wrong type.
    """
    if not isinstance(cfg, dict):
        raise ValueError(f"Expected dict for pathfinder config, got {type(cfg).__name__}")

    merged = _merge(DEFAULT_PATHFINDER_CONFIG, cfg)

    for section in ("smoothing", "standalone_fruit"):
        if not isinstance(merged[section], dict):
            raise ValueError(
                f"'{section}' must be a mapping. Got: {merged[section]!r}"
            )

    factor = merged["neighbor_distance_factor"]
    if not isinstance(factor, (int, float)) or factor <= 0:
        raise ValueError(f"'neighbor_distance_factor' must be a positive number. Got: {factor!r}")

    smoothing = merged["smoothing"]
    angle = smoothing["max_turn_angle_deg"]
    if not isinstance(angle, (int, float)) or not 0 < angle < 180:
        raise ValueError(f"'smoothing.max_turn_angle_deg' must be in (0, 180). Got: {angle!r}")
    for key in ("min_passes", "max_passes", "min_points"):
        value = smoothing[key]
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValueError(f"'smoothing.{key}' must be a non-negative int. Got: {value!r}")

    fruit = merged["standalone_fruit"]
    probability = fruit["probability"]
    if not isinstance(probability, (int, float)) or not 0.0 <= probability <= 1.0:
        raise ValueError(
            f"'standalone_fruit.probability' must be in [0, 1]. Got: {probability!r}"
        )
    if fruit["seed"] is not None and not isinstance(fruit["seed"], int):
        raise ValueError(f"'standalone_fruit.seed' must be an int or null. Got: {fruit['seed']!r}")

    return merged


def load_pathfinder_config(path: str | Path | None = None) -> dict:
    """
    Load path finder settings from pathfinder.yaml and return a validated dict.

    Args:
        path:
            Optional explicit path to a YAML file with a top-level
            'pathfinder' section. If None, the packaged default is used.

    Returns:
        dict with every key of DEFAULT_PATHFINDER_CONFIG filled in.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        KeyError: If the 'pathfinder' section is missing.
        ValueError: If a value is invalid.
    """
    config_path = Path(path) if path is not None else _get_config_path("pathfinder.yaml")

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data = load_raw_yaml(config_path)
    if "pathfinder" not in data:
        raise KeyError(f"Section 'pathfinder' not found in {config_path}")

    return validate_pathfinder_config(data["pathfinder"] or {})


def _validate_point(field_name: str, key: str, point) -> None:
    if not isinstance(point, dict) or not all(k in point for k in ("x", "z")):
        raise ValueError(
            f"Field '{field_name}': '{key}' must be a dict with 'x', 'z' keys. Got: {point!r}"
        )


def load_field_config(
    field_name: str = "square_100",
    path: str | Path | None = None,
) -> dict:
    """
    Load one field from fields.yaml and return a validated dict.

    Args:
        field_name:
            Name of the field section to load (e.g. "square_100", "l_shape").
        path:
            Optional explicit path to fields.yaml. If None, the packaged
            sample fields are used.

    Returns:
        dict: {
            "width": float,
            "boundary": [{"x": float, "z": float}, ...],
            "start": {"x": float, "z": float} (optional),
            "goal": {"x": float, "z": float} (optional),
            "fruit": [{"x": float, "z": float, "radius": float}, ...]
        }

    Raises:
        FileNotFoundError: If fields.yaml doesn't exist.
        KeyError: If field_name not found or required keys missing.
        ValueError: If YAML structure is invalid.
    """
    config_path = Path(path) if path is not None else _get_config_path("fields.yaml")

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data = load_raw_yaml(config_path)

    if field_name not in data:
        available = list(data.keys())
        raise KeyError(
            f"Field '{field_name}' not found in {config_path}. "
            f"Available fields: {available}"
        )

    field_cfg = data[field_name]
    if not isinstance(field_cfg, dict):
        raise ValueError(
            f"Field '{field_name}' must be a dict, got {type(field_cfg).__name__}"
        )

    required_keys = {"boundary", "width"}
    missing_keys = required_keys - set(field_cfg.keys())
    if missing_keys:
        raise KeyError(f"Field '{field_name}' missing required keys: {missing_keys}")

    boundary = field_cfg["boundary"]
    if not isinstance(boundary, list):
        raise ValueError(
            f"Field '{field_name}': 'boundary' must be a list, got {type(boundary).__name__}"
        )
    for i, point in enumerate(boundary):
        _validate_point(field_name, f"boundary[{i}]", point)

    for key in ("start", "goal"):
        if field_cfg.get(key) is not None:
            _validate_point(field_name, key, field_cfg[key])

    field_cfg.setdefault("fruit", [])
    if field_cfg["fruit"] is None:
        field_cfg["fruit"] = []
    if not isinstance(field_cfg["fruit"], list):
        raise ValueError(
            f"Field '{field_name}': 'fruit' must be a list, got {type(field_cfg['fruit']).__name__}"
        )
    for i, patch in enumerate(field_cfg["fruit"]):
        if not isinstance(patch, dict) or not all(k in patch for k in ("x", "z", "radius")):
            raise ValueError(
                f"Field '{field_name}': 'fruit[{i}]' must be a dict with 'x', 'z', 'radius'. "
                f"Got: {patch!r}"
            )
        if not isinstance(patch["radius"], (int, float)) or patch["radius"] < 0:
            raise ValueError(
                f"Field '{field_name}': 'fruit[{i}].radius' must be a non-negative number. "
                f"Got: {patch['radius']!r}"
            )

    return field_cfg
