"""YAML configuration loader for the physics engine."""

from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from avatar_physics.core.types import PhysicsConfig

CONFIG_FIELDS = tuple(f.name for f in fields(PhysicsConfig))


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Load configuration dictionary from YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        Parsed configuration dictionary (empty for an empty file)
    """
    path = Path(path)
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def physics_config_from_dict(config: Mapping[str, Any]) -> PhysicsConfig:
    """Create a physics configuration from a dictionary.

    Args:
        config: Mapping with an optional top-level 'physics' key

    Returns:
        Configuration; omitted fields keep their defaults

    Raises:
        ValueError: On unknown keys or invalid values
    """
    physics = config.get("physics", config)
    if not isinstance(physics, Mapping):
        raise ValueError(f"Physics config must be a mapping, got {type(physics).__name__}")

    unknown = sorted(set(physics) - set(CONFIG_FIELDS))
    if unknown:
        raise ValueError(f"Unknown physics config keys: {', '.join(unknown)}")

    values = {}
    for name in CONFIG_FIELDS:
        if name not in physics:
            continue
        try:
            values[name] = float(physics[name])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for '{name}': {physics[name]!r}") from exc
    return PhysicsConfig(**values)


def load_physics_config(path: Union[str, Path]) -> PhysicsConfig:
    """Load physics configuration from YAML file.

    Args:
        path: Path to configuration file

    Returns:
        Loaded configuration
    """
    return physics_config_from_dict(load_config_file(path))


def save_physics_config(config: PhysicsConfig, path: Union[str, Path]) -> None:
    """Save physics configuration to YAML file.

    Args:
        config: Configuration to save
        path: Output file path
    """
    path = Path(path)
    with open(path, "w") as f:
        yaml.dump({"physics": asdict(config)}, f, default_flow_style=False, sort_keys=False)
