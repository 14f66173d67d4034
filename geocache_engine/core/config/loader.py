# ========================
# file: geocache_engine/core/config/loader.py
# ========================
from __future__ import annotations
import copy
import json
import logging
import os
from typing import Any, Dict, Mapping, Union

from ..errors import ConfigError
from .model import GameConfig
from .validators import validate_dict

logger = logging.getLogger(__name__)


def deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursive dict merge. Lists/tuples are replaced, not merged element-wise."""
    out = copy.deepcopy(base)
    for k, v in overrides.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out


def _load_json_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object")
    return data


def load_config(
    source: Union[str, Dict[str, Any], None] = None,
    overrides: Mapping[str, Any] | None = None,
) -> GameConfig:
    """Load a game config: defaults <- source <- overrides, then validate.

    Args:
        source: None for defaults, a path to a JSON file, or a raw dict
        overrides: mapping of ad-hoc overrides (last layer)
    Returns:
        GameConfig (immutable dataclass)
    """
    if source is None:
        data: Dict[str, Any] = {}
    elif isinstance(source, str):
        if not os.path.isfile(source):
            raise ConfigError(f"Config file '{source}' not found")
        data = _load_json_file(source)
    elif isinstance(source, dict):
        data = source
    else:
        raise TypeError("source must be None, str path or dict")

    defaults = GameConfig().to_dict()
    unknown = set(data) - set(defaults)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", sorted(unknown))
        data = {k: v for k, v in data.items() if k in defaults}

    merged = deep_merge(defaults, data)
    if overrides:
        merged = deep_merge(merged, overrides)

    validate_dict(merged)

    return GameConfig(
        tile_degrees=float(merged["tile_degrees"]),
        origin=(float(merged["origin"][0]), float(merged["origin"][1])),
        start_position=(
            float(merged["start_position"][0]),
            float(merged["start_position"][1]),
        ),
        neighborhood_size=int(merged["neighborhood_size"]),
        spawn_probability=float(merged["spawn_probability"]),
        max_initial_coins=int(merged["max_initial_coins"]),
        movement_distance=float(merged["movement_distance"]),
        state_key=str(merged["state_key"]),
        save_path=str(merged["save_path"]),
    )
