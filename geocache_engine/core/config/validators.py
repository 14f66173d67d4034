# ========================
# file: geocache_engine/core/config/validators.py
# ========================
from __future__ import annotations
import math
from typing import Any, Dict

from ..errors import ConfigValidationError

# Допуск при проверке, что 1 / tile_degrees целое
SCALE_TOLERANCE = 1e-6


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigValidationError(msg)


def _is_number(v: Any) -> bool:
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        return False
    try:
        return math.isfinite(v)
    except OverflowError:
        return False


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_pair(v: Any) -> bool:
    return (
        isinstance(v, (list, tuple))
        and len(v) == 2
        and all(_is_number(x) for x in v)
    )


def _number(cfg: Dict[str, Any], key: str) -> float:
    value = cfg.get(key)
    _require(_is_number(value), f"{key} must be a number, got {value!r}")
    return float(value)


def _integer(cfg: Dict[str, Any], key: str) -> int:
    value = cfg.get(key)
    _require(_is_int(value), f"{key} must be an integer, got {value!r}")
    return value


def is_integral_scale(tile_degrees: float) -> bool:
    """True, если в одном градусе целое число тайлов."""
    if not tile_degrees > 0.0:
        return False
    inv = 1.0 / tile_degrees
    return round(inv) >= 1 and abs(inv - round(inv)) <= SCALE_TOLERANCE * inv


def validate_dict(cfg: Dict[str, Any]) -> None:
    """Validate a merged config dict.

    Raises ConfigValidationError on the first failing check.
    """
    tile = _number(cfg, "tile_degrees")
    _require(tile > 0.0, "tile_degrees must be > 0")
    _require(
        is_integral_scale(tile),
        f"1 / tile_degrees must be a whole number, got {tile!r}",
    )
    _require(_is_pair(cfg.get("origin")), "origin must be a [lat, lng] pair")
    _require(
        _is_pair(cfg.get("start_position")),
        "start_position must be a [lat, lng] pair",
    )
    _require(
        _integer(cfg, "neighborhood_size") >= 0,
        "neighborhood_size must be >= 0",
    )

    p = _number(cfg, "spawn_probability")
    _require(0.0 <= p <= 1.0, "spawn_probability must be in [0,1]")

    _require(
        _integer(cfg, "max_initial_coins") >= 0,
        "max_initial_coins must be >= 0",
    )
    _require(
        _number(cfg, "movement_distance") > 0.0,
        "movement_distance must be > 0",
    )
    _require(
        isinstance(cfg.get("state_key"), str) and cfg["state_key"],
        "state_key must be non-empty string",
    )
    _require(
        isinstance(cfg.get("save_path"), str) and cfg["save_path"],
        "save_path must be non-empty string",
    )
