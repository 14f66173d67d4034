from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..constants import (
    CACHE_SPAWN_PROBABILITY, DEFAULT_SAVE_PATH, GAME_STATE_KEY, GRID_ORIGIN,
    MAX_INITIAL_COINS, MOVEMENT_DISTANCE, NEIGHBORHOOD_SIZE, START_POSITION,
    TILE_DEGREES,
)
from ..types import LatLng


@dataclass(frozen=True)
class GameConfig:
    tile_degrees: float = TILE_DEGREES
    origin: Tuple[float, float] = GRID_ORIGIN
    start_position: Tuple[float, float] = START_POSITION
    neighborhood_size: int = NEIGHBORHOOD_SIZE
    spawn_probability: float = CACHE_SPAWN_PROBABILITY
    max_initial_coins: int = MAX_INITIAL_COINS
    movement_distance: float = MOVEMENT_DISTANCE
    state_key: str = GAME_STATE_KEY
    save_path: str = DEFAULT_SAVE_PATH

    @property
    def start_latlng(self) -> LatLng:
        return LatLng(*self.start_position)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tile_degrees": self.tile_degrees,
            "origin": list(self.origin),
            "start_position": list(self.start_position),
            "neighborhood_size": self.neighborhood_size,
            "spawn_probability": self.spawn_probability,
            "max_initial_coins": self.max_initial_coins,
            "movement_distance": self.movement_distance,
            "state_key": self.state_key,
            "save_path": self.save_path,
        }
