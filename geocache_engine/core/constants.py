# ==============================================================================
# Файл: geocache_engine/core/constants.py
# Назначение: Игровые константы (сетка, экономика, формат сохранения).
# ==============================================================================
from __future__ import annotations
from typing import Dict, Tuple

# --- Сетка ---
TILE_DEGREES = 1e-4
GRID_ORIGIN: Tuple[float, float] = (0.0, 0.0)

# Стартовая точка игрока (аудитория в Oakes College)
START_POSITION: Tuple[float, float] = (36.98949379578401, -122.06277128548504)

# --- Экономика и генерация ---
NEIGHBORHOOD_SIZE = 20
CACHE_SPAWN_PROBABILITY = 0.1
MAX_INITIAL_COINS = 50
MOVEMENT_DISTANCE = 1e-4

# Суффикс ключа для начального количества монет: "i,j,initialCoins"
INITIAL_COINS_KEY = "initialCoins"

# --- Сохранение ---
GAME_STATE_KEY = "gameState"
SNAPSHOT_VERSION = 1
DEFAULT_SAVE_PATH = "saves/game_state.json"

# --- Направления движения: (d_lat, d_lng) на единицу дистанции ---
DIR_NORTH = "north"
DIR_SOUTH = "south"
DIR_EAST = "east"
DIR_WEST = "west"

DIRECTION_VECTORS: Dict[str, Tuple[int, int]] = {
    DIR_NORTH: (1, 0),
    DIR_SOUTH: (-1, 0),
    DIR_EAST: (0, 1),
    DIR_WEST: (0, -1),
}
