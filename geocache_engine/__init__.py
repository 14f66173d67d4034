# ==============================================================================
# Файл: geocache_engine/__init__.py
# Назначение: Ядро игры "Collect Coins!": сетка, тайники, игрок, сохранения.
# ==============================================================================
from .core.config import GameConfig, load_config
from .core.types import Cache, Cell, CoinId, LatLng
from .game_logic.world import GameWorld
from .storage.kv_store import JsonFileStore, MemoryStore

__all__ = [
    "GameConfig",
    "load_config",
    "Cache",
    "Cell",
    "CoinId",
    "LatLng",
    "GameWorld",
    "JsonFileStore",
    "MemoryStore",
]
