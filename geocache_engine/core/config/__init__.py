# ========================
# file: geocache_engine/core/config/__init__.py
# ========================
from .model import GameConfig
from .loader import load_config, deep_merge

__all__ = [
    "GameConfig",
    "load_config",
    "deep_merge",
]
