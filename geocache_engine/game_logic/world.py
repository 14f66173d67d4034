# ==============================================================================
# Файл: geocache_engine/game_logic/world.py
# Назначение: Фасад игры для слоя отображения. Вид вызывает только эти
# методы и рисует то, что они возвращают.
# ==============================================================================
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from ..core.config import GameConfig
from ..core.grid import GridMapper
from ..core.types import Cache, Cell
from ..core.utils.rng import SeededValueSource
from ..storage.kv_store import KeyValueStore
from ..storage.persistence import PersistenceManager
from ..world.cache_store import CacheWorldStore
from ..world.serialization import Snapshot
from .player import Player

logger = logging.getLogger(__name__)


class GameWorld:
    def __init__(
        self,
        config: GameConfig,
        kv_store: KeyValueStore,
        value_source: Optional[SeededValueSource] = None,
    ):
        self.config = config
        self.grid = GridMapper(config.tile_degrees, config.origin)
        self.store = CacheWorldStore(
            value_source,
            spawn_probability=config.spawn_probability,
            max_initial_coins=config.max_initial_coins,
        )
        self.player = Player(position=config.start_latlng, step=config.movement_distance)
        self.persistence = PersistenceManager(kv_store, config.state_key)

    # --- Жизненный цикл ---

    def start(self) -> List[Cache]:
        """Подгружает сохранение (если есть) и обходит окрестность игрока."""
        self.load()
        return self.refresh_neighborhood()

    @property
    def current_cell(self) -> Cell:
        return self.grid.cell_at(self.player.position)

    def _sweep(self) -> List[Cache]:
        caches = []
        for cell in self.grid.neighborhood(self.current_cell, self.config.neighborhood_size):
            cache = self.store.spawn_or_restore(cell)
            if cache is not None:
                caches.append(cache)
        return caches

    def refresh_neighborhood(self) -> List[Cache]:
        """Тайники в окне вокруг игрока; новые мементо сразу сохраняются."""
        before = len(self.store.mementos())
        caches = self._sweep()
        if len(self.store.mementos()) != before:
            self.save()
        return caches

    # --- Действия игрока ---

    def spawn_or_restore(self, cell: Cell) -> Optional[Cache]:
        before = self.store.memento_for(cell)
        cache = self.store.spawn_or_restore(cell)
        if cache is not None and before is None:
            self.save()
        return cache

    def collect(self, cell: Cell) -> bool:
        ok = self.store.collect(cell, self.player)
        if ok:
            self.save()
        return ok

    def deposit(self, cell: Cell) -> bool:
        ok = self.store.deposit(cell, self.player)
        if ok:
            self.save()
        return ok

    def move(self, direction: str, distance: Optional[float] = None) -> List[Cache]:
        self.player.move(direction, distance)
        logger.debug("Player moved %s to %s", direction, self.player.position)
        self.save()
        return self.refresh_neighborhood()

    # --- Сохранение ---

    def save(self) -> Snapshot:
        return self.persistence.save(self.player, self.store)

    def load(self) -> Optional[Snapshot]:
        snapshot = self.persistence.load()
        if snapshot is None:
            return None
        self.persistence.restore(snapshot, self.player, self.store, self.config.start_latlng)
        return snapshot

    def reset(self) -> List[Cache]:
        self.persistence.reset(self.player, self.store, self.config.start_latlng)
        caches = self._sweep()
        self.save()
        return caches

    # --- Для отображения ---

    def total_coins(self) -> int:
        return self.player.coins + self.store.total_coins()

    def get_render_state(self) -> Dict[str, Any]:
        """
        Всё, что рисует вид: игрок, путь, тайники и прямоугольники их тайлов
        (юго-западный и северо-восточный углы).
        """
        caches = self.store.materialized()
        return {
            "player_coins": self.player.coins,
            "player_position": self.player.position,
            "path": list(self.player.path),
            "visited_cells": self.grid.cells_for_path(self.player.path),
            "current_cell": self.current_cell,
            "caches": caches,
            "tiles": {c.cell: self.grid.cell_bounds(c.cell) for c in caches},
        }
