# ==============================================================================
# Файл: geocache_engine/world/cache_store.py
# Назначение: Хранилище тайников: генерация по клеткам, восстановление из
# мементо и перенос монет между тайником и игроком.
# ==============================================================================
from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from ..core.constants import CACHE_SPAWN_PROBABILITY, MAX_INITIAL_COINS
from ..core.types import Cache, Cell
from ..core.utils.rng import LuckSource, SeededValueSource, initial_coins_key, spawn_key
from .serialization import decode_memento, encode_memento

if TYPE_CHECKING:
    from ..game_logic.player import Player

logger = logging.getLogger(__name__)


class CacheWorldStore:
    """
    Знает только, какие клетки уже материализованы или сохранены.
    Какое окно сейчас видно игроку, хранилище не знает: оно отвечает
    на запросы по отдельным клеткам.
    """

    def __init__(
        self,
        value_source: Optional[SeededValueSource] = None,
        spawn_probability: float = CACHE_SPAWN_PROBABILITY,
        max_initial_coins: int = MAX_INITIAL_COINS,
    ):
        self.value_source = value_source or LuckSource()
        self.spawn_probability = spawn_probability
        self.max_initial_coins = max_initial_coins
        # "i:j" -> мементо; порядок вставки сохраняется
        self._mementos: Dict[str, str] = {}
        self._caches: Dict[Cell, Cache] = {}

    # --- Генерация и восстановление ---

    def should_spawn(self, cell: Cell) -> bool:
        return self.value_source.value_for(spawn_key(cell.i, cell.j)) < self.spawn_probability

    def initial_coins(self, cell: Cell) -> int:
        luck = self.value_source.value_for(initial_coins_key(cell.i, cell.j))
        return math.floor(luck * self.max_initial_coins)

    def spawn_or_restore(self, cell: Cell) -> Optional[Cache]:
        cache = self._caches.get(cell)
        if cache is not None:
            return cache

        memento = self._mementos.get(cell.key)
        if memento is not None:
            restored = decode_memento(memento)
            cache = Cache(cell, restored.coin_count)
            self._caches[cell] = cache
            logger.debug("Restored cache %s with %d coins", cell.key, cache.coin_count)
            return cache

        if not self.should_spawn(cell):
            return None

        cache = Cache(cell, self.initial_coins(cell))
        self._caches[cell] = cache
        self._write_memento(cache)
        logger.debug("Spawned cache %s with %d coins", cell.key, cache.coin_count)
        return cache

    def _write_memento(self, cache: Cache) -> None:
        self._mementos[cache.cell.key] = encode_memento(cache)

    def _lookup(self, cell: Cell) -> Optional[Cache]:
        """Материализованный тайник или восстановленный из мементо; новых не создаёт."""
        cache = self._caches.get(cell)
        if cache is None and cell.key in self._mementos:
            cache = self.spawn_or_restore(cell)
        return cache

    # --- Перенос монет ---

    def collect(self, cell: Cell, player: "Player") -> bool:
        cache = self._lookup(cell)
        if cache is None or cache.coin_count <= 0:
            return False
        cache.coin_count -= 1
        player.record_collect()
        self._write_memento(cache)
        logger.info("Collected coin from %s (cache=%d, player=%d)",
                    cell.key, cache.coin_count, player.coins)
        return True

    def deposit(self, cell: Cell, player: "Player") -> bool:
        cache = self._lookup(cell)
        if cache is None or player.coins <= 0:
            return False
        player.record_deposit()
        cache.coin_count += 1
        self._write_memento(cache)
        logger.info("Deposited coin into %s (cache=%d, player=%d)",
                    cell.key, cache.coin_count, player.coins)
        return True

    # --- Доступ к состоянию ---

    def get_cache(self, cell: Cell) -> Optional[Cache]:
        return self._caches.get(cell)

    def memento_for(self, cell: Cell) -> Optional[str]:
        return self._mementos.get(cell.key)

    def mementos(self) -> Dict[str, str]:
        return dict(self._mementos)

    def materialized(self) -> List[Cache]:
        return list(self._caches.values())

    def load_mementos(self, mementos: Mapping[str, str]) -> List[Cache]:
        """
        Заменяет все мементо сохранёнными и сразу материализует их тайники,
        чтобы вид мог их показать, не дожидаясь обхода окрестности.
        """
        self.clear()
        self._mementos.update(mementos)
        restored: List[Cache] = []
        for key in self._mementos:
            cache = self.spawn_or_restore(Cell.from_key(key))
            if cache is not None:
                restored.append(cache)
        return restored

    def clear(self) -> None:
        self._mementos.clear()
        self._caches.clear()

    def total_coins(self) -> int:
        return sum(decode_memento(m).coin_count for m in self._mementos.values())
