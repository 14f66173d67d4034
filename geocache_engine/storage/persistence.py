# ==============================================================================
# Файл: geocache_engine/storage/persistence.py
# Назначение: Сохранение и восстановление мира и игрока через KeyValueStore.
# ==============================================================================
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional

from ..core.constants import GAME_STATE_KEY
from ..core.errors import SnapshotError
from ..core.types import Cache, LatLng
from ..world.cache_store import CacheWorldStore
from ..world.serialization import Snapshot
from .kv_store import KeyValueStore

if TYPE_CHECKING:
    from ..game_logic.player import Player

logger = logging.getLogger(__name__)


class PersistenceManager:
    def __init__(self, kv_store: KeyValueStore, state_key: str = GAME_STATE_KEY):
        self.kv_store = kv_store
        self.state_key = state_key

    def save(self, player: "Player", store: CacheWorldStore) -> Snapshot:
        snapshot = Snapshot(
            player_coins=player.coins,
            cache_states=store.mementos(),
            player_path=list(player.path),
        )
        self.kv_store.set(self.state_key, snapshot.to_json())
        return snapshot

    def load(self) -> Optional[Snapshot]:
        """Отсутствующее или битое сохранение -> None, без исключений."""
        raw = self.kv_store.get(self.state_key)
        if raw is None:
            return None
        try:
            return Snapshot.from_json(raw)
        except SnapshotError as e:
            logger.warning("Ignoring unreadable saved game: %s", e)
            return None

    def restore(
        self,
        snapshot: Snapshot,
        player: "Player",
        store: CacheWorldStore,
        default_position: LatLng,
    ) -> List[Cache]:
        player.restore(snapshot.player_coins, snapshot.player_path, default_position)
        caches = store.load_mementos(snapshot.cache_states)
        logger.info(
            "Restored game: %d coins, %d path points, %d caches",
            player.coins, len(player.path), len(caches),
        )
        return caches

    def reset(self, player: "Player", store: CacheWorldStore, default_position: LatLng) -> None:
        self.kv_store.clear()
        store.clear()
        player.reset(default_position)
        logger.info("Game state reset")
