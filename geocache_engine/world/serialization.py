# ==============================================================================
# Файл: geocache_engine/world/serialization.py
# Назначение: Контракты сохранения: мементо тайника и полный снапшот игры.
# ==============================================================================
from __future__ import annotations
import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.constants import SNAPSHOT_VERSION
from ..core.errors import SnapshotError
from ..core.types import Cache, Cell, LatLng


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


# --- Контракт 1: мементо одного тайника ---
def encode_memento(cache: Cache) -> str:
    """Компактный JSON без пробелов: {"i":0,"j":0,"numCoins":29}."""
    return json.dumps(
        {"i": cache.cell.i, "j": cache.cell.j, "numCoins": cache.coin_count},
        separators=(",", ":"),
    )


def decode_memento(memento: str) -> Cache:
    try:
        state = json.loads(memento)
    except (TypeError, json.JSONDecodeError) as e:
        raise SnapshotError(f"Broken cache memento: {memento!r}") from e
    if not isinstance(state, dict):
        raise SnapshotError(f"Cache memento must be an object: {memento!r}")
    i, j, coins = state.get("i"), state.get("j"), state.get("numCoins")
    if not (_is_int(i) and _is_int(j) and _is_int(coins)) or coins < 0:
        raise SnapshotError(f"Invalid cache memento fields: {memento!r}")
    return Cache(Cell(i, j), coins)


# --- Контракт 2: полный снапшот ---
@dataclass
class Snapshot:
    """
    Полное сохранённое состояние: игрок + все мементо.
    cache_states хранит порядок вставки (как Map в исходном формате).
    """

    version: int = SNAPSHOT_VERSION
    player_coins: int = 0
    cache_states: Dict[str, str] = field(default_factory=dict)
    player_path: List[LatLng] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "playerCoins": self.player_coins,
            "cacheStates": [[k, v] for k, v in self.cache_states.items()],
            "playerPath": [{"lat": p.lat, "lng": p.lng} for p in self.player_path],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload())

    @classmethod
    def from_payload(cls, data: Any) -> "Snapshot":
        """Строгий разбор; любая ошибка формата -> SnapshotError."""
        if not isinstance(data, dict):
            raise SnapshotError("Snapshot payload must be an object")

        # Сохранения без версии были записаны до появления поля
        version = data.get("version", SNAPSHOT_VERSION)
        if not _is_int(version) or version < 1 or version > SNAPSHOT_VERSION:
            raise SnapshotError(f"Unsupported snapshot version: {version!r}")

        coins = data.get("playerCoins", 0)
        if not _is_int(coins) or coins < 0:
            raise SnapshotError(f"Invalid playerCoins: {coins!r}")

        raw_states = data.get("cacheStates") or []
        if not isinstance(raw_states, list):
            raise SnapshotError("cacheStates must be a list")
        cache_states: Dict[str, str] = {}
        for entry in raw_states:
            if not (isinstance(entry, (list, tuple)) and len(entry) == 2):
                raise SnapshotError(f"Invalid cacheStates entry: {entry!r}")
            key, memento = entry
            if not isinstance(key, str) or not isinstance(memento, str):
                raise SnapshotError(f"Invalid cacheStates entry: {entry!r}")
            cache = decode_memento(memento)
            if cache.cell.key != key:
                raise SnapshotError(f"Memento key {key!r} does not match its cell")
            cache_states[key] = memento

        raw_path = data.get("playerPath") or []
        if not isinstance(raw_path, list):
            raise SnapshotError("playerPath must be a list")
        path: List[LatLng] = []
        for point in raw_path:
            if not isinstance(point, dict):
                raise SnapshotError(f"Invalid playerPath point: {point!r}")
            lat, lng = point.get("lat"), point.get("lng")
            if not (_is_number(lat) and _is_number(lng)):
                raise SnapshotError(f"Invalid playerPath point: {point!r}")
            try:
                lat, lng = float(lat), float(lng)
            except OverflowError as e:
                raise SnapshotError(f"Invalid playerPath point: {point!r}") from e
            # json.loads пропускает NaN и Infinity
            if not (math.isfinite(lat) and math.isfinite(lng)):
                raise SnapshotError(f"Non-finite playerPath point: {point!r}")
            path.append(LatLng(lat, lng))

        return cls(
            version=SNAPSHOT_VERSION,
            player_coins=coins,
            cache_states=cache_states,
            player_path=path,
        )

    @classmethod
    def from_json(cls, text: str) -> "Snapshot":
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
        return cls.from_payload(data)
