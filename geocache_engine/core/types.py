# geocache_engine/core/types.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Cell:
    """Дискретный адрес клетки сетки (i - по широте, j - по долготе)."""

    i: int
    j: int

    @property
    def key(self) -> str:
        """Ключ клетки в карте мементо: "i:j"."""
        return f"{self.i}:{self.j}"

    @classmethod
    def from_key(cls, key: str) -> "Cell":
        i_str, j_str = key.split(":")
        return cls(int(i_str), int(j_str))


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    def offset(self, d_lat: float, d_lng: float) -> "LatLng":
        return LatLng(self.lat + d_lat, self.lng + d_lng)


@dataclass(frozen=True)
class CoinId:
    """Уникальное имя монеты внутри тайника."""

    i: int
    j: int
    serial: int

    def __str__(self) -> str:
        return f"{self.i}:{self.j}#{self.serial}"


@dataclass
class Cache:
    """Тайник с монетами, привязанный к одной клетке."""

    cell: Cell
    coin_count: int = 0

    def coin_ids(self) -> List[CoinId]:
        return [CoinId(self.cell.i, self.cell.j, k) for k in range(self.coin_count)]
