# geocache_engine/core/utils/rng.py
from __future__ import annotations
from typing import Protocol, Union

from ..constants import INITIAL_COINS_KEY

_MASK64 = 0xFFFFFFFFFFFFFFFF


def _splitmix64(x: int) -> int:
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    return z ^ (z >> 31)


def seed_from_any(x: Union[int, str, bytes]) -> int:
    if isinstance(x, int):
        return x & _MASK64
    if isinstance(x, bytes):
        # FNV-1a 64
        acc = 0xcbf29ce484222325
        for b in x:
            acc ^= b
            acc = (acc * 0x100000001B3) & _MASK64
        return acc
    if isinstance(x, str):
        return seed_from_any(x.encode('utf-8'))
    raise TypeError("Unsupported seed type")


def luck(key: str) -> float:
    """
    Детерминированное число в [0, 1) по строковому ключу.
    Никакого внутреннего состояния: одинаковый ключ даёт одинаковое значение
    на любой платформе и при любом запуске.
    """
    h = _splitmix64(seed_from_any(key))
    return (h >> 11) * (1.0 / (1 << 53))


def make_key(*parts: Union[int, str]) -> str:
    """Склеивает части ключа через запятую: (0, 0) -> "0,0"."""
    return ",".join(str(p) for p in parts)


def spawn_key(i: int, j: int) -> str:
    return make_key(i, j)


def initial_coins_key(i: int, j: int) -> str:
    return make_key(i, j, INITIAL_COINS_KEY)


class SeededValueSource(Protocol):
    """Интерфейс источника детерминированных значений."""

    def value_for(self, key: str) -> float: ...


class LuckSource:
    """Источник по умолчанию поверх luck()."""

    __slots__ = ()

    def value_for(self, key: str) -> float:
        return luck(key)

