from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.constants import DIRECTION_VECTORS, MOVEMENT_DISTANCE
from ..core.errors import TransferError
from ..core.types import LatLng


@dataclass
class Player:
    # Текущая позиция в географических координатах
    position: LatLng

    # Баланс монет игрока
    coins: int = 0

    # История перемещений: одна точка на каждый завершённый шаг
    path: List[LatLng] = field(default_factory=list)

    # Длина шага по умолчанию (в градусах)
    step: float = MOVEMENT_DISTANCE

    def move(self, direction: str, distance: Optional[float] = None) -> LatLng:
        """Сдвигает игрока на один шаг по оси; границ мира нет."""
        try:
            d_lat, d_lng = DIRECTION_VECTORS[direction]
        except KeyError:
            raise ValueError(f"Unknown direction: {direction!r}") from None
        dist = self.step if distance is None else float(distance)
        self.position = self.position.offset(d_lat * dist, d_lng * dist)
        self.path.append(self.position)
        return self.position

    def record_collect(self) -> None:
        self.coins += 1

    def record_deposit(self) -> None:
        if self.coins <= 0:
            raise TransferError("Cannot deposit with an empty balance")
        self.coins -= 1

    def reset(self, position: LatLng) -> None:
        self.position = position
        self.coins = 0
        self.path = []

    def restore(self, coins: int, path: Iterable[LatLng], default_position: LatLng) -> None:
        self.coins = coins
        self.path = list(path)
        self.position = self.path[-1] if self.path else default_position
