from __future__ import annotations
import math
from typing import Dict, Iterable, List, Tuple

import numpy as np

from ..config.validators import is_integral_scale
from ..constants import GRID_ORIGIN, TILE_DEGREES
from ..types import Cell, LatLng


class GridMapper:
    """
    Перевод непрерывных координат (lat, lng) в клетки сетки и обратно.

    i = floor((lat - origin_lat) * scale), j = floor((lng - origin_lng) * scale),
    где scale = 1 / tile_degrees. Округление всегда к минус бесконечности,
    так что границы клеток симметричны относительно нуля.
    """

    def __init__(self, tile_degrees: float = TILE_DEGREES,
                 origin: Tuple[float, float] = GRID_ORIGIN):
        self.tile_degrees = float(tile_degrees)
        if not is_integral_scale(self.tile_degrees):
            raise ValueError(f"1 / tile_degrees must be a whole number, got {tile_degrees!r}")
        # Целый масштаб: lat * 10000 точнее, чем lat / 1e-4
        self.scale = round(1.0 / self.tile_degrees)
        self.origin = (float(origin[0]), float(origin[1]))
        self._cells: Dict[Tuple[int, int], Cell] = {}

    def _index(self, value: float, origin: float) -> int:
        return math.floor((value - origin) * self.scale)

    def cell_for(self, lat: float, lng: float) -> Cell:
        i = self._index(lat, self.origin[0])
        j = self._index(lng, self.origin[1])
        return self._intern(i, j)

    def cell_at(self, pos: LatLng) -> Cell:
        return self.cell_for(pos.lat, pos.lng)

    def _intern(self, i: int, j: int) -> Cell:
        cell = self._cells.get((i, j))
        if cell is None:
            cell = Cell(i, j)
            self._cells[(i, j)] = cell
        return cell

    def cells_for_path(self, points: Iterable[LatLng]) -> List[Cell]:
        """Векторный вариант cell_for для целого пути."""
        coords = np.array([(p.lat, p.lng) for p in points], dtype=np.float64)
        if coords.size == 0:
            return []
        origin = np.array(self.origin, dtype=np.float64)
        idx = np.floor((coords - origin) * self.scale).astype(np.int64)
        return [self._intern(int(i), int(j)) for i, j in idx]

    def cell_bounds(self, cell: Cell) -> Tuple[LatLng, LatLng]:
        """Юго-западный и северо-восточный углы тайла клетки."""
        lat0 = self.origin[0] + cell.i / self.scale
        lng0 = self.origin[1] + cell.j / self.scale
        lat1 = self.origin[0] + (cell.i + 1) / self.scale
        lng1 = self.origin[1] + (cell.j + 1) / self.scale
        return LatLng(lat0, lng0), LatLng(lat1, lng1)

    def neighborhood(self, center: Cell, radius: int) -> List[Cell]:
        """
        Окно видимости: квадрат со стороной 2*radius,
        i от center.i - radius до center.i + radius - 1 (так же по j).
        """
        if radius <= 0:
            return []
        offsets = np.arange(-radius, radius, dtype=np.int64)
        ii, jj = np.meshgrid(center.i + offsets, center.j + offsets, indexing="ij")
        return [self._intern(int(i), int(j)) for i, j in zip(ii.ravel(), jj.ravel())]
