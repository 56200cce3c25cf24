"""Terrain layer grid."""

from __future__ import annotations

import math

from huntcore.core.models import Vector2


class TerrainGrid:
    """One terrain layer of integer codes backed by a flat list.

    World coordinates are floats; a point maps to the cell containing it.
    Out-of-bounds lookups return *outside* so the map edge behaves as terrain.
    """

    __slots__ = ("width", "height", "cell_size", "origin_x", "origin_y", "outside", "_tiles")

    def __init__(
        self,
        width: int,
        height: int,
        default: int = 0,
        outside: int = 1,
        cell_size: float = 1.0,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> None:
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.outside = outside
        self._tiles: list[int] = [int(default)] * (width * height)

    # -- coordinates --

    def cell_of(self, x: float, y: float) -> tuple[int, int]:
        return (
            math.floor((x - self.origin_x) / self.cell_size),
            math.floor((y - self.origin_y) / self.cell_size),
        )

    def cell_center(self, cx: int, cy: int) -> Vector2:
        half = self.cell_size / 2
        return Vector2(
            self.origin_x + cx * self.cell_size + half,
            self.origin_y + cy * self.cell_size + half,
        )

    def in_bounds_cell(self, cx: int, cy: int) -> bool:
        return 0 <= cx < self.width and 0 <= cy < self.height

    # -- access --

    def get_cell(self, cx: int, cy: int) -> int:
        if 0 <= cx < self.width and 0 <= cy < self.height:
            return self._tiles[cy * self.width + cx]
        return self.outside

    def set_cell(self, cx: int, cy: int, code: int) -> None:
        if self.in_bounds_cell(cx, cy):
            self._tiles[cy * self.width + cx] = int(code)

    def get(self, x: float, y: float) -> int:
        return self.get_cell(*self.cell_of(x, y))

    def set(self, x: float, y: float, code: int) -> None:
        self.set_cell(*self.cell_of(x, y), code)
