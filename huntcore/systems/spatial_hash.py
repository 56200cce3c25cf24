"""Spatial hashing for neighbourhood lookups on float positions."""

from __future__ import annotations

import math
from collections import defaultdict

from huntcore.core.models import Vector2


class SpatialHash:
    """Grid-based spatial index mapping cell keys to sets of entity IDs."""

    __slots__ = ("_cell_size", "_cells")

    def __init__(self, cell_size: float = 4.0) -> None:
        self._cell_size = cell_size
        self._cells: dict[tuple[int, int], set[int]] = defaultdict(set)

    def _key(self, pos: Vector2) -> tuple[int, int]:
        return math.floor(pos.x / self._cell_size), math.floor(pos.y / self._cell_size)

    def insert(self, entity_id: int, pos: Vector2) -> None:
        self._cells[self._key(pos)].add(entity_id)

    def query_radius(self, pos: Vector2, radius: float) -> set[int]:
        """Return entity IDs in cells overlapping the square of half-size *radius*.

        Callers filter the candidates by exact distance.
        """
        cx, cy = self._key(pos)
        r = math.ceil(radius / self._cell_size)
        result: set[int] = set()
        for dx in range(-r, r + 1):
            for dy in range(-r, r + 1):
                bucket = self._cells.get((cx + dx, cy + dy))
                if bucket:
                    result.update(bucket)
        return result
