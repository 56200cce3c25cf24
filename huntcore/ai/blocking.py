"""Blocking test: terrain and collidable entities versus the agent's footprint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from huntcore.core.geometry import hitboxes_overlap, sample_segment
from huntcore.core.models import EntitySnapshot, Hitbox, Vector2

if TYPE_CHECKING:
    from huntcore.config import EngineConfig
    from huntcore.core.snapshot import WorldSnapshot


class BlockingTest:
    """Answers "can the agent stand here / walk this line" for one snapshot."""

    __slots__ = ("_snapshot", "_config", "_z", "_footprint", "_collidables")

    def __init__(self, snapshot: WorldSnapshot, config: EngineConfig) -> None:
        self._snapshot = snapshot
        self._config = config
        self._z = snapshot.agent.z
        self._footprint = snapshot.agent.hitbox
        collidables: list[tuple[EntitySnapshot, Hitbox]] = []
        for e in snapshot.entities:
            info = snapshot.kind_of(e)
            if info is not None and info.can_collide:
                collidables.append((e, snapshot.hitbox_of(e.kind)))
        self._collidables = tuple(collidables)

    def is_terrain_blocked(self, x: float, y: float) -> bool:
        """Surface not walkable, or nothing solid underneath."""
        cfg = self._config
        terrain_at = self._snapshot.terrain_at
        return (
            terrain_at(x, y, self._z) != cfg.walkable_surface
            or terrain_at(x, y, self._z - 1) < cfg.solid_threshold
        )

    def is_blocked_by_items(self, point: Vector2) -> bool:
        """True if the agent's hitbox at *point* overlaps a collidable entity."""
        for entity, box in self._collidables:
            if hitboxes_overlap(point, self._footprint, entity.pos, box):
                return True
        return False

    def is_point_blocked(self, point: Vector2, footprint: bool = True) -> bool:
        """Terrain or items block *point*; with *footprint*, walk the agent's hitbox too."""
        if self.is_terrain_blocked(point.x, point.y):
            return True
        if self.is_blocked_by_items(point):
            return True
        if footprint:
            box = self._footprint
            step = self._config.footprint_step
            left = point.x - box.width / 2
            right = point.x + box.width / 2
            top = point.y - box.height
            x = left
            while x < right:
                y = top
                while y < point.y:
                    if self.is_terrain_blocked(x, y):
                        return True
                    y += step
                x += step
        return False

    def is_path_blocked(self, start: Vector2, end: Vector2, footprint: bool = True) -> bool:
        """True if any interpolation sample of the segment is blocked."""
        for p in sample_segment(start, end, self._config.interpolation_steps):
            if self.is_point_blocked(p, footprint):
                return True
        return False

    def has_line_of_sight(self, start: Vector2, end: Vector2) -> bool:
        """Clear straight line for a ranged action (terrain and items, no footprint)."""
        return not self.is_path_blocked(start, end, footprint=False)
