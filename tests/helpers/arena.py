"""Arena — small hand-built worlds for decision-core tests.

Creates a GridWorld centred on the origin with a fixed set of kinds, lets a
test drop monsters, walls and holes at world coordinates, and hands back
the per-tick evaluators built from a fresh snapshot.

Usage:
    arena = Arena(agent=(0.5, 0.5))
    arena.add_monster(2, 5.5, 0.5, aggressive=True, dx=-1.0)
    arena.wall(3.5, 0.5)
    tools = arena.tools()
    path = tools.pathfinder.find_path(arena.agent_pos, arena.entity(2))
"""

from __future__ import annotations

import sys
import os
from dataclasses import dataclass

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from huntcore.ai.blocking import BlockingTest
from huntcore.ai.optimizer import PathOptimizer
from huntcore.ai.pathfinding import GridPathfinder
from huntcore.ai.safety import ThreatSafetyEvaluator
from huntcore.config import EngineConfig
from huntcore.core.models import EntitySnapshot, Hitbox, KindInfo, SelfState, Vector2
from huntcore.core.snapshot import WorldSnapshot
from huntcore.core.world import GridWorld

AGENT_ID = 1

ARENA_KINDS: dict[str, tuple[KindInfo, Hitbox]] = {
    "monster": (KindInfo("monster", "Monster", is_monster=True), Hitbox(0.0, 0.0)),
    "brute": (KindInfo("brute", "Brute", is_monster=True), Hitbox(1.0, 1.0)),
    "goo": (KindInfo("goo", "Goo", is_monster=True, tags=frozenset({"goo"})), Hitbox(0.0, 0.0)),
    "hunter": (KindInfo("hunter", "Hunter", is_monster=True, can_hunt=True), Hitbox(0.0, 0.0)),
    "ore": (KindInfo("ore", "Ore", is_resource=True), Hitbox(0.0, 0.0)),
    "rock": (KindInfo("rock", "Rock", can_collide=True), Hitbox(1.0, 1.0)),
    "station": (KindInfo("station", "Recycler", is_station=True), Hitbox(0.0, 0.0)),
}


@dataclass
class Tools:
    snapshot: WorldSnapshot
    safety: ThreatSafetyEvaluator
    blocking: BlockingTest
    pathfinder: GridPathfinder
    optimizer: PathOptimizer


class Arena:
    """A 40x40 world spanning [-20, 20) on both axes."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        agent: tuple[float, float] = (0.0, 0.0),
        agent_hitbox: Hitbox | None = None,
        size: int = 40,
        **agent_fields,
    ) -> None:
        self.config = config or EngineConfig()
        state = SelfState(
            id=AGENT_ID, x=agent[0], y=agent[1],
            hitbox=agent_hitbox or Hitbox(0.0, 0.0), **agent_fields,
        )
        self.world = GridWorld(
            state, size, size, origin_x=-size / 2, origin_y=-size / 2,
        )
        for info, box in ARENA_KINDS.values():
            self.world.register_kind(info, box)

    # -- population --

    @property
    def agent_pos(self) -> Vector2:
        return self.world.agent.pos

    def add(self, eid: int, kind: str, x: float, y: float, **fields) -> EntitySnapshot:
        entity = EntitySnapshot(id=eid, kind=kind, x=x, y=y, **fields)
        self.world.add_entity(entity)
        return entity

    def add_monster(self, eid: int, x: float, y: float, kind: str = "monster", **fields) -> EntitySnapshot:
        return self.add(eid, kind, x, y, **fields)

    def add_hostile(self, eid: int, x: float, y: float, dx: float, dy: float, **fields) -> EntitySnapshot:
        """An aggressive monster watching along (dx, dy)."""
        return self.add(eid, fields.pop("kind", "monster"), x, y, dx=dx, dy=dy, aggressive=True, **fields)

    def entity(self, eid: int) -> EntitySnapshot:
        e = self.world.entity(eid)
        assert e is not None, f"no entity {eid}"
        return e

    # -- terrain --

    def wall(self, x: float, y: float) -> None:
        self.world.set_wall(x, y)

    def hole(self, x: float, y: float) -> None:
        self.world.set_hole(x, y)

    def wall_cells(self, cells) -> None:
        """Wall every (cx, cy) cell given in world-aligned integer coordinates."""
        for cx, cy in cells:
            self.wall(cx + 0.5, cy + 0.5)

    def enclose(self, room: set[tuple[int, int]]) -> None:
        """Wall the one-cell ring around the cells of *room*."""
        ring = set()
        for cx, cy in room:
            for dx in (-1, 0, 1):
                for dy in (-1, 0, 1):
                    cell = (cx + dx, cy + dy)
                    if cell not in room:
                        ring.add(cell)
        self.wall_cells(ring)

    # -- evaluators --

    def snapshot(self, tick: int = 0) -> WorldSnapshot:
        return WorldSnapshot.capture(self.world, tick, self.config.spatial_cell_size)

    def tools(self) -> Tools:
        snapshot = self.snapshot()
        safety = ThreatSafetyEvaluator(snapshot, self.config)
        blocking = BlockingTest(snapshot, self.config)
        return Tools(
            snapshot=snapshot,
            safety=safety,
            blocking=blocking,
            pathfinder=GridPathfinder(snapshot, self.config, safety, blocking),
            optimizer=PathOptimizer(safety, blocking),
        )
