"""Deterministic sandbox scenario generation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from huntcore.core.enums import Domain
from huntcore.core.models import COMPASS, EntitySnapshot, Hitbox, KindInfo, SelfState, Vector2
from huntcore.engine.sandbox import SandboxWorld
from huntcore.systems.rng import DeterministicRNG

if TYPE_CHECKING:
    from huntcore.config import EngineConfig

logger = logging.getLogger(__name__)


# kind -> (metadata, hitbox, max_hp, aggressive chance)
SANDBOX_KINDS: dict[str, tuple[KindInfo, Hitbox, float, float]] = {
    "slime": (KindInfo("slime", "Slime", is_monster=True, tags=frozenset({"goo"})),
              Hitbox(0.8, 0.6), 60.0, 0.0),
    "wolf": (KindInfo("wolf", "Wolf", is_monster=True),
             Hitbox(0.9, 0.7), 90.0, 0.6),
    "boar": (KindInfo("boar", "Boar", is_monster=True),
             Hitbox(1.0, 0.8), 120.0, 0.3),
    "drake": (KindInfo("drake", "Drake", is_monster=True, can_hunt=True),
              Hitbox(1.2, 1.0), 300.0, 1.0),
    "ore": (KindInfo("ore", "Ore Vein", is_resource=True, can_collide=True),
            Hitbox(1.0, 1.0), 50.0, 0.0),
    "herb": (KindInfo("herb", "Herb", is_resource=True),
             Hitbox(0.4, 0.4), 10.0, 0.0),
    "station": (KindInfo("station", "Recycler", is_station=True, can_collide=True),
                Hitbox(1.0, 1.0), 1.0, 0.0),
}

_MONSTER_KINDS = ("slime", "wolf", "boar", "drake")
_RESOURCE_KINDS = ("ore", "herb")

AGENT_ID = 1


class ScenarioGenerator:
    """Builds a reproducible SandboxWorld from a seed.

    The world is centred on the origin with the agent at the centre cell.
    Every placement draws from its own RNG domain, so changing the monster
    count leaves the terrain untouched.
    """

    __slots__ = ("_config", "_rng", "width", "height")

    def __init__(self, config: EngineConfig, seed: int, width: int = 40, height: int = 40) -> None:
        self._config = config
        self._rng = DeterministicRNG(seed)
        self.width = width
        self.height = height

    @property
    def seed(self) -> int:
        return self._rng.seed

    def generate(
        self,
        monsters: int = 12,
        resources: int = 4,
        walls: int = 40,
        holes: int = 6,
    ) -> SandboxWorld:
        rng = self._rng
        agent = SelfState(
            id=AGENT_ID, x=0.5, y=0.5, hp=100.0, max_hp=100.0,
            level=3, hitbox=Hitbox(0.0, 0.0),
        )
        world = SandboxWorld(
            agent,
            self.width,
            self.height,
            origin_x=-self.width / 2,
            origin_y=-self.height / 2,
            rng=rng,
        )
        for info, box, _, _ in SANDBOX_KINDS.values():
            world.register_kind(info, box)

        self._carve_terrain(world, walls, holes)

        next_id = AGENT_ID + 1
        for i in range(monsters):
            kind = rng.choice(Domain.SPAWN, i, 0, _MONSTER_KINDS)
            world.add_entity(self._spawn(world, next_id, kind, i))
            next_id += 1
        for i in range(resources):
            kind = rng.choice(Domain.SPAWN, 1000 + i, 0, _RESOURCE_KINDS)
            world.add_entity(self._spawn(world, next_id, kind, 1000 + i))
            next_id += 1
        if self._config.recycle_items:
            world.add_entity(self._spawn(world, next_id, "station", 2000))

        logger.info(
            "Generated sandbox (seed=%d): %dx%d, %d entities",
            self.seed, self.width, self.height, world.entity_count,
        )
        return world

    def _carve_terrain(self, world: SandboxWorld, walls: int, holes: int) -> None:
        rng = self._rng
        for i in range(walls + holes):
            cx = rng.next_int(Domain.TERRAIN, i, 0, 0, self.width - 1)
            cy = rng.next_int(Domain.TERRAIN, i, 1, 0, self.height - 1)
            center = world.surface.cell_center(cx, cy)
            if center.distance(world.agent.pos) < 3.0:
                continue  # keep the start area open
            if i < walls:
                world.set_wall(center.x, center.y)
            else:
                world.set_hole(center.x, center.y)

    def _spawn(self, world: SandboxWorld, eid: int, kind: str, key: int) -> EntitySnapshot:
        rng = self._rng
        info, _, max_hp, aggressive_chance = SANDBOX_KINDS[kind]
        pos = self._free_position(world, key)

        facing = Vector2()
        aggressive = False
        rarity = 0
        level = 1
        hp = max_hp
        if info.is_monster:
            facing = rng.choice(Domain.FACING, key, 0, COMPASS)
            aggressive = rng.next_bool(Domain.SPAWN, key, 2, aggressive_chance)
            level = rng.next_int(Domain.SPAWN, key, 3, 1, 6)
            if rng.next_bool(Domain.SPAWN, key, 4, 0.15):
                rarity = rng.next_int(Domain.SPAWN, key, 5, 1, 4)
            if rng.next_bool(Domain.SPAWN, key, 6, 0.2):
                hp = round(max_hp * rng.next_uniform(Domain.SPAWN, key, 7, 0.3, 0.9))

        return EntitySnapshot(
            id=eid, kind=kind, x=pos.x, y=pos.y, dx=facing.x, dy=facing.y,
            hp=hp, max_hp=max_hp, rarity=rarity, aggressive=aggressive, level=level,
        )

    def _free_position(self, world: SandboxWorld, key: int) -> Vector2:
        """A walkable cell centre at least 4 units from the agent."""
        rng = self._rng
        for attempt in range(50):
            cx = rng.next_int(Domain.SPAWN, key, 10 + 2 * attempt, 0, self.width - 1)
            cy = rng.next_int(Domain.SPAWN, key, 11 + 2 * attempt, 0, self.height - 1)
            pos = world.surface.cell_center(cx, cy)
            if world.is_walkable(pos) and pos.distance(world.agent.pos) >= 4.0:
                return pos
        return world.surface.cell_center(self.width - 1, self.height - 1)
