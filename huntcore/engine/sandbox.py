"""SandboxWorld — a GridWorld that acts on the engine's decisions.

The decision core never moves anything.  In the sandbox this module plays
the host game: it walks the agent toward the next waypoint, lets monsters
drift along their facing and resolves melee hits.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from huntcore.core.enums import Domain, Surface, Underground
from huntcore.core.geometry import normalized
from huntcore.core.models import COMPASS, EntitySnapshot, Vector2
from huntcore.core.world import GridWorld

if TYPE_CHECKING:
    from huntcore.ai.engine import TickResult
    from huntcore.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


class SandboxWorld(GridWorld):
    """In-memory world with just enough physics to exercise the engine."""

    def __init__(
        self,
        *args,
        rng: DeterministicRNG | None = None,
        agent_speed: float = 0.75,
        attack_reach: float = 1.0,
        attack_damage: float = 25.0,
        monster_speed: float = 0.3,
        turn_chance: float = 0.1,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.rng = rng
        self.agent_speed = agent_speed
        self.attack_reach = attack_reach
        self.attack_damage = attack_damage
        self.monster_speed = monster_speed
        self.turn_chance = turn_chance
        self.tick = 0
        self.kills = 0

    # ------------------------------------------------------------------
    # Terrain
    # ------------------------------------------------------------------

    def is_walkable(self, pos: Vector2) -> bool:
        return (
            self.surface.get(pos.x, pos.y) == Surface.WALKABLE
            and self.underground.get(pos.x, pos.y) >= Underground.SOLID
        )

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def advance(self, result: TickResult) -> list[str]:
        """Apply *result* for the agent, then move every monster one step."""
        events = self.apply(result)
        self.step_monsters()
        self.tick += 1
        return events

    def apply(self, result: TickResult) -> list[str]:
        events: list[str] = []
        decision = result.decision
        if decision is not None:
            target = self.entity(decision.target.id)
            if target is None:
                return events
            if self.agent.pos.distance(target.pos) <= self.attack_reach:
                events.append(self._hit(target))
            elif decision.next_waypoint is not None:
                self._walk_toward(decision.next_waypoint)
            else:
                self._walk_toward(target.pos)
        elif result.next_waypoint is not None:
            self._walk_toward(result.next_waypoint)
        return events

    def step_monsters(self) -> None:
        agent_pos = self.agent.pos
        for e in list(self._entities.values()):
            info = self.kind_info(e.kind)
            if info is None or not info.is_monster:
                continue
            speed = e.move_speed if e.move_speed is not None else self.monster_speed
            if e.targets(self.agent.id):
                facing = normalized(agent_pos - e.pos)
                if e.pos.distance(agent_pos) <= self.attack_reach:
                    self.update_entity(e.id, dx=facing.x, dy=facing.y)
                    continue
            else:
                facing = self._wander_facing(e)
            if facing.x == 0.0 and facing.y == 0.0:
                continue
            nxt = e.pos + normalized(facing) * speed
            if self.is_walkable(nxt):
                self.update_entity(e.id, x=nxt.x, y=nxt.y, dx=facing.x, dy=facing.y)
            else:
                # bounce
                self.update_entity(e.id, dx=-facing.x, dy=-facing.y)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _walk_toward(self, waypoint: Vector2) -> None:
        pos = self.agent.pos
        delta = waypoint - pos
        dist = pos.distance(waypoint)
        if dist == 0.0:
            return
        step = min(dist, self.agent_speed)
        nxt = pos + normalized(delta) * step
        if self.is_walkable(nxt):
            self.move_agent(nxt)

    def _hit(self, target: EntitySnapshot) -> str:
        hp = target.hp - self.attack_damage
        if hp <= 0:
            self.remove_entity(target.id)
            self.kills += 1
            logger.info("Tick %d: %s #%d defeated", self.tick, target.kind, target.id)
            return f"defeated {target.kind} #{target.id}"
        self.update_entity(target.id, hp=hp, target_id=self.agent.id, aggressive=True)
        return f"hit {target.kind} #{target.id} ({hp:g}/{target.max_hp:g})"

    def _wander_facing(self, e: EntitySnapshot) -> Vector2:
        facing = e.facing
        if self.rng is None or (facing.x == 0.0 and facing.y == 0.0):
            return facing
        if self.rng.next_bool(Domain.WANDER, e.id, self.tick, self.turn_chance):
            return self.rng.choice(Domain.FACING, e.id, self.tick, COMPASS)
        return facing
