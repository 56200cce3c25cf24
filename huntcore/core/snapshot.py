"""Immutable per-tick snapshot of the world facade."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from huntcore.core.models import EntitySnapshot, Hitbox, KindInfo, SelfState, Vector2
from huntcore.core.world import WorldQuery
from huntcore.systems.spatial_hash import SpatialHash


@dataclass(frozen=True, slots=True)
class WorldSnapshot:
    """Everything one decision pass reads, captured once.

    Kind metadata and hitboxes are resolved up front so the hot loops never
    call back into the host.  Entities keep the facade's distance order.
    """

    tick: int
    agent: SelfState
    entities: tuple[EntitySnapshot, ...]
    kinds: Mapping[str, KindInfo | None]
    hitboxes: Mapping[str, Hitbox]
    world: WorldQuery
    _by_id: Mapping[int, EntitySnapshot] = field(default_factory=dict, repr=False, compare=False)
    _spatial: SpatialHash = field(default_factory=SpatialHash, repr=False, compare=False)

    @classmethod
    def capture(cls, world: WorldQuery, tick: int = 0, cell_size: float = 4.0) -> WorldSnapshot:
        agent = world.self_state()
        entities = tuple(world.enumerate_entities())
        kinds: dict[str, KindInfo | None] = {}
        hitboxes: dict[str, Hitbox] = {agent.kind: agent.hitbox}
        spatial = SpatialHash(cell_size)
        for e in entities:
            if e.kind not in kinds:
                kinds[e.kind] = world.kind_info(e.kind)
                hitboxes[e.kind] = world.hitbox_of(e.kind)
            spatial.insert(e.id, e.pos)
        return cls(
            tick=tick,
            agent=agent,
            entities=entities,
            kinds=MappingProxyType(kinds),
            hitboxes=MappingProxyType(hitboxes),
            world=world,
            _by_id=MappingProxyType({e.id: e for e in entities}),
            _spatial=spatial,
        )

    def kind_of(self, entity: EntitySnapshot) -> KindInfo | None:
        return self.kinds.get(entity.kind)

    def hitbox_of(self, kind: str) -> Hitbox:
        return self.hitboxes.get(kind, Hitbox())

    def entity(self, entity_id: int) -> EntitySnapshot | None:
        return self._by_id.get(entity_id)

    def terrain_at(self, x: float, y: float, z: int) -> int:
        return self.world.terrain_at(x, y, z)

    def monsters(self) -> list[EntitySnapshot]:
        """Entities whose kind is a known monster, in distance order."""
        result: list[EntitySnapshot] = []
        for e in self.entities:
            info = self.kinds.get(e.kind)
            if info is not None and info.is_monster:
                result.append(e)
        return result

    def nearby(self, pos: Vector2, radius: float) -> list[EntitySnapshot]:
        """Entities within Euclidean *radius* of *pos*."""
        result: list[EntitySnapshot] = []
        for eid in self._spatial.query_radius(pos, radius):
            e = self._by_id[eid]
            if e.pos.distance(pos) <= radius:
                result.append(e)
        result.sort(key=lambda e: e.id)
        return result

    def unknown_kinds(self) -> list[str]:
        """Kinds seen this tick that the host has no metadata for."""
        return sorted(k for k, info in self.kinds.items() if info is None)
