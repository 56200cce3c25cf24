"""World Query Facade — the boundary between the decision core and the host game.

The core never talks to the host directly; it reads everything through a
``WorldQuery``.  ``GridWorld`` is the in-memory implementation used by the
sandbox, the API server and the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace

from huntcore.core.enums import Surface, Underground
from huntcore.core.grid import TerrainGrid
from huntcore.core.models import EntitySnapshot, Hitbox, KindInfo, SelfState, Vector2


class WorldQuery(ABC):
    """Read-only contract the host environment must satisfy each tick."""

    @abstractmethod
    def enumerate_entities(self) -> list[EntitySnapshot]:
        """All visible entities, sorted by distance from the agent."""

    @abstractmethod
    def terrain_at(self, x: float, y: float, z: int) -> int:
        """Terrain code of layer *z* at world position (x, y)."""

    @abstractmethod
    def hitbox_of(self, kind: str) -> Hitbox:
        """Hitbox for an entity kind (zero-size if the host has none)."""

    @abstractmethod
    def kind_info(self, kind: str) -> KindInfo | None:
        """Capability record for *kind*, or None when the kind is unknown."""

    @abstractmethod
    def self_state(self) -> SelfState:
        """The agent's own state."""


class GridWorld(WorldQuery):
    """A flat two-layer terrain world with a mutable entity table."""

    def __init__(
        self,
        agent: SelfState,
        width: int,
        height: int,
        origin_x: float = 0.0,
        origin_y: float = 0.0,
        cell_size: float = 1.0,
        kinds: dict[str, KindInfo] | None = None,
        hitboxes: dict[str, Hitbox] | None = None,
    ) -> None:
        self.agent = agent
        grid_args = dict(cell_size=cell_size, origin_x=origin_x, origin_y=origin_y)
        self.surface = TerrainGrid(
            width, height, default=Surface.WALKABLE, outside=Surface.WALL, **grid_args)
        self.underground = TerrainGrid(
            width, height, default=Underground.SOLID, outside=Underground.VOID, **grid_args)
        self._kinds: dict[str, KindInfo] = dict(kinds or {})
        self._hitboxes: dict[str, Hitbox] = dict(hitboxes or {})
        self._entities: dict[int, EntitySnapshot] = {}

    # -- mutation (host side only) --

    def register_kind(self, info: KindInfo, hitbox: Hitbox | None = None) -> None:
        self._kinds[info.kind] = info
        if hitbox is not None:
            self._hitboxes[info.kind] = hitbox

    def add_entity(self, entity: EntitySnapshot) -> None:
        self._entities[entity.id] = entity

    def update_entity(self, entity_id: int, **changes) -> EntitySnapshot:
        updated = replace(self._entities[entity_id], **changes)
        self._entities[entity_id] = updated
        return updated

    def remove_entity(self, entity_id: int) -> None:
        self._entities.pop(entity_id, None)

    def entity(self, entity_id: int) -> EntitySnapshot | None:
        return self._entities.get(entity_id)

    def move_agent(self, pos: Vector2) -> None:
        self.agent = replace(self.agent, x=pos.x, y=pos.y)

    def set_wall(self, x: float, y: float) -> None:
        self.surface.set(x, y, Surface.WALL)

    def set_hole(self, x: float, y: float) -> None:
        self.underground.set(x, y, Underground.VOID)

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    # -- WorldQuery --

    def enumerate_entities(self) -> list[EntitySnapshot]:
        ax, ay = self.agent.x, self.agent.y
        return sorted(
            self._entities.values(),
            key=lambda e: ((e.x - ax) ** 2 + (e.y - ay) ** 2, e.id),
        )

    def terrain_at(self, x: float, y: float, z: int) -> int:
        if z == self.agent.z:
            return self.surface.get(x, y)
        if z == self.agent.z - 1:
            return self.underground.get(x, y)
        return Surface.WALL if z > self.agent.z else Underground.VOID

    def hitbox_of(self, kind: str) -> Hitbox:
        return self._hitboxes.get(kind, Hitbox())

    def kind_info(self, kind: str) -> KindInfo | None:
        return self._kinds.get(kind)

    def self_state(self) -> SelfState:
        return self.agent
