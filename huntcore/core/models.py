"""Core data models: Vector2, Hitbox, entity and agent snapshots, decisions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D world coordinate (or direction)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    def distance(self, other: Vector2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


ZERO = Vector2(0.0, 0.0)

# 8-connected compass offsets, cardinals first
COMPASS: tuple[Vector2, ...] = (
    Vector2(1, 0), Vector2(-1, 0), Vector2(0, 1), Vector2(0, -1),
    Vector2(1, 1), Vector2(-1, 1), Vector2(1, -1), Vector2(-1, -1),
)


@dataclass(frozen=True, slots=True)
class Hitbox:
    """Axis-aligned box anchored bottom-centre at an entity's position."""

    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True, slots=True)
class KindInfo:
    """Typed capability record for an entity kind."""

    kind: str
    name: str = ""
    is_monster: bool = False
    is_resource: bool = False
    is_station: bool = False
    can_hunt: bool = False
    can_collide: bool = False
    tags: frozenset[str] = frozenset()

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True, slots=True)
class EntitySnapshot:
    """Read-only view of one world entity for the duration of a tick."""

    id: int
    kind: str
    x: float
    y: float
    dx: float = 0.0
    dy: float = 0.0
    z: int = 0
    hp: float = 1.0
    max_hp: float = 1.0
    rarity: int = 0
    target_id: int | None = None
    aggressive: bool = False
    move_speed: float | None = None
    level: int = 1
    is_safe: bool = False
    owner_id: int | None = None

    @property
    def pos(self) -> Vector2:
        return Vector2(self.x, self.y)

    @property
    def facing(self) -> Vector2:
        return Vector2(self.dx, self.dy)

    @property
    def injured(self) -> bool:
        return self.hp < self.max_hp

    def targets(self, entity_id: int) -> bool:
        return self.target_id is not None and self.target_id == entity_id


@dataclass(frozen=True, slots=True)
class SelfState:
    """The agent's own state as reported by the world."""

    id: int
    x: float
    y: float
    z: int = 0
    hp: float = 1.0
    max_hp: float = 1.0
    level: int = 1
    kind: str = "agent"
    facing: Vector2 = ZERO
    hitbox: Hitbox = field(default_factory=Hitbox)
    has_recyclables: bool = False

    @property
    def pos(self) -> Vector2:
        return Vector2(self.x, self.y)


@dataclass(frozen=True, slots=True)
class ScoredTarget:
    """A candidate entity with its desirability score for this tick."""

    entity: EntitySnapshot
    score: float
    kind_info: KindInfo


@dataclass(frozen=True, slots=True)
class Decision:
    """The actionable target chosen for this tick."""

    target: EntitySnapshot
    path: tuple[Vector2, ...]
    score: float
    is_attackable: bool
    is_gatherable: bool

    @property
    def next_waypoint(self) -> Vector2 | None:
        return self.path[1] if len(self.path) > 1 else None


@dataclass(frozen=True, slots=True)
class ExplorationAdvice:
    """Where to wander when no target is actionable."""

    destination: Vector2
    path: tuple[Vector2, ...]
    fallback: bool = False   # produced by wall-following
