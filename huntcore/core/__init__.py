"""Core data models, geometry and the world query facade."""

from huntcore.core.enums import Domain, Outcome, Surface, Underground
from huntcore.core.models import (
    Decision,
    EntitySnapshot,
    ExplorationAdvice,
    Hitbox,
    KindInfo,
    ScoredTarget,
    SelfState,
    Vector2,
)
from huntcore.core.grid import TerrainGrid
from huntcore.core.world import GridWorld, WorldQuery
from huntcore.core.snapshot import WorldSnapshot

__all__ = [
    "Decision",
    "Domain",
    "EntitySnapshot",
    "ExplorationAdvice",
    "GridWorld",
    "Hitbox",
    "KindInfo",
    "Outcome",
    "ScoredTarget",
    "SelfState",
    "Surface",
    "TerrainGrid",
    "Underground",
    "Vector2",
    "WorldQuery",
    "WorldSnapshot",
]
