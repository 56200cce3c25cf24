"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Surface(IntEnum):
    """Surface-layer terrain codes."""

    WALKABLE = 0
    WALL = 1
    WATER = 2


@unique
class Underground(IntEnum):
    """Underground-layer terrain codes (below the walkable surface)."""

    VOID = 0
    SOLID = 1


@unique
class Outcome(IntEnum):
    """What a decision pass produced."""

    STAND_BY = 0
    ENGAGE = 1
    EXPLORE = 2
    WALL_FOLLOW = 3


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    SPAWN = 0
    TERRAIN = 1
    FACING = 2
    WANDER = 3
    HARNESS = 4
