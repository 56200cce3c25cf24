"""Built-in TargetSignal implementations.

Each class is a self-contained scoring unit.  To add a new signal:
  1. Create a new TargetSignal subclass here (or in a separate file).
  2. Register it in ``registry.py``.
"""

from __future__ import annotations

import math

from huntcore.ai.scoring.base import ScoringContext, TargetSignal


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _is_monster(ctx: ScoringContext) -> bool:
    return ctx.info.is_monster


def _count_monsters_near(ctx: ScoringContext, radius: float, tag: str | None = None) -> int:
    entity = ctx.entity
    count = 0
    for other in ctx.snapshot.nearby(entity.pos, radius):
        if other.id == entity.id:
            continue
        info = ctx.snapshot.kind_of(other)
        if info is None or not info.is_monster:
            continue
        if tag is not None and not info.has_tag(tag):
            continue
        count += 1
    return count


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------

class CategorySignal(TargetSignal):
    """Monsters start ahead of resources."""

    @property
    def name(self) -> str:
        return "category"

    def applies(self, ctx: ScoringContext) -> bool:
        return ctx.info.is_monster or ctx.info.is_resource

    def score(self, ctx: ScoringContext) -> float:
        w = ctx.weights
        total = 0.0
        if ctx.info.is_monster:
            total += w.monster_base
        if ctx.info.is_resource:
            total += w.resource_base + w.resource_tag_bonus
        return total


class StationSignal(TargetSignal):
    """Recycling stations are only worth visiting with something to recycle."""

    @property
    def name(self) -> str:
        return "station"

    def applies(self, ctx: ScoringContext) -> bool:
        return ctx.config.recycle_items and ctx.info.is_station

    def score(self, ctx: ScoringContext) -> float:
        w = ctx.weights
        return w.station_ready_bonus if ctx.agent.has_recyclables else w.station_idle_penalty


# ---------------------------------------------------------------------------
# Monster state
# ---------------------------------------------------------------------------

class InjuredSignal(TargetSignal):

    @property
    def name(self) -> str:
        return "injured"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.entity.injured

    def score(self, ctx: ScoringContext) -> float:
        return ctx.weights.injured_bonus


class TargetingAgentSignal(TargetSignal):
    """Anything already attacking us outranks everything else."""

    @property
    def name(self) -> str:
        return "targeting"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.entity.targets(ctx.agent.id)

    def score(self, ctx: ScoringContext) -> float:
        return ctx.weights.targeting_bonus


class HuntableSignal(TargetSignal):

    @property
    def name(self) -> str:
        return "huntable"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.info.can_hunt

    def score(self, ctx: ScoringContext) -> float:
        return ctx.weights.can_hunt_penalty


class RaritySignal(TargetSignal):
    """Rare kills pay off while they stay within reach; beyond it they hurt."""

    @property
    def name(self) -> str:
        return "rarity"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.entity.rarity > 0

    def score(self, ctx: ScoringContext) -> float:
        w = ctx.weights
        r = ctx.entity.rarity
        if r <= w.rare_monster_limit and ctx.entity.max_hp <= w.rare_monster_hp_threshold:
            return r * w.rare_multiplier
        return -r * w.rare_multiplier


class LevelDifferenceSignal(TargetSignal):

    @property
    def name(self) -> str:
        return "level"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.weights.level_mode != "off"

    def score(self, ctx: ScoringContext) -> float:
        w = ctx.weights
        delta = abs(ctx.entity.level - ctx.agent.level)
        if w.level_mode == "match" and delta == 0:
            return w.same_level_bonus
        return -delta * w.level_difference_factor


# ---------------------------------------------------------------------------
# Distance & proximity
# ---------------------------------------------------------------------------

class DistanceSignal(TargetSignal):
    """Closer is better: a linear penalty or an exponential-decay bonus."""

    @property
    def name(self) -> str:
        return "distance"

    def applies(self, ctx: ScoringContext) -> bool:
        return ctx.info.is_monster or ctx.info.is_resource

    def score(self, ctx: ScoringContext) -> float:
        w = ctx.weights
        d = ctx.distance
        if w.distance_mode == "linear":
            return w.distance_multiplier * d
        if ctx.info.is_monster:
            return w.monster_distance_k * math.exp(-w.monster_distance_lambda * d)
        return w.resource_distance_k * math.exp(-w.resource_distance_lambda * d)


class GooClusterSignal(TargetSignal):
    """Goo merges with nearby goo; do not pull one out of a cluster."""

    @property
    def name(self) -> str:
        return "goo"

    def applies(self, ctx: ScoringContext) -> bool:
        return _is_monster(ctx) and ctx.info.has_tag(ctx.config.goo_tag)

    def score(self, ctx: ScoringContext) -> float:
        count = _count_monsters_near(ctx, ctx.config.goo_proximity_range, tag=ctx.config.goo_tag)
        return count * ctx.weights.goo_penalty


class CrowdingSignal(TargetSignal):

    @property
    def name(self) -> str:
        return "crowding"

    def applies(self, ctx: ScoringContext) -> bool:
        return ctx.info.is_monster or ctx.info.is_resource

    def score(self, ctx: ScoringContext) -> float:
        count = _count_monsters_near(ctx, ctx.config.monster_proximity_range)
        return count * ctx.weights.nearby_monster_penalty


class ObstructionSignal(TargetSignal):
    """Penalty per hostile watching the straight approach line."""

    @property
    def name(self) -> str:
        return "obstruction"

    def applies(self, ctx: ScoringContext) -> bool:
        return ctx.info.is_monster or ctx.info.is_resource

    def score(self, ctx: ScoringContext) -> float:
        count = ctx.safety.count_observers_crossing(
            ctx.agent.pos, ctx.entity.pos, exclude_id=ctx.entity.id)
        return count * ctx.weights.monsters_along_path
