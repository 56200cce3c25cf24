"""Base classes for the target scoring plugin system.

TargetSignal    — Abstract base class; subclass and implement `score()`.
ScoringContext  — Everything a signal may read about one candidate.
TargetScorer    — Filters candidates, sums every signal, sorts descending.
SIGNAL_REGISTRY — Module-level list where signals are registered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from huntcore.core.models import EntitySnapshot, KindInfo, ScoredTarget

if TYPE_CHECKING:
    from huntcore.ai.safety import ThreatSafetyEvaluator
    from huntcore.config import EngineConfig, ScoreWeights
    from huntcore.core.models import SelfState
    from huntcore.core.snapshot import WorldSnapshot


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ScoringContext:
    """One candidate plus the tick-wide data signals need."""

    entity: EntitySnapshot
    info: KindInfo
    snapshot: WorldSnapshot
    config: EngineConfig
    safety: ThreatSafetyEvaluator

    _distance: float | None = None

    @property
    def agent(self) -> SelfState:
        return self.snapshot.agent

    @property
    def weights(self) -> ScoreWeights:
        return self.config.score

    @property
    def distance(self) -> float:
        if self._distance is None:
            self._distance = self.agent.pos.distance(self.entity.pos)
        return self._distance


# ---------------------------------------------------------------------------
# Abstract signal
# ---------------------------------------------------------------------------

class TargetSignal(ABC):
    """Base class for all score signals.

    Subclass this and implement:
      - name:        unique signal identifier string
      - applies(ctx): whether the signal contributes for this candidate
      - score(ctx):  the additive contribution (may be negative)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique signal identifier (e.g. 'injured', 'rarity')."""

    def applies(self, ctx: ScoringContext) -> bool:
        return True

    @abstractmethod
    def score(self, ctx: ScoringContext) -> float:
        """Additive score contribution for the candidate in *ctx*."""

    def evaluate(self, ctx: ScoringContext) -> float:
        """Convenience: 0.0 when the signal does not apply."""
        return self.score(ctx) if self.applies(ctx) else 0.0


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

SIGNAL_REGISTRY: list[TargetSignal] = []


def register_signal(signal: TargetSignal) -> TargetSignal:
    """Register a TargetSignal instance in the global registry."""
    SIGNAL_REGISTRY.append(signal)
    return signal


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------

class TargetScorer:
    """Ranks every viable candidate of a snapshot.

    Usage::

        scorer = TargetScorer(config)
        ranked = scorer.score_all(snapshot, safety)
    """

    __slots__ = ("_config", "_signals")

    def __init__(self, config: EngineConfig, signals: Sequence[TargetSignal] | None = None) -> None:
        self._config = config
        self._signals = tuple(SIGNAL_REGISTRY if signals is None else signals)

    @property
    def signals(self) -> tuple[TargetSignal, ...]:
        return self._signals

    def is_candidate(self, entity: EntitySnapshot, info: KindInfo | None, snapshot: WorldSnapshot) -> bool:
        cfg = self._config
        if info is None:
            return False
        if not (
            info.is_monster
            or (cfg.get_resources and info.is_resource)
            or (cfg.recycle_items and info.is_station)
        ):
            return False
        if entity.z != snapshot.agent.z:
            return False
        if entity.is_safe:
            owned = entity.owner_id is not None and entity.owner_id == snapshot.agent.id
            if not (cfg.safe_owned_targets and owned):
                return False
        return entity.kind not in cfg.excluded_kinds

    def candidates(self, snapshot: WorldSnapshot) -> list[tuple[EntitySnapshot, KindInfo]]:
        """Viable candidates in the snapshot's distance order."""
        result: list[tuple[EntitySnapshot, KindInfo]] = []
        for e in snapshot.entities:
            info = snapshot.kind_of(e)
            if self.is_candidate(e, info, snapshot):
                result.append((e, info))
        return result

    def context(
        self,
        entity: EntitySnapshot,
        info: KindInfo,
        snapshot: WorldSnapshot,
        safety: ThreatSafetyEvaluator,
    ) -> ScoringContext:
        return ScoringContext(entity=entity, info=info, snapshot=snapshot,
                              config=self._config, safety=safety)

    def score(self, ctx: ScoringContext) -> float:
        return sum(signal.evaluate(ctx) for signal in self._signals)

    def breakdown(self, ctx: ScoringContext) -> dict[str, float]:
        """Per-signal contributions, for debugging and the API."""
        return {s.name: s.evaluate(ctx) for s in self._signals if s.applies(ctx)}

    def score_all(self, snapshot: WorldSnapshot, safety: ThreatSafetyEvaluator) -> list[ScoredTarget]:
        """Score all candidates and sort descending (stable, so ties keep distance order)."""
        scored = [
            ScoredTarget(entity=e, score=self.score(self.context(e, info, snapshot, safety)), kind_info=info)
            for e, info in self.candidates(snapshot)
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored
