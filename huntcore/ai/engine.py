"""DecisionEngine — one full decision pass per tick.

Per tick:
  1. Capture an immutable WorldSnapshot from the facade.
  2. Build the per-tick evaluators (safety, blocking, pathfinder, optimizer).
  3. Score every viable candidate and pick the first actionable one.
  4. With no target, ask the Explorer for an advisory.

The engine owns everything that outlives a tick: the exploration heatmap,
the last advisory, the last decision and the event log.  Several engines
can run side by side against different worlds.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from huntcore.ai.blocking import BlockingTest
from huntcore.ai.heatmap import ExplorationHeatmap, Explorer
from huntcore.ai.optimizer import PathOptimizer
from huntcore.ai.pathfinding import GridPathfinder
from huntcore.ai.safety import ThreatSafetyEvaluator
from huntcore.ai.scoring import TargetScorer
from huntcore.ai.selector import TargetSelector
from huntcore.core.enums import Outcome
from huntcore.core.models import Decision, ExplorationAdvice, ScoredTarget
from huntcore.core.snapshot import WorldSnapshot
from huntcore.utils.event_log import DecisionEvent, EventLog

if TYPE_CHECKING:
    from huntcore.ai.scoring import TargetSignal
    from huntcore.config import EngineConfig
    from huntcore.core.world import WorldQuery

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TickResult:
    """What one decision pass produced."""

    tick: int
    decision: Decision | None
    exploration: ExplorationAdvice | None
    outcome: Outcome
    ranked: tuple[ScoredTarget, ...] = ()

    @property
    def next_waypoint(self):
        if self.decision is not None:
            return self.decision.next_waypoint
        if self.exploration is not None and len(self.exploration.path) > 1:
            return self.exploration.path[1]
        return None


class DecisionEngine:
    """Stateful decision core for a single agent."""

    __slots__ = (
        "_config", "_scorer", "_explorer", "_event_log", "_clock",
        "_tick", "_last_result", "_warned_kinds",
    )

    def __init__(
        self,
        config: EngineConfig,
        event_log: EventLog | None = None,
        heatmap: ExplorationHeatmap | None = None,
        signals: Sequence[TargetSignal] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config
        self._scorer = TargetScorer(config, signals)
        self._explorer = Explorer(config, heatmap if heatmap is not None else ExplorationHeatmap(config))
        self._event_log = event_log if event_log is not None else EventLog()
        self._clock = clock
        self._tick = 0
        self._last_result: TickResult | None = None
        self._warned_kinds: set[str] = set()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def heatmap(self) -> ExplorationHeatmap:
        return self._explorer.heatmap

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def last_result(self) -> TickResult | None:
        return self._last_result

    @property
    def last_decision(self) -> Decision | None:
        return self._last_result.decision if self._last_result is not None else None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, world: WorldQuery, now: float | None = None) -> TickResult:
        """Run one decision pass against the current state of *world*."""
        cfg = self._config
        now = self._clock() if now is None else now
        self._tick += 1

        snapshot = WorldSnapshot.capture(world, self._tick, cfg.spatial_cell_size)
        self._warn_unknown_kinds(snapshot)

        safety = ThreatSafetyEvaluator(snapshot, cfg)
        blocking = BlockingTest(snapshot, cfg)
        pathfinder = GridPathfinder(snapshot, cfg, safety, blocking)
        optimizer = PathOptimizer(safety, blocking)

        ranked = self._scorer.score_all(snapshot, safety)
        decision = TargetSelector(cfg, pathfinder, optimizer).select(snapshot.agent, ranked)

        exploration: ExplorationAdvice | None = None
        if decision is not None:
            outcome = Outcome.ENGAGE
            self._explorer.reset()
        else:
            exploration = self._explorer.advise(
                snapshot.agent.pos, now, safety, blocking, pathfinder, optimizer,
            )
            if exploration is None:
                outcome = Outcome.STAND_BY
            elif exploration.fallback:
                outcome = Outcome.WALL_FOLLOW
            else:
                outcome = Outcome.EXPLORE

        result = TickResult(
            tick=self._tick,
            decision=decision,
            exploration=exploration,
            outcome=outcome,
            ranked=tuple(ranked),
        )
        self._report(result)
        self._last_result = result
        return result

    def reset(self) -> None:
        """Forget all cross-tick state."""
        self._tick = 0
        self._last_result = None
        self._explorer = Explorer(self._config, ExplorationHeatmap(self._config))
        self._event_log.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _warn_unknown_kinds(self, snapshot: WorldSnapshot) -> None:
        for kind in snapshot.unknown_kinds():
            if kind not in self._warned_kinds:
                self._warned_kinds.add(kind)
                logger.warning("Unknown entity kind %r; excluded from targeting", kind)

    def _report(self, result: TickResult) -> None:
        d = result.decision
        if d is not None:
            message = f"Engaging {d.target.kind} #{d.target.id} (score {d.score:.1f}, {len(d.path)} waypoints)"
            event = DecisionEvent(result.tick, result.outcome.name, message,
                                  target_id=d.target.id, score=d.score, waypoints=len(d.path))
        elif result.exploration is not None:
            a = result.exploration
            verb = "Wall-following" if a.fallback else "Exploring"
            message = f"{verb} toward {a.destination}"
            event = DecisionEvent(result.tick, result.outcome.name, message, waypoints=len(a.path))
        else:
            message = "Standing by"
            event = DecisionEvent(result.tick, result.outcome.name, message)
        self._event_log.append(event)

        # Only changes of intent at INFO; repeats go to DEBUG
        prev = self._last_result
        changed = (
            prev is None
            or prev.outcome != result.outcome
            or (prev.decision is not None and d is not None and prev.decision.target.id != d.target.id)
        )
        logger.log(logging.INFO if changed else logging.DEBUG, "Tick %d: %s", result.tick, message)
