"""Exploration heatmap — decaying record of where the agent has been.

Cells are merged by proximity rather than snapped to a grid: a visit within
``visit_merge_radius`` of an existing cell reinforces that cell.  Scores
decay with the time since the cell was last visited and cells that reach
zero, or drift beyond ``heatmap_radius`` of the agent, are evicted.

The Explorer turns the heatmap into an advisory when nothing is worth
hunting: head for the least-visited compass direction, or take a single
wall-following step when no direction has a route.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

from huntcore.core.models import COMPASS, ExplorationAdvice, Vector2

if TYPE_CHECKING:
    from huntcore.ai.blocking import BlockingTest
    from huntcore.ai.optimizer import PathOptimizer
    from huntcore.ai.pathfinding import GridPathfinder
    from huntcore.ai.safety import ThreatSafetyEvaluator
    from huntcore.config import EngineConfig

logger = logging.getLogger(__name__)

# A waypoint closer than this to the agent counts as reached.
_ARRIVAL_RADIUS = 0.1


@dataclass(slots=True)
class VisitedCell:
    x: float
    y: float
    score: float = 1.0
    last_visited_at: float = 0.0

    @property
    def pos(self) -> Vector2:
        return Vector2(self.x, self.y)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "score": self.score,
                "last_visited_at": self.last_visited_at}


class ExplorationHeatmap:
    """Visitation scores keyed by approximate position."""

    __slots__ = ("_config", "_cells", "_last_decay_at")

    def __init__(self, config: EngineConfig) -> None:
        self._config = config
        self._cells: list[VisitedCell] = []
        self._last_decay_at: float | None = None

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def cells(self) -> tuple[VisitedCell, ...]:
        return tuple(self._cells)

    def _find(self, pos: Vector2) -> VisitedCell | None:
        radius = self._config.visit_merge_radius
        for cell in self._cells:
            if math.hypot(cell.x - pos.x, cell.y - pos.y) <= radius:
                return cell
        return None

    # ------------------------------------------------------------------
    # Visits
    # ------------------------------------------------------------------

    def mark_visited(self, pos: Vector2, now: float) -> VisitedCell:
        """Reinforce the cell at *pos*, creating it on first visit."""
        if self._last_decay_at is None:
            self._last_decay_at = now
        cell = self._find(pos)
        if cell is not None:
            cell.score += 1
            cell.last_visited_at = now
            return cell
        cell = VisitedCell(pos.x, pos.y, 1.0, now)
        self._cells.append(cell)
        return cell

    def visit_score(self, pos: Vector2) -> float:
        cell = self._find(pos)
        return cell.score if cell is not None else 0.0

    # ------------------------------------------------------------------
    # Decay & eviction
    # ------------------------------------------------------------------

    def decay(self, now: float) -> int:
        """Apply one decay pass; returns the number of evicted cells."""
        rate = self._config.decay_rate
        for cell in self._cells:
            elapsed = max(0.0, now - cell.last_visited_at)
            cell.score = max(0.0, cell.score - rate * elapsed)
        before = len(self._cells)
        self._cells = [c for c in self._cells if c.score > 0]
        self._last_decay_at = now
        return before - len(self._cells)

    def maybe_decay(self, now: float) -> bool:
        """Run ``decay`` if a full ``decay_interval`` has passed since the last pass."""
        if self._last_decay_at is None:
            self._last_decay_at = now
            return False
        if now - self._last_decay_at < self._config.decay_interval:
            return False
        evicted = self.decay(now)
        if evicted:
            logger.debug("Heatmap decay evicted %d cells (%d left)", evicted, len(self._cells))
        return True

    def prune_distant(self, origin: Vector2) -> int:
        radius = self._config.heatmap_radius
        before = len(self._cells)
        self._cells = [c for c in self._cells if math.hypot(c.x - origin.x, c.y - origin.y) <= radius]
        return before - len(self._cells)

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    def ranked_directions(self, origin: Vector2) -> list[Vector2]:
        """Compass points at ``explore_distance``, least visited first.

        Ties go to the point farther from the world origin.
        """
        dist = self._config.explore_distance
        candidates = [origin + d * dist for d in COMPASS]
        candidates.sort(key=lambda p: (self.visit_score(p), -math.hypot(p.x, p.y)))
        return candidates

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_records(self) -> list[dict[str, float]]:
        return [c.to_dict() for c in self._cells]

    @classmethod
    def from_records(cls, config: EngineConfig, records: Iterable[dict[str, Any]]) -> ExplorationHeatmap:
        heatmap = cls(config)
        for r in records:
            score = float(r.get("score", 0.0))
            if score <= 0:
                continue
            heatmap._cells.append(VisitedCell(
                x=float(r["x"]),
                y=float(r["y"]),
                score=score,
                last_visited_at=float(r.get("last_visited_at", 0.0)),
            ))
        return heatmap


class Explorer:
    """Produces exploration advisories from the heatmap.

    Holds the last advisory so ticks closer together than
    ``explore_recompute_interval`` reuse it instead of searching again.
    """

    __slots__ = ("_config", "_heatmap", "_last_advice", "_last_advice_at")

    def __init__(self, config: EngineConfig, heatmap: ExplorationHeatmap) -> None:
        self._config = config
        self._heatmap = heatmap
        self._last_advice: ExplorationAdvice | None = None
        self._last_advice_at: float | None = None

    @property
    def heatmap(self) -> ExplorationHeatmap:
        return self._heatmap

    def reset(self) -> None:
        self._last_advice = None
        self._last_advice_at = None

    def advise(
        self,
        pos: Vector2,
        now: float,
        safety: ThreatSafetyEvaluator,
        blocking: BlockingTest,
        pathfinder: GridPathfinder,
        optimizer: PathOptimizer | None = None,
    ) -> ExplorationAdvice | None:
        cfg = self._config
        if not cfg.explore_new_areas:
            return None

        heatmap = self._heatmap
        heatmap.prune_distant(pos)
        heatmap.maybe_decay(now)
        heatmap.mark_visited(pos, now)

        if (
            self._last_advice is not None
            and self._last_advice_at is not None
            and now - self._last_advice_at < cfg.explore_recompute_interval
        ):
            resumed = self._resume(pos)
            if resumed is not None:
                return resumed

        for candidate in heatmap.ranked_directions(pos):
            if not safety.is_safe(candidate) or blocking.is_point_blocked(candidate):
                continue
            path = pathfinder.find_path(pos, candidate)
            if len(path) > 1:
                if cfg.optimize_path and optimizer is not None:
                    path = optimizer.optimize(path)
                logger.debug("Exploring toward %s (%d waypoints)", candidate, len(path))
                advice = ExplorationAdvice(destination=candidate, path=tuple(path))
                self._last_advice = advice
                self._last_advice_at = now
                return advice

        self._last_advice = None
        self._last_advice_at = None
        return self.follow_wall(pos, safety, blocking)

    def _resume(self, pos: Vector2) -> ExplorationAdvice | None:
        """The cached advisory re-anchored at *pos*, or None once its route is used up.

        Waypoints the agent has reached are dropped so the next waypoint is
        always one still ahead of it.
        """
        advice = self._last_advice
        path = advice.path
        reached = 0
        for i in range(1, len(path)):
            if pos.distance(path[i]) <= _ARRIVAL_RADIUS:
                reached = i
        remaining = path[reached + 1:]
        if not remaining:
            return None
        if reached == 0 and path[0] == pos:
            return advice
        resumed = ExplorationAdvice(
            destination=advice.destination, path=(pos, *remaining), fallback=advice.fallback,
        )
        self._last_advice = resumed
        return resumed

    @staticmethod
    def follow_wall(
        pos: Vector2,
        safety: ThreatSafetyEvaluator,
        blocking: BlockingTest,
    ) -> ExplorationAdvice | None:
        """One unit step toward the first safe, open neighbour."""
        for d in COMPASS:
            step = pos + d
            if safety.is_safe(step) and not blocking.is_point_blocked(step):
                logger.debug("No exploration route; wall-following to %s", step)
                return ExplorationAdvice(destination=step, path=(pos, step), fallback=True)
        logger.debug("Boxed in at %s; standing by", pos)
        return None
