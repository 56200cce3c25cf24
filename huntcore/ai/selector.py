"""Target selection: first scored candidate that is actionable this tick."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from huntcore.core.models import Decision, ScoredTarget

if TYPE_CHECKING:
    from huntcore.ai.optimizer import PathOptimizer
    from huntcore.ai.pathfinding import GridPathfinder
    from huntcore.config import EngineConfig
    from huntcore.core.models import SelfState

logger = logging.getLogger(__name__)


class TargetSelector:
    """Walks the ranked list and returns the first actionable candidate.

    A candidate already targeting the agent is taken immediately, without
    path validation.  Any other candidate needs a non-negative score and a
    pathfinder route of more than one point.  There is no fallback search:
    the first match wins and exhausting the list yields ``None``.
    """

    __slots__ = ("_config", "_pathfinder", "_optimizer")

    def __init__(
        self,
        config: EngineConfig,
        pathfinder: GridPathfinder,
        optimizer: PathOptimizer | None = None,
    ) -> None:
        self._config = config
        self._pathfinder = pathfinder
        self._optimizer = optimizer

    def select(self, agent: SelfState, ranked: Sequence[ScoredTarget]) -> Decision | None:
        cfg = self._config
        for candidate in ranked:
            entity = candidate.entity
            info = candidate.kind_info

            if entity.targets(agent.id):
                logger.debug("Entity %d (%s) is engaging us, selected without path", entity.id, entity.kind)
                return self._decision(candidate, ())

            if candidate.score < 0:
                continue

            max_distance = cfg.ranged_attack_range if info.is_monster else None
            path = self._pathfinder.find_path(agent.pos, entity, max_distance=max_distance)
            if len(path) <= 1:
                logger.debug("No route to entity %d (%s), score %.1f", entity.id, entity.kind, candidate.score)
                continue

            if cfg.optimize_path and self._optimizer is not None:
                path = self._optimizer.optimize(path)
            return self._decision(candidate, tuple(path))
        return None

    @staticmethod
    def _decision(candidate: ScoredTarget, path: tuple) -> Decision:
        info = candidate.kind_info
        return Decision(
            target=candidate.entity,
            path=path,
            score=candidate.score,
            is_attackable=info.is_monster,
            is_gatherable=info.is_resource,
        )
