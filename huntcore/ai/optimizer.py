"""Greedy line-of-sight path compression."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from huntcore.core.models import Vector2

if TYPE_CHECKING:
    from huntcore.ai.blocking import BlockingTest
    from huntcore.ai.safety import ThreatSafetyEvaluator


class PathOptimizer:
    """Drops intermediate waypoints the agent can skip with a straight walk.

    From each anchor the scan extends while the direct segment stays both
    unwatched and unblocked, stops at the first failure and keeps the last
    success.  The result is a subsequence of the input with the same first
    and last points.
    """

    __slots__ = ("_safety", "_blocking")

    def __init__(self, safety: ThreatSafetyEvaluator, blocking: BlockingTest) -> None:
        self._safety = safety
        self._blocking = blocking

    def is_clear(self, start: Vector2, end: Vector2) -> bool:
        return self._safety.is_safe_path(start, end) and not self._blocking.is_path_blocked(start, end)

    def optimize(self, path: Sequence[Vector2]) -> list[Vector2]:
        if len(path) <= 2:
            return list(path)

        optimized = [path[0]]
        i = 0
        last = len(path) - 1
        while i < last:
            farthest = i + 1
            for j in range(i + 1, len(path)):
                if self.is_clear(path[i], path[j]):
                    farthest = j
                else:
                    break
            i = farthest
            optimized.append(path[i])
        return optimized
