"""Threat-aware A* pathfinding over a fixed-step 8-connected grid.

The grid is anchored at the start position: node (i, j) sits at
``start + (i, j) * path_step_size``.  Nodes live in an arena indexed by
integer handles and are discarded when the search returns.

Usage:
    pf = GridPathfinder(snapshot, config, safety, blocking)
    path = pf.find_path(agent.pos, monster)            # list[Vector2]
    path = pf.find_path(agent.pos, monster, max_distance=4.1)
"""

from __future__ import annotations

import heapq
import logging
import math
from typing import TYPE_CHECKING

from huntcore.core.geometry import offset_along
from huntcore.core.models import COMPASS, EntitySnapshot, Vector2

if TYPE_CHECKING:
    from huntcore.ai.blocking import BlockingTest
    from huntcore.ai.safety import ThreatSafetyEvaluator
    from huntcore.config import EngineConfig
    from huntcore.core.snapshot import WorldSnapshot

logger = logging.getLogger(__name__)

_SQRT2 = math.sqrt(2.0)


class _NodeArena:
    """Parallel arrays of search nodes; a node is its integer handle."""

    __slots__ = ("gx", "gy", "g", "h", "f", "parent")

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        self.gx: list[int] = []
        self.gy: list[int] = []
        self.g: list[float] = []
        self.h: list[float] = []
        self.f: list[float] = []
        self.parent: list[int] = []

    def add(self, gx: int, gy: int, g: float, h: float, parent: int) -> int:
        self.gx.append(gx)
        self.gy.append(gy)
        self.g.append(g)
        self.h.append(h)
        self.f.append(g + h)
        self.parent.append(parent)
        return len(self.g) - 1

    def relax(self, handle: int, g: float, parent: int) -> None:
        self.g[handle] = g
        self.f[handle] = g + self.h[handle]
        self.parent[handle] = parent

    def __len__(self) -> int:
        return len(self.g)


class GridPathfinder:
    """A* pathfinder pruning watched grid points and steps that cross terrain.

    Bounded: gives up after ``max_pathfinding_iterations`` node selections
    and returns the route to the explored node nearest the target.
    """

    __slots__ = ("_snapshot", "_config", "_safety", "_blocking", "_arena", "_last_iterations")

    def __init__(
        self,
        snapshot: WorldSnapshot,
        config: EngineConfig,
        safety: ThreatSafetyEvaluator,
        blocking: BlockingTest,
    ) -> None:
        self._snapshot = snapshot
        self._config = config
        self._safety = safety
        self._blocking = blocking
        self._arena = _NodeArena()
        self._last_iterations = 0

    @property
    def last_iterations(self) -> int:
        """Node selections made by the most recent search."""
        return self._last_iterations

    def adjusted_target(self, target: EntitySnapshot | Vector2) -> Vector2:
        """Where the search should aim for *target*.

        Aggressive monsters are approached from ``proximity_to_action`` units
        behind, along their facing.  Everything else is used as-is.
        """
        if isinstance(target, Vector2):
            return target
        info = self._snapshot.kind_of(target)
        if info is not None and info.is_monster and target.aggressive:
            return offset_along(target.pos, target.facing, self._config.proximity_to_action)
        return target.pos

    def find_path(
        self,
        start: Vector2,
        target: EntitySnapshot | Vector2,
        max_distance: float | None = None,
    ) -> list[Vector2]:
        """Compute a safe path from *start* toward *target*.

        Returns the positions from *start* (inclusive) to the goal.  An empty
        or single-point list means no route.  With *max_distance* the search
        stops at the first point within that range with a clear line of sight.
        """
        cfg = self._config
        goal = self.adjusted_target(target)
        self._last_iterations = 0

        if max_distance is not None and start.distance(goal) <= max_distance:
            return [start, start]

        step = cfg.path_step_size
        arena = self._arena
        arena.clear()

        root = arena.add(0, 0, 0.0, start.distance(goal), -1)
        counter = 0
        open_heap: list[tuple[float, int, int]] = [(arena.f[root], counter, root)]
        open_index: dict[tuple[int, int], int] = {(0, 0): root}
        closed: set[tuple[int, int]] = set()
        passable: dict[tuple[int, int], bool] = {}
        crossable: dict[tuple[tuple[int, int], tuple[int, int]], bool] = {}
        best = root
        iterations = 0

        try:
            while open_heap:
                f, _, handle = heapq.heappop(open_heap)
                key = (arena.gx[handle], arena.gy[handle])
                if key in closed or f != arena.f[handle]:
                    continue  # stale heap entry

                iterations += 1
                if iterations > cfg.max_pathfinding_iterations:
                    self._last_iterations = iterations - 1
                    logger.debug(
                        "Pathfinding aborted after %d iterations (%d nodes), toward %s",
                        iterations - 1, len(arena), goal,
                    )
                    return self._reconstruct(start, best) if best != root else []

                pos = self._at(start, key)
                dist = pos.distance(goal)
                if max_distance is not None:
                    if dist <= max_distance and self._blocking.has_line_of_sight(pos, goal):
                        self._last_iterations = iterations
                        return self._reconstruct(start, handle)
                elif dist <= cfg.path_proximity:
                    self._last_iterations = iterations
                    path = self._reconstruct(start, handle)
                    if path[-1] != goal:
                        path.append(goal)
                    return path

                closed.add(key)
                del open_index[key]
                if arena.h[handle] < arena.h[best]:
                    best = handle

                gx, gy = key
                current_g = arena.g[handle]
                directions = sorted(
                    COMPASS,
                    key=lambda d: math.hypot(pos.x + d.x * step - goal.x, pos.y + d.y * step - goal.y),
                )
                for d in directions:
                    nkey = (gx + int(d.x), gy + int(d.y))
                    if nkey in closed:
                        continue
                    npos = self._at(start, nkey)
                    ok = passable.get(nkey)
                    if ok is None:
                        ok = not self._blocking.is_point_blocked(npos) and self._safety.is_safe(npos)
                        passable[nkey] = ok
                    if not ok:
                        continue
                    edge = (key, nkey) if key < nkey else (nkey, key)
                    clear = crossable.get(edge)
                    if clear is None:
                        clear = not self._blocking.is_path_blocked(pos, npos)
                        crossable[edge] = clear
                    if not clear:
                        continue

                    tentative_g = current_g + (step if d.x == 0 or d.y == 0 else step * _SQRT2)
                    existing = open_index.get(nkey)
                    if existing is None:
                        node = arena.add(nkey[0], nkey[1], tentative_g, npos.distance(goal), handle)
                        open_index[nkey] = node
                    elif tentative_g < arena.g[existing]:
                        node = existing
                        arena.relax(node, tentative_g, handle)
                    else:
                        continue
                    counter += 1
                    heapq.heappush(open_heap, (arena.f[node], counter, node))

            self._last_iterations = iterations
            logger.debug("No path found toward %s after %d iterations", goal, iterations)
            return []
        finally:
            arena.clear()

    def _at(self, start: Vector2, key: tuple[int, int]) -> Vector2:
        step = self._config.path_step_size
        return Vector2(start.x + key[0] * step, start.y + key[1] * step)

    def _reconstruct(self, start: Vector2, handle: int) -> list[Vector2]:
        """Walk parent handles back to the root and reverse."""
        arena = self._arena
        path: list[Vector2] = []
        while handle != -1:
            path.append(self._at(start, (arena.gx[handle], arena.gy[handle])))
            handle = arena.parent[handle]
        path.reverse()
        return path
