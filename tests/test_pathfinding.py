"""Unit + property tests for the threat-aware A* pathfinder and the path optimizer."""

import heapq
import math
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from huntcore.config import EngineConfig
from huntcore.core.enums import Domain
from huntcore.core.geometry import path_length
from huntcore.core.models import COMPASS, Vector2
from huntcore.systems.rng import DeterministicRNG
from tests.helpers.arena import Arena

START = Vector2(0.5, 0.5)


def _dijkstra(blocking, start: Vector2, goal: Vector2, step: float) -> float | None:
    """Brute-force shortest distance over the same 8-connected lattice."""
    goal_key = (round((goal.x - start.x) / step), round((goal.y - start.y) / step))
    dist = {(0, 0): 0.0}
    heap = [(0.0, (0, 0))]
    done = set()
    while heap:
        d, key = heapq.heappop(heap)
        if key in done:
            continue
        done.add(key)
        if key == goal_key:
            return d
        for off in COMPASS:
            nkey = (key[0] + int(off.x), key[1] + int(off.y))
            if nkey in done:
                continue
            pos = Vector2(start.x + nkey[0] * step, start.y + nkey[1] * step)
            if blocking.is_point_blocked(pos):
                continue
            here = Vector2(start.x + key[0] * step, start.y + key[1] * step)
            if blocking.is_path_blocked(here, pos):
                continue
            nd = d + (step if off.x == 0 or off.y == 0 else step * math.sqrt(2))
            if nd < dist.get(nkey, math.inf):
                dist[nkey] = nd
                heapq.heappush(heap, (nd, nkey))
    return None


# ---------------------------------------------------------------------------
# Basic search
# ---------------------------------------------------------------------------

class TestPathfinderBasic:
    def test_straight_line_to_passive_monster(self):
        arena = Arena(EngineConfig(path_step_size=1.0))
        arena.add_monster(2, 5, 0)
        path = arena.tools().pathfinder.find_path(arena.agent_pos, arena.entity(2))
        assert path == [Vector2(float(i), 0.0) for i in range(6)]

    def test_approach_hostile_from_behind(self):
        """Agent at the origin, aggressive monster at (5, 0) facing us."""
        arena = Arena(EngineConfig(path_step_size=1.0, max_pathfinding_iterations=500))
        arena.add_hostile(2, 5, 0, dx=-1, dy=0)
        tools = arena.tools()
        target = tools.pathfinder.adjusted_target(arena.entity(2))
        assert target == Vector2(5.5, 0.0)

        path = tools.pathfinder.find_path(arena.agent_pos, arena.entity(2))
        assert len(path) >= 2
        assert path[0] == arena.agent_pos
        assert path[-1].distance(target) <= arena.config.path_proximity
        for p in path[1:-1]:
            assert tools.safety.is_safe(p), f"waypoint {p} is watched"

    def test_goal_appended_when_not_on_lattice(self):
        arena = Arena()
        arena.add_monster(2, 5.5, 0.5)
        path = arena.tools().pathfinder.find_path(START, Vector2(5.5, 0.5))
        assert path[-1] == Vector2(5.5, 0.5)
        assert path[-2] != path[-1]

    def test_point_target_used_as_is(self):
        arena = Arena()
        assert arena.tools().pathfinder.adjusted_target(Vector2(3, 4)) == Vector2(3, 4)

    def test_route_around_wall(self):
        arena = Arena(EngineConfig(path_step_size=1.0))
        arena.wall_cells((3, y) for y in range(-3, 4))
        tools = arena.tools()
        path = tools.pathfinder.find_path(START, Vector2(6.5, 0.5))
        assert path[-1] == Vector2(6.5, 0.5)
        for p in path:
            assert not tools.blocking.is_point_blocked(p)

    def test_diagonal_wall_is_not_cut_through(self):
        arena = Arena(EngineConfig(max_pathfinding_iterations=5000))
        arena.wall_cells((2 + k, -k) for k in range(-4, 5))
        tools = arena.tools()
        goal = Vector2(6, 4)
        path = tools.pathfinder.find_path(arena.agent_pos, goal)
        assert path[-1] == goal
        crossings = [(a, b) for a, b in zip(path, path[1:]) if tools.blocking.is_path_blocked(a, b)]
        assert crossings == []

    def test_boxed_in_agent_gets_no_path(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.enclose({(0, 0)})
        assert arena.tools().pathfinder.find_path(START, Vector2(8.5, 0.5)) == []

    def test_unreachable_target_gets_no_path(self):
        arena = Arena(EngineConfig(path_step_size=1.0, max_pathfinding_iterations=5000))
        arena.enclose({(6, 0)})
        assert arena.tools().pathfinder.find_path(START, Vector2(6.5, 0.5)) == []


class TestIterationCap:
    def test_cap_returns_partial_path_toward_target(self):
        arena = Arena(EngineConfig(path_step_size=1.0, max_pathfinding_iterations=5))
        goal = Vector2(15.5, 0.5)
        pf = arena.tools().pathfinder
        path = pf.find_path(START, goal)
        assert pf.last_iterations == 5
        assert len(path) >= 2
        assert path[0] == START
        assert path[-1] != goal
        assert path[-1].distance(goal) < START.distance(goal)

    def test_cap_before_any_progress_yields_empty(self):
        arena = Arena(EngineConfig(max_pathfinding_iterations=1))
        assert arena.tools().pathfinder.find_path(START, Vector2(15.5, 0.5)) == []


class TestRangedSearch:
    def test_stops_at_range_with_line_of_sight(self):
        arena = Arena(EngineConfig(path_step_size=1.0))
        arena.add_monster(2, 10.5, 0.5)
        path = arena.tools().pathfinder.find_path(START, arena.entity(2), max_distance=4.0)
        assert path[0] == START
        assert path[-1] == Vector2(6.5, 0.5)
        assert path[-1].distance(arena.entity(2).pos) <= 4.0

    def test_already_in_range(self):
        arena = Arena()
        arena.add_monster(2, 3.5, 0.5)
        path = arena.tools().pathfinder.find_path(START, arena.entity(2), max_distance=4.0)
        assert path == [START, START]


class TestAdmissibility:
    """A* path cost equals the brute-force optimum on the same lattice."""

    def _check(self, arena: Arena, goal: Vector2):
        tools = arena.tools()
        path = tools.pathfinder.find_path(START, goal)
        best = _dijkstra(tools.blocking, START, goal, arena.config.path_step_size)
        if best is None:
            assert path == []
        else:
            assert path[-1] == goal
            assert path_length(path) == pytest.approx(best)

    def test_fixed_layouts(self):
        config = EngineConfig(path_step_size=1.0, max_pathfinding_iterations=5000)
        open_arena = Arena(config)
        self._check(open_arena, Vector2(7.5, 3.5))

        wall = Arena(config)
        wall.wall_cells((3, y) for y in range(-3, 4))
        self._check(wall, Vector2(6.5, 0.5))

        pocket = Arena(config)
        pocket.wall_cells([(4, y) for y in range(-2, 3)] + [(x, 3) for x in range(1, 5)])
        self._check(pocket, Vector2(6.5, 1.5))

    def test_random_layouts(self):
        config = EngineConfig(path_step_size=1.0, max_pathfinding_iterations=5000)
        rng = DeterministicRNG(99)
        for case in range(12):
            arena = Arena(config)
            walls = [
                (rng.next_int(Domain.HARNESS, case, 2 * i, -6, 9),
                 rng.next_int(Domain.HARNESS, case, 2 * i + 1, -6, 9))
                for i in range(30)
            ]
            arena.wall_cells(c for c in walls if c != (0, 0))
            gx = rng.next_int(Domain.HARNESS, case, 500, 3, 9)
            gy = rng.next_int(Domain.HARNESS, case, 501, -6, 9)
            if (gx, gy) in walls:
                continue
            self._check(arena, Vector2(gx + 0.5, gy + 0.5))


# ---------------------------------------------------------------------------
# Optimizer
# ---------------------------------------------------------------------------

def _is_subsequence(short, long) -> bool:
    it = iter(long)
    return all(any(p == q for q in it) for p in short)


class TestPathOptimizer:
    # Detour around a wall occupying cells x=3, y=-3..4
    DETOUR = [
        Vector2(0.5, 0.5), Vector2(0.5, 2.5), Vector2(0.5, 5.5), Vector2(3.5, 5.5),
        Vector2(6.5, 5.5), Vector2(6.5, 2.5), Vector2(6.5, 0.5),
    ]

    def _walled(self) -> Arena:
        arena = Arena()
        arena.wall_cells((3, y) for y in range(-3, 5))
        return arena

    def test_straight_open_path_collapses(self):
        opt = Arena().tools().optimizer
        path = [Vector2(float(i), 0.0) for i in range(5)]
        assert opt.optimize(path) == [Vector2(0, 0), Vector2(4, 0)]

    def test_short_paths_unchanged(self):
        opt = Arena().tools().optimizer
        assert opt.optimize([]) == []
        assert opt.optimize([Vector2(1, 1)]) == [Vector2(1, 1)]
        assert opt.optimize([Vector2(0, 0), Vector2(9, 9)]) == [Vector2(0, 0), Vector2(9, 9)]

    def test_detour_keeps_corners(self):
        opt = self._walled().tools().optimizer
        result = opt.optimize(self.DETOUR)
        assert result == [self.DETOUR[0], self.DETOUR[2], self.DETOUR[4], self.DETOUR[6]]

    def test_output_is_subsequence_with_same_endpoints(self):
        tools = self._walled().tools()
        raw = tools.pathfinder.find_path(START, Vector2(6.5, 0.5))
        result = tools.optimizer.optimize(raw)
        assert result[0] == raw[0]
        assert result[-1] == raw[-1]
        assert _is_subsequence(result, raw)
        assert len(result) < len(raw)

    def test_idempotent_on_detour(self):
        opt = self._walled().tools().optimizer
        once = opt.optimize(self.DETOUR)
        assert opt.optimize(once) == once

    def test_watched_segment_is_not_skipped(self):
        arena = Arena()
        arena.add_hostile(2, 2, 3, dx=0, dy=-1)
        opt = arena.tools().optimizer
        path = [Vector2(0, 0), Vector2(0, -2), Vector2(4, -2), Vector2(4, 0)]
        result = opt.optimize(path)
        assert len(result) > 2
        assert result[0] == path[0] and result[-1] == path[-1]
