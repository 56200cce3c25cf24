"""Tests for the sandbox world, scenario generation and the tick loop."""

import json
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from huntcore.ai.engine import DecisionEngine, TickResult
from huntcore.config import EngineConfig
from huntcore.core.enums import Outcome
from huntcore.core.models import Decision, EntitySnapshot, ExplorationAdvice, KindInfo, SelfState, Vector2
from huntcore.engine.sandbox import SandboxWorld
from huntcore.engine.tick_loop import TickLoop
from huntcore.systems.scenario import AGENT_ID, ScenarioGenerator
from huntcore.utils.replay import DecisionRecorder
from tests.helpers.arena import Arena

MONSTER = KindInfo("monster", "Monster", is_monster=True)


def _sandbox(**kwargs) -> SandboxWorld:
    world = SandboxWorld(
        SelfState(id=AGENT_ID, x=0.5, y=0.5), 20, 20, origin_x=-10, origin_y=-10, **kwargs)
    world.register_kind(MONSTER)
    return world


def _explore(dest: Vector2, start: Vector2) -> TickResult:
    advice = ExplorationAdvice(destination=dest, path=(start, dest))
    return TickResult(tick=1, decision=None, exploration=advice, outcome=Outcome.EXPLORE)


def _engage(target: EntitySnapshot, path=()) -> TickResult:
    decision = Decision(target=target, path=tuple(path), score=10.0, is_attackable=True, is_gatherable=False)
    return TickResult(tick=1, decision=decision, exploration=None, outcome=Outcome.ENGAGE)


# ---------------------------------------------------------------------------
# SandboxWorld
# ---------------------------------------------------------------------------

class TestSandboxAgent:
    def test_walks_toward_next_waypoint(self):
        world = _sandbox()
        world.apply(_explore(Vector2(5.5, 0.5), world.agent.pos))
        assert world.agent.pos == Vector2(1.25, 0.5)

    def test_short_final_step(self):
        world = _sandbox()
        world.apply(_explore(Vector2(0.9, 0.5), world.agent.pos))
        assert world.agent.x == pytest.approx(0.9)

    def test_wall_stops_agent(self):
        world = _sandbox()
        world.set_wall(1.2, 0.5)
        world.apply(_explore(Vector2(5.5, 0.5), world.agent.pos))
        assert world.agent.pos == Vector2(0.5, 0.5)

    def test_hit_then_defeat(self):
        world = _sandbox(attack_damage=25.0)
        world.add_entity(EntitySnapshot(id=2, kind="monster", x=1.0, y=0.5, hp=30, max_hp=30))

        events = world.apply(_engage(world.entity(2)))
        assert events == ["hit monster #2 (5/30)"]
        hit = world.entity(2)
        assert hit.hp == 5
        assert hit.aggressive and hit.targets(AGENT_ID)

        events = world.apply(_engage(world.entity(2)))
        assert events == ["defeated monster #2"]
        assert world.entity(2) is None
        assert world.kills == 1

    def test_out_of_reach_walks_along_path(self):
        world = _sandbox()
        world.add_entity(EntitySnapshot(id=2, kind="monster", x=5.5, y=0.5))
        world.apply(_engage(world.entity(2), [world.agent.pos, Vector2(0.5, 3.5)]))
        assert world.agent.pos == Vector2(0.5, 1.25)

    def test_vanished_target_is_ignored(self):
        world = _sandbox()
        ghost = EntitySnapshot(id=9, kind="monster", x=1.0, y=0.5)
        assert world.apply(_engage(ghost)) == []
        assert world.agent.pos == Vector2(0.5, 0.5)


class TestSandboxMonsters:
    def test_attacker_closes_in(self):
        world = _sandbox()
        world.add_entity(EntitySnapshot(id=2, kind="monster", x=3.5, y=0.5, target_id=AGENT_ID))
        world.step_monsters()
        assert world.entity(2).x == pytest.approx(3.2)

    def test_bounces_off_walls(self):
        world = _sandbox()
        world.set_wall(3.5, 0.5)
        world.add_entity(EntitySnapshot(id=2, kind="monster", x=2.9, y=0.5, dx=1.0, dy=0.0))
        world.step_monsters()
        moved = world.entity(2)
        assert (moved.x, moved.y) == (2.9, 0.5)
        assert moved.facing == Vector2(-1.0, -0.0)

    def test_stationary_monster_stays(self):
        world = _sandbox()
        world.add_entity(EntitySnapshot(id=2, kind="monster", x=4.5, y=0.5))
        world.step_monsters()
        assert world.entity(2).pos == Vector2(4.5, 0.5)

    def test_advance_counts_ticks(self):
        world = _sandbox()
        world.advance(_explore(Vector2(5.5, 0.5), world.agent.pos))
        assert world.tick == 1


# ---------------------------------------------------------------------------
# ScenarioGenerator
# ---------------------------------------------------------------------------

def _layout(world: SandboxWorld):
    cells = [
        (world.surface.get_cell(x, y), world.underground.get_cell(x, y))
        for y in range(world.surface.height) for x in range(world.surface.width)
    ]
    return cells, world.enumerate_entities()


class TestScenario:
    def test_same_seed_same_world(self):
        config = EngineConfig()
        a = ScenarioGenerator(config, 7).generate()
        b = ScenarioGenerator(config, 7).generate()
        assert _layout(a) == _layout(b)

    def test_different_seed_different_world(self):
        config = EngineConfig()
        a = ScenarioGenerator(config, 7).generate()
        b = ScenarioGenerator(config, 8).generate()
        assert _layout(a) != _layout(b)

    def test_population(self):
        world = ScenarioGenerator(EngineConfig(), 3).generate(monsters=5, resources=2)
        assert world.entity_count == 7
        for e in world.enumerate_entities():
            assert world.is_walkable(e.pos)
            assert e.pos.distance(world.agent.pos) >= 4.0
            assert e.id != AGENT_ID

    def test_station_only_when_recycling(self):
        world = ScenarioGenerator(EngineConfig(recycle_items=True), 3).generate(monsters=5, resources=2)
        assert world.entity_count == 8
        assert [e.kind for e in world.enumerate_entities()].count("station") == 1

    def test_start_area_open(self):
        world = ScenarioGenerator(EngineConfig(), 11).generate(walls=400, holes=100)
        for dx in (-2, -1, 0, 1, 2):
            for dy in (-2, -1, 0, 1, 2):
                assert world.is_walkable(Vector2(0.5 + dx, 0.5 + dy))


# ---------------------------------------------------------------------------
# TickLoop
# ---------------------------------------------------------------------------

class TestTickLoop:
    def test_headless_run(self):
        arena = Arena(agent=(0.5, 0.5))
        loop = TickLoop(arena.config, DecisionEngine(arena.config), arena.world)
        assert loop.run(5, realtime=False) == 5
        assert loop.ticks == 5
        assert loop.game_time == pytest.approx(2.0)
        assert loop.last_result.tick == 5

    def test_engine_sees_game_time(self):
        arena = Arena(agent=(0.5, 0.5))
        engine = DecisionEngine(arena.config)
        loop = TickLoop(arena.config, engine, arena.world)
        loop.run(3, realtime=False)
        cell = engine.heatmap.cells[0]
        assert cell.score == 3.0
        assert cell.last_visited_at == pytest.approx(0.8)

    def test_realtime_sleeps_remainder(self):
        arena = Arena(agent=(0.5, 0.5))
        sleeps: list[float] = []
        loop = TickLoop(arena.config, DecisionEngine(arena.config), arena.world, sleep=sleeps.append)
        loop.run(3, realtime=True)
        assert len(sleeps) <= 3
        assert all(0 < s <= arena.config.tick_interval for s in sleeps)

    def test_recorder_flushed(self, tmp_path):
        arena = Arena(agent=(0.5, 0.5))
        arena.add_monster(2, 5.5, 0.5)
        out = tmp_path / "runs" / "decisions.json"
        recorder = DecisionRecorder(out, seed=5)
        loop = TickLoop(arena.config, DecisionEngine(arena.config), arena.world, recorder=recorder)
        loop.run(2, realtime=False)

        data = json.loads(out.read_text())
        assert data["seed"] == 5
        assert data["total_ticks"] == 2
        first = data["ticks"][0]
        assert first["tick"] == 1
        assert first["outcome"] == "ENGAGE"
        assert first["target"]["id"] == 2
        assert first["target"]["path"][-1] == [5.5, 0.5]

    def test_sandbox_run_is_deterministic(self):
        def run(seed: int):
            config = EngineConfig()
            world = ScenarioGenerator(config, seed).generate(monsters=8)
            loop = TickLoop(config, DecisionEngine(config), world)
            loop.run(25, realtime=False)
            return world.agent.pos, world.kills, world.enumerate_entities()

        assert run(21) == run(21)

    def test_explorer_moves_agent_every_tick(self):
        config = EngineConfig()
        world = _sandbox()
        loop = TickLoop(config, DecisionEngine(config), world)
        for _ in range(6):
            before = world.agent.pos
            result = loop.tick_once()
            assert result.outcome is Outcome.EXPLORE
            assert world.agent.pos != before

    def test_sandbox_agent_moves(self):
        config = EngineConfig()
        world = ScenarioGenerator(config, 21).generate(monsters=8)
        start = world.agent.pos
        TickLoop(config, DecisionEngine(config), world).run(10, realtime=False)
        assert world.agent.pos != start
        assert world.tick == 10
