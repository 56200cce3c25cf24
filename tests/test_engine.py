"""Integration tests for DecisionEngine.tick."""

import logging
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from huntcore.ai.engine import DecisionEngine
from huntcore.config import EngineConfig
from huntcore.core.enums import Outcome
from huntcore.core.models import Vector2
from huntcore.utils.event_log import EventLog
from tests.helpers.arena import AGENT_ID, Arena


def _engine(arena: Arena, **kwargs) -> DecisionEngine:
    return DecisionEngine(arena.config, **kwargs)


class TestOutcomes:
    def test_engage_reachable_monster(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.add_monster(2, 5.5, 0.5)
        result = _engine(arena).tick(arena.world, now=0.0)
        assert result.outcome is Outcome.ENGAGE
        assert result.exploration is None
        assert result.decision.target.id == 2
        assert result.decision.path == (Vector2(0.5, 0.5), Vector2(5.5, 0.5))
        assert result.next_waypoint == Vector2(5.5, 0.5)
        assert [s.entity.id for s in result.ranked] == [2]

    def test_engage_attacker_without_path(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.enclose({(0, 0)})
        arena.add_monster(2, 8.5, 0.5, target_id=AGENT_ID, aggressive=True, dx=-1)
        result = _engine(arena).tick(arena.world, now=0.0)
        assert result.outcome is Outcome.ENGAGE
        assert result.decision.path == ()
        assert result.next_waypoint is None

    def test_explore_when_nothing_to_hunt(self):
        arena = Arena(agent=(0.5, 0.5))
        engine = _engine(arena)
        result = engine.tick(arena.world, now=0.0)
        assert result.outcome is Outcome.EXPLORE
        assert result.decision is None
        assert result.exploration.destination == Vector2(5.5, 5.5)
        assert result.next_waypoint == result.exploration.path[1]
        assert len(engine.heatmap) == 1

    def test_unreachable_monster_falls_through(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.enclose({(0, 0), (1, 0)})
        arena.add_monster(2, 5.5, 0.5)
        result = _engine(arena).tick(arena.world, now=0.0)
        assert result.outcome is Outcome.WALL_FOLLOW
        assert result.decision is None
        assert [s.entity.id for s in result.ranked] == [2]

    def test_wall_follow(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.enclose({(0, 0), (1, 0)})
        result = _engine(arena).tick(arena.world, now=0.0)
        assert result.outcome is Outcome.WALL_FOLLOW
        assert result.exploration.destination == Vector2(1.5, 0.5)

    def test_stand_by_when_boxed_in(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.enclose({(0, 0)})
        result = _engine(arena).tick(arena.world, now=0.0)
        assert result.outcome is Outcome.STAND_BY
        assert result.decision is None and result.exploration is None
        assert result.next_waypoint is None


class TestEngineState:
    def test_tick_counter_and_last_result(self):
        arena = Arena(agent=(0.5, 0.5))
        arena.add_monster(2, 5.5, 0.5)
        engine = _engine(arena)
        first = engine.tick(arena.world, now=0.0)
        second = engine.tick(arena.world, now=0.4)
        assert (first.tick, second.tick) == (1, 2)
        assert engine.tick_count == 2
        assert engine.last_result is second
        assert engine.last_decision is second.decision

    def test_clock_used_when_no_time_given(self):
        arena = Arena(agent=(0.5, 0.5))
        engine = _engine(arena, clock=lambda: 42.0)
        engine.tick(arena.world)
        assert engine.heatmap.cells[0].last_visited_at == 42.0

    def test_engines_are_independent(self):
        a = Arena(agent=(0.5, 0.5))
        b = Arena(agent=(0.5, 0.5))
        b.add_monster(2, 5.5, 0.5)
        engine_a, engine_b = _engine(a), _engine(b)
        engine_a.tick(a.world, now=0.0)
        engine_a.tick(a.world, now=0.4)
        result_b = engine_b.tick(b.world, now=0.0)
        assert result_b.tick == 1
        assert result_b.outcome is Outcome.ENGAGE
        assert len(engine_b.heatmap) == 0
        assert engine_a.heatmap is not engine_b.heatmap

    def test_reset_forgets_everything(self):
        arena = Arena(agent=(0.5, 0.5))
        engine = _engine(arena)
        engine.tick(arena.world, now=0.0)
        engine.reset()
        assert engine.tick_count == 0
        assert engine.last_result is None
        assert len(engine.heatmap) == 0
        assert len(engine.event_log) == 0

    def test_events_written_to_shared_log(self):
        log = EventLog()
        arena = Arena(agent=(0.5, 0.5))
        arena.add_monster(2, 5.5, 0.5)
        engine = _engine(arena, event_log=log)
        assert engine.event_log is log
        engine.tick(arena.world, now=0.0)
        event = log.latest(1)[0]
        assert event.tick == 1
        assert event.outcome == "ENGAGE"
        assert event.target_id == 2
        assert event.waypoints == 2


class TestUnknownKinds:
    def test_warned_once_and_never_targeted(self, caplog):
        arena = Arena(agent=(0.5, 0.5))
        arena.add(2, "ghost", 3.5, 0.5)
        engine = _engine(arena)
        with caplog.at_level(logging.WARNING, logger="huntcore.ai.engine"):
            first = engine.tick(arena.world, now=0.0)
            engine.tick(arena.world, now=0.4)
        warnings = [r for r in caplog.records if "ghost" in r.getMessage()]
        assert len(warnings) == 1
        assert first.ranked == ()
        assert first.outcome is Outcome.EXPLORE

    def test_custom_signals(self):
        arena = Arena(EngineConfig(), agent=(0.5, 0.5))
        arena.add_monster(2, 5.5, 0.5)
        result = _engine(arena, signals=[]).tick(arena.world, now=0.0)
        assert result.ranked[0].score == 0
        assert result.outcome is Outcome.ENGAGE
