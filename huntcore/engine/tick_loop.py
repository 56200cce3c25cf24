"""TickLoop — drives the decision engine on a fixed period.

One pass per tick, never overlapping: the next tick starts only after the
current one has returned (and, in realtime mode, after the remainder of
``tick_interval`` has been slept away).  Game time advances by exactly
``tick_interval`` per tick, so headless runs replay identically.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from huntcore.engine.sandbox import SandboxWorld

if TYPE_CHECKING:
    from huntcore.ai.engine import DecisionEngine, TickResult
    from huntcore.config import EngineConfig
    from huntcore.core.world import WorldQuery
    from huntcore.utils.replay import DecisionRecorder

logger = logging.getLogger(__name__)


class TickLoop:
    """The heartbeat of the agent."""

    __slots__ = ("_config", "_engine", "_world", "_recorder", "_sleep", "_ticks", "_last_result")

    def __init__(
        self,
        config: EngineConfig,
        engine: DecisionEngine,
        world: WorldQuery,
        recorder: DecisionRecorder | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._engine = engine
        self._world = world
        self._recorder = recorder
        self._sleep = sleep
        self._ticks = 0
        self._last_result: TickResult | None = None

    @property
    def world(self) -> WorldQuery:
        return self._world

    @property
    def engine(self) -> DecisionEngine:
        return self._engine

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def game_time(self) -> float:
        return self._ticks * self._config.tick_interval

    @property
    def last_result(self) -> TickResult | None:
        return self._last_result

    def tick_once(self) -> TickResult:
        """Run one decision pass and let the sandbox act on it."""
        result = self._engine.tick(self._world, now=self.game_time)
        if isinstance(self._world, SandboxWorld):
            for message in self._world.advance(result):
                logger.debug("Tick %d: %s", result.tick, message)
        if self._recorder is not None:
            self._recorder.record_tick(result, self._world.self_state())
        self._ticks += 1
        self._last_result = result
        return result

    def run(self, max_ticks: int, realtime: bool = True) -> int:
        """Run up to *max_ticks* ticks; returns the number executed."""
        logger.info("=== Decision loop started (%d ticks, interval %.2fs) ===",
                    max_ticks, self._config.tick_interval)
        executed = 0
        try:
            for _ in range(max_ticks):
                started = time.perf_counter()
                self.tick_once()
                executed += 1
                if realtime:
                    remaining = self._config.tick_interval - (time.perf_counter() - started)
                    if remaining > 0:
                        self._sleep(remaining)
        finally:
            logger.info("=== Decision loop finished after %d ticks ===", executed)
            if self._recorder is not None:
                self._recorder.flush()
        return executed
