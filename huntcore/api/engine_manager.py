"""EngineManager — runs the sandbox TickLoop on a background thread.

The tick thread is the only writer of the world, the engine and its heatmap.
After every tick it publishes an immutable ``PublishedTick`` behind a lock;
API handlers only ever read that.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from huntcore.ai.engine import DecisionEngine, TickResult
from huntcore.core.models import EntitySnapshot, SelfState
from huntcore.engine.tick_loop import TickLoop
from huntcore.systems.scenario import ScenarioGenerator
from huntcore.utils.event_log import EventLog

if TYPE_CHECKING:
    from huntcore.config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PublishedTick:
    """Everything the API may read about the most recent tick."""

    tick: int
    result: TickResult | None
    agent: SelfState
    entities: tuple[EntitySnapshot, ...]
    heatmap: tuple[dict[str, float], ...]


class EngineManager:
    """Manages the sandbox lifecycle on a background thread.

    Provides thread-safe access to:
      - the latest published tick (atomic reference swap)
      - the event log (lock-guarded)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: EngineConfig, seed: int = 42, monsters: int = 12) -> None:
        self.config = config
        self.seed = seed
        self._monsters = monsters
        self._tick_rate: float = config.tick_interval

        self._loop: TickLoop | None = None

        # Thread-safe shared state
        self._publish_lock = threading.Lock()
        self._latest: PublishedTick | None = None
        self._event_log = EventLog()

        # Control
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    # -- published state --

    def get_published(self) -> PublishedTick | None:
        with self._publish_lock:
            return self._latest

    def current_tick(self) -> int:
        published = self.get_published()
        return published.tick if published else 0

    # -- lifecycle --

    def start(self) -> None:
        if self._running.is_set():
            return
        self._stop_requested.clear()
        self._paused.clear()
        self._running.set()
        self._thread = threading.Thread(target=self._run_loop, name="decision-loop", daemon=True)
        self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self.current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self.current_tick())

    def step(self) -> None:
        """Execute exactly one tick (pauses first if needed)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild the sandbox, and leave it ready to start."""
        self.stop()
        self._event_log.clear()
        self._build()
        logger.info("EngineManager reset.")

    def run_ticks(self, count: int) -> int:
        """Run *count* ticks synchronously on the caller's thread (not while running)."""
        if self._running.is_set():
            raise RuntimeError("Cannot run ticks synchronously while the loop thread is running")
        assert self._loop is not None
        for _ in range(count):
            self._loop.tick_once()
            self._publish()
        return self.current_tick()

    # -- internals --

    def _build(self) -> None:
        world = ScenarioGenerator(self.config, self.seed).generate(monsters=self._monsters)
        engine = DecisionEngine(self.config, event_log=self._event_log)
        self._loop = TickLoop(self.config, engine, world)
        self._publish()

    def _run_loop(self) -> None:
        """Background thread main loop."""
        logger.info("Decision thread started.")
        assert self._loop is not None

        try:
            while not self._stop_requested.is_set():
                if self._paused.is_set() and not self._step_requested.is_set():
                    time.sleep(0.01)
                    continue

                single_step = self._step_requested.is_set()
                if single_step:
                    self._step_requested.clear()

                self._loop.tick_once()
                self._publish()

                if not single_step:
                    time.sleep(self._tick_rate)
        except Exception:
            logger.exception("Decision thread crashed after tick %d", self.current_tick())
        finally:
            self._running.clear()
            logger.info("Decision thread exited.")

    def _publish(self) -> None:
        assert self._loop is not None
        world = self._loop.world
        published = PublishedTick(
            tick=self._loop.ticks,
            result=self._loop.last_result,
            agent=world.self_state(),
            entities=tuple(world.enumerate_entities()),
            heatmap=tuple(self._loop.engine.heatmap.to_records()),
        )
        with self._publish_lock:
            self._latest = published
