"""Decision recording — per-tick decisions written to a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from huntcore.ai.engine import TickResult
    from huntcore.core.models import SelfState

logger = logging.getLogger(__name__)


class DecisionRecorder:
    """Accumulates tick results and flushes them to a JSON file."""

    __slots__ = ("_path", "_ticks", "_seed")

    def __init__(self, path: str | Path, seed: int | None = None) -> None:
        self._path = Path(path)
        self._seed = seed
        self._ticks: list[dict[str, Any]] = []

    @property
    def path(self) -> Path:
        return self._path

    def __len__(self) -> int:
        return len(self._ticks)

    def record_tick(self, result: TickResult, agent: SelfState) -> None:
        entry: dict[str, Any] = {
            "tick": result.tick,
            "outcome": result.outcome.name,
            "agent": [agent.x, agent.y],
            "target": None,
            "exploration": None,
        }
        if result.decision is not None:
            d = result.decision
            entry["target"] = {
                "id": d.target.id,
                "kind": d.target.kind,
                "score": d.score,
                "path": [[p.x, p.y] for p in d.path],
            }
        if result.exploration is not None:
            a = result.exploration
            entry["exploration"] = {
                "destination": [a.destination.x, a.destination.y],
                "path": [[p.x, p.y] for p in a.path],
                "fallback": a.fallback,
            }
        self._ticks.append(entry)

    def flush(self) -> None:
        """Write accumulated data to disk."""
        record = {
            "version": "1.0",
            "seed": self._seed,
            "total_ticks": len(self._ticks),
            "ticks": self._ticks,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(record, indent=2), encoding="utf-8")
        logger.info("Decisions saved to %s (%d ticks)", self._path, len(self._ticks))
