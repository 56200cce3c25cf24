"""Optional JSON persistence for the exploration heatmap."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from huntcore.ai.heatmap import ExplorationHeatmap

if TYPE_CHECKING:
    from huntcore.config import EngineConfig

logger = logging.getLogger(__name__)


def save_heatmap(heatmap: ExplorationHeatmap, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"cells": heatmap.to_records()}, indent=2), encoding="utf-8")
    logger.info("Heatmap saved to %s (%d cells)", path, len(heatmap))
    return path


def load_heatmap(config: EngineConfig, path: str | Path) -> ExplorationHeatmap:
    """Load a heatmap; a missing or unreadable file yields an empty one."""
    path = Path(path)
    if not path.exists():
        return ExplorationHeatmap(config)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        records = data.get("cells", []) if isinstance(data, dict) else data
        heatmap = ExplorationHeatmap.from_records(config, records)
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring unreadable heatmap file %s: %s", path, exc)
        return ExplorationHeatmap(config)
    logger.info("Heatmap loaded from %s (%d cells)", path, len(heatmap))
    return heatmap
