"""AI layer: safety, blocking, pathfinding, scoring, selection and exploration."""

from huntcore.ai.engine import DecisionEngine, TickResult
from huntcore.ai.heatmap import ExplorationHeatmap, Explorer
from huntcore.ai.pathfinding import GridPathfinder
from huntcore.ai.safety import ThreatSafetyEvaluator

__all__ = [
    "DecisionEngine",
    "ExplorationHeatmap",
    "Explorer",
    "GridPathfinder",
    "ThreatSafetyEvaluator",
    "TickResult",
]
